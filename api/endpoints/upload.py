from fastapi import APIRouter, Depends, File, UploadFile

from api.deps import get_app_settings, get_store, session_state
from app.settings import Settings
from domain.schemas import SessionStateResponse
from domain.services.analysis_pipeline import ingest_cv, remove_cv
from domain.session import SessionStore

router = APIRouter()


@router.post("/sessions/{session_id}/cv", response_model=SessionStateResponse)
async def upload_cv(session_id: str,
                    cv: UploadFile = File(...),
                    store: SessionStore = Depends(get_store),
                    settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    content = await cv.read()
    await ingest_cv(session, cv.filename, cv.content_type, content)
    return session_state(session, settings)


@router.delete("/sessions/{session_id}/cv", response_model=SessionStateResponse)
async def delete_cv(session_id: str,
                    store: SessionStore = Depends(get_store),
                    settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    remove_cv(session)
    return session_state(session, settings)
