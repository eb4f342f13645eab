from fastapi import APIRouter, Depends

from api.deps import get_app_settings, get_store, session_state
from app.settings import Settings
from domain.schemas import JobDescriptionBody, SessionStateResponse
from domain.session import SessionStore

router = APIRouter()


@router.put("/sessions/{session_id}/job-description", response_model=SessionStateResponse)
async def set_job_description(session_id: str, body: JobDescriptionBody,
                              store: SessionStore = Depends(get_store),
                              settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    session.job_description.set(body.text)
    return session_state(session, settings)


@router.delete("/sessions/{session_id}/job-description", response_model=SessionStateResponse)
async def clear_job_description(session_id: str,
                                store: SessionStore = Depends(get_store),
                                settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    session.job_description.clear()
    return session_state(session, settings)
