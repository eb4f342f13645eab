from fastapi import APIRouter, Depends, Response

from api.deps import get_app_settings, get_store, session_state
from app.settings import Settings
from domain.schemas import CredentialBody, SessionStateResponse
from domain.session import SessionStore

router = APIRouter()


@router.post("/sessions", response_model=SessionStateResponse, status_code=201)
async def create_session(store: SessionStore = Depends(get_store),
                         settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    return session_state(store.create(), settings)


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str,
                      store: SessionStore = Depends(get_store),
                      settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    return session_state(store.get(session_id), settings)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)) -> Response:
    store.discard(session_id)
    return Response(status_code=204)


@router.put("/sessions/{session_id}/credential", response_model=SessionStateResponse)
async def set_credential(session_id: str, body: CredentialBody,
                         store: SessionStore = Depends(get_store),
                         settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    session.credential = body.api_key.strip()
    return session_state(session, settings)


@router.delete("/sessions/{session_id}/credential", response_model=SessionStateResponse)
async def forget_credential(session_id: str,
                            store: SessionStore = Depends(get_store),
                            settings: Settings = Depends(get_app_settings)) -> SessionStateResponse:
    session = store.get(session_id)
    session.credential = None
    return session_state(session, settings)
