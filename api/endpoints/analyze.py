from typing import Optional

import httpx
from fastapi import APIRouter, Depends

from api.deps import get_app_settings, get_llm_transport, get_store, session_state
from app.settings import Settings
from domain.schemas import AnalyzeBody, SessionStateResponse
from domain.services.analysis_pipeline import run_analysis
from domain.session import SessionStore

router = APIRouter()


@router.post("/sessions/{session_id}/analyze", response_model=SessionStateResponse)
async def analyze(session_id: str,
                  body: Optional[AnalyzeBody] = None,
                  store: SessionStore = Depends(get_store),
                  settings: Settings = Depends(get_app_settings),
                  transport: Optional[httpx.AsyncBaseTransport] = Depends(get_llm_transport)) -> SessionStateResponse:
    session = store.get(session_id)
    body = body or AnalyzeBody()
    await run_analysis(
        session,
        settings,
        credential=(body.api_key or "").strip() or None,
        summarize_cv=body.summarize_cv,
        transport=transport,
    )
    return session_state(session, settings)
