from typing import Optional

import httpx
from fastapi import Request

from app.settings import Settings
from domain.presenter import build_results_view
from domain.schemas import FileState, JobDescriptionState, SessionStateResponse
from domain.intake import EXAMPLE_JOB_DESCRIPTION
from domain.session import AnalysisSession, SessionStore


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_transport(request: Request) -> Optional[httpx.AsyncBaseTransport]:
    return getattr(request.app.state, "llm_transport", None)


def server_key_configured(settings: Settings) -> bool:
    return bool(settings.OPENAI_API_KEY or settings.OPENROUTER_API_KEY)


def session_state(session: AnalysisSession, settings: Settings) -> SessionStateResponse:
    uploaded = session.cv.uploaded
    return SessionStateResponse(
        id=session.id,
        stage=session.stage,
        file=FileState(
            status=session.cv.status,
            name=uploaded.name if uploaded else None,
            size_bytes=uploaded.size_bytes if uploaded else None,
            size_mb=uploaded.size_mb if uploaded else None,
            extracted_chars=len(session.cv.text),
            error=session.cv.error,
            hint=f"PDF files only, max {settings.MAX_UPLOAD_MB}MB",
        ),
        job_description=JobDescriptionState(
            length=session.job_description.length,
            ready=session.job_description.ready,
            placeholder=EXAMPLE_JOB_DESCRIPTION,
        ),
        has_credential=bool(session.credential),
        can_analyze=session.can_analyze(server_key_configured(settings)),
        result=build_results_view(session.result) if session.result else None,
        last_error=session.last_error,
        notifications=session.drain_notifications(),
    )
