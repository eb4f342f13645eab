from typing import Optional

import httpx
from fastapi import FastAPI
from app.settings import Settings, settings as default_settings
from app.logging import configure_logging
from app.error_handlers import attach_error_handlers
from api.router import api_router
from domain.session import SessionStore


def create_app(settings: Optional[Settings] = None,
               llm_transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings)
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.sessions = SessionStore(ttl_seconds=settings.SESSION_TTL_MINUTES * 60)
    app.state.llm_transport = llm_transport
    attach_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)
    return app


app = create_app()
