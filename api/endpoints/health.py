from fastapi import APIRouter, Depends

from api.deps import get_app_settings, get_store, server_key_configured
from app.settings import Settings
from domain.session import SessionStore

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_app_settings),
           store: SessionStore = Depends(get_store)):
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENV,
        "server_llm_key": server_key_configured(settings),
        "active_sessions": len(store),
    }
