import os
from pydantic import BaseModel
from functools import lru_cache
from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    APP_NAME: str = os.getenv("APP_NAME", "CV-JD Matcher")
    ENV: str = os.getenv("ENV", "development")
    API_V1_PREFIX: str = os.getenv("API_V1_PREFIX", "/api/v1")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PIPELINE_LOG_FILE: str | None = os.getenv("PIPELINE_LOG_FILE") or None
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_CHAT_URL: str = os.getenv(
        "OPENAI_CHAT_URL", "https://api.openai.com/v1/chat/completions")
    OPENROUTER_API_KEY: str | None = os.getenv("OPENROUTER_API_KEY") or None
    OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
    OPENROUTER_CHAT_URL: str = os.getenv(
        "OPENROUTER_CHAT_URL", "https://openrouter.ai/api/v1/chat/completions")
    # provider used when the caller brings their own key
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "openai")
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.3"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "1500"))
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))
    SUMMARIZE_CV: bool = _env_bool("SUMMARIZE_CV", False)
    MAX_UPLOAD_MB: int = int(os.getenv("MAX_UPLOAD_MB", "10"))
    MAX_CV_CHARS: int = int(os.getenv("MAX_CV_CHARS", "12000"))
    # idle sessions are dropped after this; 0 keeps them until deleted
    SESSION_TTL_MINUTES: float = float(os.getenv("SESSION_TTL_MINUTES", "60"))

@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
