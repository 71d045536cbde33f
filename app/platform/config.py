from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Meta Leads API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None  # defaults to ./logs

    # ── Database ────────────────────────────────
    DATABASE_URL: str

    # ── Meta (Facebook / Instagram / WhatsApp) ──
    META_APP_SECRET: Optional[str] = None
    META_APP_VERIFY_TOKEN: Optional[str] = None
    META_GRAPH_API_URL: str = "https://graph.facebook.com"
    META_GRAPH_API_VERSION: str = "v19.0"
    META_API_TIMEOUT: float = 10.0  # seconds, per outbound call
    META_PAGE_SUBSCRIBED_FIELDS: str = "leadgen,messages"
    PAGE_TOKEN_TTL_MINUTES: int = 60

    # ── JWT / Auth ──────────────────────────────
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def meta_graph_base_url(self) -> str:
        return f"{self.META_GRAPH_API_URL.rstrip('/')}/{self.META_GRAPH_API_VERSION}"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
