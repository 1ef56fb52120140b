# helpdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    APP_NAME: str = "Helpdesk Tickets"
    APP_DESC: str = "Support ticket tracker with FastAPI"
    APP_VERSION: str = "1.0.0"

    # Extra mount point for the ticket routes ("" disables it)
    API_PREFIX: str = "/api"

    # CORS origins, comma separated; unset allows all
    CORS_ORIGINS: str | None = None

    HOST: str = "127.0.0.1"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = False

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
