"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of app/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    database_url: str = "sqlite:///./waste_wizard.db"
    # HARDWARE_API_KEY in .env: shared secret sent by devices as X-API-Key. Empty = hardware endpoint rejects all calls.
    hardware_api_key: str = ""
    # Extra CORS origins for the dashboard frontend (comma-separated)
    cors_origins: str = ""
    log_level: str = "INFO"
    scheduler_enabled: bool = True
    analytics_rollup_hour: int = 23
    analytics_rollup_minute: int = 55

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("hardware_api_key", "cors_origins", mode="after")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()


settings = Settings()
