"""
config.py
=========
Runtime settings for the AyurWell backend.
Values come from environment variables prefixed with AYURWELL_ (or a local .env).
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Minimal runtime settings for the wellness backend."""

    model_config = SettingsConfigDict(env_prefix="AYURWELL_", env_file=".env", extra="ignore")

    # Database path (local SQLite file)
    db_path: str = "data/ayurwell.db"

    # Frontend origins allowed by CORS
    cors_origins: List[str] = ["http://localhost:8081", "http://localhost:19006"]

    # Pushover (optional push notifications for doctors)
    pushover_token: Optional[str] = None

    # Seed the directory with default practitioners when empty
    seed_doctors: bool = True

    log_level: str = "INFO"

    # Bind address for `ayurwell-server`
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
