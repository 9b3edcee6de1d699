"""
Application configuration management using Pydantic Settings.
"""
from pathlib import Path
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "BlueSky Store Locator"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Sessions
    SESSION_COOKIE_NAME: str = "session_id"
    SESSION_EXPIRY_SECONDS: int = 7200  # 2 hours
    REDIS_URL: str = "redis://localhost:6379/0"

    # Demo accounts (username, password, role)
    DEMO_USERS: List[Dict[str, str]] = [
        {"username": "admin", "password": "a", "role": "admin"},
        {"username": "manager", "password": "m", "role": "manager"},
        {"username": "store", "password": "s", "role": "store"},
    ]

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Mall dataset
    DATA_FILE: str = str(BACKEND_DIR / "data" / "malls.json")
    STORE_JITTER_DEGREES: float = 0.005


settings = Settings()
