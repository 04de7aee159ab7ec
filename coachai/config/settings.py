"""
Configuration Settings.
"""

from datetime import date
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "Coach.ai"
    app_version: str = "1.0.0"
    debug: bool = True

    # Storage
    storage_type: str = "local"  # local, memory
    local_storage_path: str = "./data"

    # Local identity (the client holds a single profile)
    profile_id: str = "athlete@coach.ai"
    default_name: str = "Athlete"
    default_avatar: str = ""
    default_dob: date = date(1990, 1, 1)
    default_weight_kg: float = 75.0

    # Video analysis inference service
    analysis_provider: str = "http"
    analysis_api_key: Optional[str] = None
    analysis_base_url: str = "http://localhost:8500/v1"
    analysis_model: Optional[str] = None  # uses service default if not set
    analysis_timeout: float = 300.0

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/coachai.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
