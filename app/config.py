"""
Configuration module for the PhysioCare backend.
Loads settings from .env file and environment variables.
"""

import os
from pathlib import Path
from typing import List

# Try to load .env file
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


class Settings:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.getenv("APP_NAME", "PhysioCare")
        self.api_version: str = os.getenv("API_VERSION", "v1")
        self.debug: bool = os.getenv("DEBUG", "true").lower() in ("true", "1", "yes")
        self.environment: str = os.getenv("ENVIRONMENT", "development")

        # Firebase
        self.firebase_credentials_path: str = os.getenv("FIREBASE_CREDENTIALS_PATH", "")

        # Admin bootstrap: this uid is an admin even without an admins/{uid} document
        self.bootstrap_admin_uid: str = os.getenv("BOOTSTRAP_ADMIN_UID", "")

        # Groq
        self.groq_api_key: str = os.getenv("GROQ_API_KEY", "")
        self.groq_model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
        self.groq_timeout: int = int(os.getenv("GROQ_TIMEOUT", "30"))

        # CORS
        cors_raw = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins: List[str] = [s.strip() for s in cors_raw.split(",")]

        # Number of permission errors kept for the diagnostics endpoint
        self.diagnostics_buffer_size: int = int(os.getenv("DIAGNOSTICS_BUFFER_SIZE", "200"))


_settings = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
