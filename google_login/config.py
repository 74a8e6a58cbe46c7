"""
Configuration management for google-login.

Uses pydantic-settings for environment variable management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # App
    APP_NAME: str = "GoogleLogin"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Google OAuth client (required by Google.from_settings)
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_CLIENT_SECRET: Optional[str] = None
    GOOGLE_REDIRECT_URI: Optional[str] = None
    GOOGLE_HTTP_TIMEOUT: float = 10.0

    # Signs the session cookie that carries the OAuth state
    SESSION_SECRET_KEY: str = "change-me-in-production-use-strong-secret"

    # Frontend
    FRONTEND_URL: str = "http://localhost:3000"

    # Observability
    SENTRY_DSN: Optional[str] = None


# Global settings instance
settings = Settings()
