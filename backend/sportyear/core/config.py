"""
Application configuration.
Values loaded from environment variables or a local .env file.

Only ambient concerns live here. Pipeline behavior is configured through
the explicit settings objects in sportyear.models.settings.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Analytics Debug Logging - logs every pipeline step with its inputs/outputs sizes
    ANALYTICS_DEBUG_LOG: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
