"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).

Engine tunables (thresholds, lexicon, gating rules) are *not* settings:
they live as versioned data objects in :mod:`app.asf` and are passed to
the scoring functions explicitly.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Adaptive Signal Fusion (ASF) wellness engine."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["ASF maintainers"]
    PROJECT_URL: str = ""

    DEBUG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # HTTP surface
    API_PREFIX: str = "/api/v1"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
