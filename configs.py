"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the app.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Search provider credentials
    GOOGLE_API_KEY: Optional[str] = None
    GOOGLE_SEARCH_ENGINE_ID: Optional[str] = None
    BRAVE_API_KEY: Optional[str] = None
    TAVILY_API_KEY: Optional[str] = None

    # Pipeline parameters
    SEARCH_RESULTS_PER_PROVIDER: int = 10
    HTTP_TIMEOUT_SECONDS: float = 15
    PRIORITY_SOURCE: str = "google"
    LOG_LEVEL: str = "INFO"

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings."""
    return Settings()
