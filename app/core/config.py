from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, loaded from environment variables.
    """
    APP_NAME: str = "XIRR Analytics API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "API for calculating cross-validated XIRR over cash flows and analysis periods."
    LOG_LEVEL: str = "INFO"

    # Upper bound on windows solved in a single multi-period request
    MAX_PERIODS_PER_REQUEST: int = 100
    DEFAULT_TRAILING_HORIZONS: List[int] = [1, 5, 10]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache()
def get_settings():
    """Caches the settings object for efficient access."""
    return Settings()
