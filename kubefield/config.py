"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Validation settings loaded from environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    LOG_FIELD_TIMINGS: bool = True

    # Cron validator: include the parser's reason in the error message
    CRON_DETAILED_ERRORS: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "KUBEFIELD_"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
