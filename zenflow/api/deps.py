"""
zenflow.api.deps — FastAPI dependency injection
================================================
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine

from zenflow.config import ZenflowConfig, is_development, load_config
from zenflow.database.engine import create_db_engine

DEV_ONLY_MESSAGE = "This endpoint is only available in development mode"


class DevelopmentOnlyError(Exception):
    """Raised by :func:`require_development` outside development mode."""


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> ZenflowConfig:
    return load_config()


def require_development() -> None:
    """Gate an endpoint behind ``APP_ENV=development`` (403 otherwise)."""
    if not is_development():
        raise DevelopmentOnlyError(DEV_ONLY_MESSAGE)
