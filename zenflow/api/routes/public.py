"""
zenflow.api.routes.public — Catalogue, quotes & diagnostics
============================================================
"""

from __future__ import annotations

import logging
import random

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from zenflow.api.deps import get_config, get_engine
from zenflow.config import ZenflowConfig
from zenflow.constants import (
    DEFAULT_VOLUME,
    MAX_CUSTOM_MINUTES,
    MEDITATION_TYPES,
    MIN_CUSTOM_MINUTES,
    QUOTES,
    TIME_PRESETS,
)
from zenflow.database.engine import run_db_with_timeout
from zenflow.services.db_probe import ping

logger = logging.getLogger(__name__)
router = APIRouter(tags=["public"])


# ---------------------------------------------------------------------------
# GET /meditations
# ---------------------------------------------------------------------------
@router.get("/meditations")
def get_meditations(cfg: ZenflowConfig = Depends(get_config)):
    """Meditation styles and timer presets for the timer screen."""
    return {
        "title": cfg.app_name,
        "tagline": cfg.tagline,
        "types": [t.to_dict() for t in MEDITATION_TYPES],
        "times": [{"label": p.label, "seconds": p.seconds} for p in TIME_PRESETS],
        "defaultVolume": DEFAULT_VOLUME,
        "customMinutes": {"min": MIN_CUSTOM_MINUTES, "max": MAX_CUSTOM_MINUTES},
    }


# ---------------------------------------------------------------------------
# GET /quote
# ---------------------------------------------------------------------------
@router.get("/quote")
def get_quote(cfg: ZenflowConfig = Depends(get_config)):
    """A random quote for the transition screen before the timer."""
    quote = random.choice(QUOTES)
    return {**quote, "displaySeconds": cfg.quote_display_seconds, "next": "/meditate"}


# ---------------------------------------------------------------------------
# GET /test-db
# ---------------------------------------------------------------------------
@router.get("/test-db")
async def test_db(
    engine: Engine = Depends(get_engine),
    cfg: ZenflowConfig = Depends(get_config),
):
    """Round-trip a trivial query to prove the database is reachable."""
    try:
        return await run_db_with_timeout(cfg.db_timeout_seconds, ping, engine)
    except Exception as exc:
        logger.exception("Database connection error")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "Failed to connect to database",
                "error": str(exc) or type(exc).__name__,
            },
        )
