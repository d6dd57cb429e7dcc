"""
zenflow.api.routes.dev — Development-only endpoints
====================================================

Every route here depends on :func:`require_development`, so outside
``APP_ENV=development`` they all answer 403.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy import Engine

from zenflow.api.deps import get_config, get_engine, require_development
from zenflow.config import ZenflowConfig
from zenflow.database.engine import run_db_with_timeout
from zenflow.services import analytics_service, feedback_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dev"], dependencies=[Depends(require_development)])


@router.post("/clear-votes")
async def clear_votes(
    engine: Engine = Depends(get_engine),
    cfg: ZenflowConfig = Depends(get_config),
):
    """Reset all counters to zero and delete every vote record."""
    try:
        result = await run_db_with_timeout(
            cfg.db_timeout_seconds, feedback_service.clear_votes, engine
        )
    except Exception:
        logger.exception("Failed to clear votes")
        return JSONResponse(status_code=500, content={"error": "Failed to clear votes"})

    return {
        "message": "Votes cleared successfully",
        "votesDeleted": result.votes_deleted,
    }


@router.get("/analytics", response_class=HTMLResponse)
async def analytics_dashboard(
    engine: Engine = Depends(get_engine),
    cfg: ZenflowConfig = Depends(get_config),
):
    """HTML dashboard summarising recorded votes."""
    try:
        snapshot = await run_db_with_timeout(
            cfg.db_timeout_seconds,
            analytics_service.collect_analytics,
            engine,
            cfg.analytics_recent_limit,
        )
    except Exception:
        logger.exception("Failed to fetch analytics")
        return HTMLResponse(analytics_service.ERROR_PAGE, status_code=500)

    return HTMLResponse(analytics_service.render_dashboard(snapshot, title=cfg.app_name))
