"""
zenflow.api.routes.feedback — Like/dislike counters
====================================================

``GET  /api/feedback`` — the counter document.
``POST /api/feedback`` — ``{"typeName": "...", "isLike": true}``; records
one vote per client IP and style, returns the updated document.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError
from sqlalchemy import Engine

from zenflow.api.deps import get_config, get_engine
from zenflow.config import ZenflowConfig
from zenflow.database.engine import run_db, run_db_with_timeout
from zenflow.errors import DuplicateVoteError, UnknownMeditationTypeError
from zenflow.services import feedback_service
from zenflow.services.client_context import build_vote_context

logger = logging.getLogger(__name__)
router = APIRouter(tags=["feedback"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class FeedbackVote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type_name: str = Field(alias="typeName", min_length=1)
    is_like: StrictBool = Field(alias="isLike")

    # Optional client-side session details, stored with the vote
    session_id: str | None = Field(default=None, alias="sessionId", max_length=100)
    screen: str | None = Field(default=None, max_length=32)
    timezone: str | None = Field(default=None, max_length=64)

    def session_extra(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "screen": self.screen,
            "timezone": self.timezone,
        }


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ---------------------------------------------------------------------------
# GET /feedback
# ---------------------------------------------------------------------------
@router.get("/feedback")
async def read_feedback(
    engine: Engine = Depends(get_engine),
    cfg: ZenflowConfig = Depends(get_config),
):
    """Current like/dislike counts for every meditation style."""
    try:
        return await run_db_with_timeout(
            cfg.db_timeout_seconds, feedback_service.get_feedback, engine
        )
    except Exception:
        logger.exception("Error fetching feedback")
        return _error(500, "Failed to fetch feedback")


# ---------------------------------------------------------------------------
# POST /feedback
# ---------------------------------------------------------------------------
@router.post("/feedback")
async def submit_feedback(
    request: Request,
    engine: Engine = Depends(get_engine),
    cfg: ZenflowConfig = Depends(get_config),
):
    """Record a like or dislike and return the updated counts.

    The write runs without the request ceiling: once the transaction has
    started it either commits or fails on the server-side statement
    timeout, so a 500 never hides a vote that was stored.
    """
    try:
        vote = FeedbackVote.model_validate(await request.json())
    except (ValidationError, ValueError):
        return _error(400, "Invalid feedback payload")

    try:
        context = await build_vote_context(
            request.headers,
            request.client.host if request.client else None,
            cfg,
            extra_session=vote.session_extra(),
        )
        return await run_db(
            feedback_service.record_vote,
            engine,
            vote.type_name,
            vote.is_like,
            context,
        )
    except UnknownMeditationTypeError as exc:
        return _error(400, str(exc))
    except DuplicateVoteError as exc:
        return _error(409, str(exc))
    except Exception:
        logger.exception("Error updating feedback")
        return _error(500, "Failed to update feedback")
