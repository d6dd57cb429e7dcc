"""
zenflow.services.feedback_service — Feedback counters & vote records
=====================================================================

The three operations behind ``/api/feedback`` and ``/api/clear-votes``:

* :func:`get_feedback` — the counter document, every category present.
* :func:`record_vote` — insert the vote row and bump one counter, in one
  transaction.  The ``(user_ip, meditation_type)`` unique constraint turns
  a repeat vote into :class:`DuplicateVoteError` and rolls the increment
  back with it.
* :func:`clear_votes` — zero every counter and delete every vote row.

All functions are synchronous; API handlers call them through
:func:`zenflow.database.engine.run_db`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zenflow.constants import MEDITATION_TYPE_NAMES
from zenflow.database.engine import get_session
from zenflow.database.models import FeedbackCounter, VoteRecord
from zenflow.database.seed import ensure_feedback_counters
from zenflow.errors import DuplicateVoteError, UnknownMeditationTypeError
from zenflow.services.client_context import VoteContext

logger = logging.getLogger(__name__)

FeedbackDocument = dict[str, dict[str, int]]


@dataclass(frozen=True, slots=True)
class ClearResult:
    votes_deleted: int
    counters_reset: int


def _document(session: Session) -> FeedbackDocument:
    rows = {
        r.category: r for r in session.scalars(
            select(FeedbackCounter).where(FeedbackCounter.category.in_(MEDITATION_TYPE_NAMES))
        ).all()
    }
    # Catalogue order, not table order
    return {
        name: rows[name].to_dict() if name in rows else {"likes": 0, "dislikes": 0}
        for name in MEDITATION_TYPE_NAMES
    }


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_feedback(engine: Engine) -> FeedbackDocument:
    """Return ``{category: {"likes": n, "dislikes": m}}`` for every style.

    Missing counter rows are created at zero first.
    """
    with Session(engine) as session:
        if ensure_feedback_counters(session):
            session.commit()
        return _document(session)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------
def record_vote(
    engine: Engine,
    meditation_type: str,
    is_like: bool,
    context: VoteContext | None = None,
) -> FeedbackDocument:
    """Persist one vote and increment the matching counter.

    Raises
    ------
    UnknownMeditationTypeError
        *meditation_type* is not one of the catalogue styles.
    DuplicateVoteError
        This IP already voted for *meditation_type*; nothing is changed.
    """
    if meditation_type not in MEDITATION_TYPE_NAMES:
        raise UnknownMeditationTypeError(meditation_type)

    ctx = context or VoteContext()
    column = FeedbackCounter.likes if is_like else FeedbackCounter.dislikes

    with get_session(engine) as session:
        ensure_feedback_counters(session)
        session.add(VoteRecord(
            user_ip=ctx.user_ip,
            meditation_type=meditation_type,
            is_like=is_like,
            device_type=ctx.device.type,
            browser=ctx.device.browser,
            os=ctx.device.os,
            country=ctx.geo.country,
            region=ctx.geo.region,
            city=ctx.geo.city,
            session_meta=ctx.session or None,
        ))
        try:
            session.flush()
        except IntegrityError:
            logger.info(
                "Rejected duplicate vote from %s for %s", ctx.user_ip, meditation_type
            )
            raise DuplicateVoteError(ctx.user_ip, meditation_type) from None

        session.execute(
            update(FeedbackCounter)
            .where(FeedbackCounter.category == meditation_type)
            .values({column: column + 1})
        )
        document = _document(session)

    logger.info(
        "Recorded %s for %s from %s",
        "like" if is_like else "dislike", meditation_type, ctx.user_ip,
    )
    return document


def clear_votes(engine: Engine) -> ClearResult:
    """Reset every counter to zero and delete all vote records."""
    with get_session(engine) as session:
        ensure_feedback_counters(session)
        reset = session.execute(
            update(FeedbackCounter).values(likes=0, dislikes=0)
        ).rowcount
        deleted = session.execute(delete(VoteRecord)).rowcount

    logger.info("Cleared %d vote(s), reset %d counter(s)", deleted, reset)
    return ClearResult(votes_deleted=deleted or 0, counters_reset=reset or 0)
