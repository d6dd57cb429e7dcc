"""
zenflow.database.seed — Feedback Counter Seeder
================================================

Ensures one zeroed ``feedback_counters`` row exists per meditation style so
reads and atomic increments always find their target row.

Idempotent — only inserts categories that don't already exist.  Existing
counts are never overwritten.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zenflow.constants import MEDITATION_TYPE_NAMES
from zenflow.database.engine import get_session
from zenflow.database.models import FeedbackCounter

logger = logging.getLogger(__name__)


def ensure_feedback_counters(session: Session) -> int:
    """Add missing counter rows to *session* (no commit).  Returns count added."""
    existing = set(session.scalars(select(FeedbackCounter.category)).all())
    added = 0
    for name in MEDITATION_TYPE_NAMES:
        if name not in existing:
            session.add(FeedbackCounter(category=name, likes=0, dislikes=0))
            added += 1
    if added:
        session.flush()
    return added


def seed_feedback_counters(engine: Engine) -> int:
    """Insert any missing counter rows.  Returns the number inserted."""
    try:
        with get_session(engine) as session:
            added = ensure_feedback_counters(session)
    except IntegrityError:
        # Another worker seeded concurrently; its rows are just as good.
        added = 0

    if added:
        logger.info("Seeded %d feedback counter(s)", added)
    return added
