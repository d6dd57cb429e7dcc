"""
zenflow.database.models — SQLAlchemy 2.0 Data Models
=====================================================

Tables:
- feedback_counters — One like/dislike pair per meditation style
- votes             — One row per (client IP, meditation style) with device,
                      geo and session metadata
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all ZenFlow ORM models."""


# ---------------------------------------------------------------------------
# FeedbackCounter: the "feedback document", one row per category
# ---------------------------------------------------------------------------
class FeedbackCounter(Base):
    """Aggregate likes/dislikes for one meditation style.

    The rows for all styles together form the feedback document returned by
    ``GET /api/feedback``.  Counts only move through atomic
    ``UPDATE … SET likes = likes + 1`` statements.
    """
    __tablename__ = "feedback_counters"

    category: Mapped[str] = mapped_column(String(50), primary_key=True)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislikes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_feedback_likes_non_negative"),
        CheckConstraint("dislikes >= 0", name="ck_feedback_dislikes_non_negative"),
    )

    def to_dict(self) -> dict[str, int]:
        return {"likes": self.likes, "dislikes": self.dislikes}

    def __repr__(self) -> str:
        return (
            f"<FeedbackCounter {self.category!r} "
            f"likes={self.likes} dislikes={self.dislikes}>"
        )


# ---------------------------------------------------------------------------
# VoteRecord: who voted for what, with request context
# ---------------------------------------------------------------------------
class VoteRecord(Base):
    __tablename__ = "votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_ip: Mapped[str] = mapped_column(String(64), nullable=False)
    meditation_type: Mapped[str] = mapped_column(String(50), nullable=False)
    is_like: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Device (parsed from User-Agent)
    device_type: Mapped[str | None] = mapped_column(String(20), default=None)
    browser: Mapped[str | None] = mapped_column(String(50), default=None)
    os: Mapped[str | None] = mapped_column(String(50), default=None)

    # Geo (optional lookup)
    country: Mapped[str | None] = mapped_column(String(100), default=None)
    region: Mapped[str | None] = mapped_column(String(100), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)

    # Referrer, language, session id, screen size, timezone …
    session_meta: Mapped[dict | None] = mapped_column("session", JSONB, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_ip", "meditation_type", name="uq_votes_ip_type"),
        Index("ix_votes_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<VoteRecord id={self.id} ip={self.user_ip!r} "
            f"type={self.meditation_type!r} like={self.is_like}>"
        )
