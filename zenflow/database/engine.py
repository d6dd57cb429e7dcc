"""
zenflow.database.engine — Database Connection & Async Helper
=============================================================

**Why this file exists:**
FastAPI handlers run on an ``asyncio`` event loop.  SQLAlchemy + psycopg2
is **synchronous** — calling the DB directly from an ``async def`` handler
would stall every other request until the query returns.

The bridge is the same one used everywhere in ZenFlow:

    1. The handler calls ``await run_db(some_function, engine, arg)``.
    2. ``run_db`` ships the synchronous function to a **thread pool** via
       ``asyncio.to_thread()``.
    3. The DB work happens on a background thread — the loop stays free.

``run_db_with_timeout`` adds a fixed ceiling on top so that a hung
database turns into a logged 500 instead of a hung request.

Usage::

    from zenflow.database.engine import create_db_engine, init_db, run_db

    engine = create_db_engine()          # reads DATABASE_URL from .env
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS + seed

    feedback = await run_db(get_feedback, engine)
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import contextmanager
from typing import ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from zenflow.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

DEFAULT_CONNECT_TIMEOUT_SECONDS = 10
DEFAULT_STATEMENT_TIMEOUT_MS = 45_000


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str | None = None) -> Engine:
    """Build a SQLAlchemy :class:`Engine` from ``DATABASE_URL``.

    PostgreSQL connections get a small pool sized for a single-page app:
    * ``pool_size=5`` — five persistent connections.
    * ``max_overflow=5`` — up to five extra under load.
    * ``pool_timeout=10`` — fail after 10 s if no connection is available.
    * ``connect_timeout=10`` and ``statement_timeout=45s`` server side.

    SQLite URLs (local development) skip the pool tuning.

    Raises
    ------
    RuntimeError
        If neither *url* nor ``DATABASE_URL`` is set.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not set.  "
            "Copy .env.example → .env and set a valid PostgreSQL URL."
        )

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(
            url,
            echo=False,        # Set True for SQL debugging
            pool_size=5,
            max_overflow=5,
            pool_pre_ping=True,   # Reconnect stale connections automatically
            pool_timeout=10,
            pool_recycle=3600,
            connect_args={
                "connect_timeout": DEFAULT_CONNECT_TIMEOUT_SECONDS,
                "options": f"-c statement_timeout={DEFAULT_STATEMENT_TIMEOUT_MS}",
            },
        )
    logger.info("Database engine created → %s", engine.url.render_as_string(hide_password=True))
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create all tables and seed the zeroed feedback counters.

    Safe to call on every startup.  In production the schema is managed by
    Alembic (``alembic upgrade head``); ``create_all`` stays as a safety
    net for dev/test databases.
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")

    from zenflow.database.seed import seed_feedback_counters

    seed_feedback_counters(engine)


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """Yield a :class:`Session` that auto-commits on success and rolls back
    on exception.
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Run a **synchronous** database function on a background thread.

    Under the hood it calls :func:`asyncio.to_thread`, which schedules
    *func* on the default ``ThreadPoolExecutor``.
    """
    return await asyncio.to_thread(func, *args, **kwargs)


async def run_db_with_timeout(
    timeout: float | None,
    func: Callable[P, T],
    *args: P.args,
    **kwargs: P.kwargs,
) -> T:
    """Like :func:`run_db` but give up after *timeout* seconds.

    ``None`` disables the ceiling.  Raises :class:`TimeoutError` on expiry;
    the worker thread is left to finish on its own.
    """
    if timeout is None:
        return await run_db(func, *args, **kwargs)
    return await asyncio.wait_for(run_db(func, *args, **kwargs), timeout=timeout)
