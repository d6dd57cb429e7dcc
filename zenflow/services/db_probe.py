"""
zenflow.services.db_probe — Database connectivity check
========================================================
"""

from __future__ import annotations

from sqlalchemy import Engine, text


def ping(engine: Engine) -> dict:
    """Run ``SELECT 1`` and describe the result.

    Connection errors propagate; the route turns them into a 500.
    """
    with engine.connect() as conn:
        ok = conn.execute(text("SELECT 1")).scalar() == 1
    return {
        "status": "success",
        "message": "Connected to database!",
        "dbName": engine.url.database,
        "ping": "successful" if ok else "failed",
    }
