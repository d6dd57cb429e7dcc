"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from zenflow.config import ZenflowConfig
from zenflow.database.engine import init_db


# ---------------------------------------------------------------------------
# Make JSONB columns work in SQLite for testing.
# SQLite doesn't support JSONB natively, but SQLAlchemy's JSON type works.
# ---------------------------------------------------------------------------
@compiles(PG_JSONB, "sqlite")
def _compile_jsonb_as_text(type_, compiler, **kw):
    return "TEXT"


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine with all tables and zeroed counters.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used by ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Provide a session that rolls back after each test."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def test_config() -> ZenflowConfig:
    return ZenflowConfig(db_timeout_seconds=5.0, geo_lookup_enabled=False)


@pytest.fixture
def client(db_engine, test_config):
    """FastAPI TestClient wired to the in-memory engine.

    The client is not entered as a context manager, so the lifespan hook
    (which would build a real engine from DATABASE_URL) never runs.
    """
    from fastapi.testclient import TestClient

    from zenflow.api.deps import get_config, get_engine
    from zenflow.api.main import app

    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_config] = lambda: test_config
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def dev_mode(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")


@pytest.fixture
def prod_mode(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
