"""
zenflow.api.main — FastAPI application entry point
===================================================

Run with::

    uvicorn zenflow.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

from zenflow import __version__  # noqa: E402
from zenflow.api.deps import DevelopmentOnlyError, get_engine  # noqa: E402
from zenflow.api.routes.dev import router as dev_router  # noqa: E402
from zenflow.api.routes.feedback import router as feedback_router  # noqa: E402
from zenflow.api.routes.public import router as public_router  # noqa: E402
from zenflow.database.engine import init_db, run_db  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — create tables and seed counters."""
    engine = get_engine()
    await run_db(init_db, engine)
    logger.info("ZenFlow API started — engine ready (%s)", engine.url.database)
    yield
    logger.info("ZenFlow API shutting down")
    engine.dispose()


app = FastAPI(
    title="ZenFlow API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DevelopmentOnlyError)
async def _development_only(request: Request, exc: DevelopmentOnlyError):
    return JSONResponse(status_code=403, content={"error": str(exc)})


# Mount routers
app.include_router(feedback_router, prefix="/api")
app.include_router(dev_router, prefix="/api")
app.include_router(public_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
