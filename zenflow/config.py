"""
zenflow.config — YAML Configuration Loader
===========================================

**Why this file exists:**
Secrets and deployment switches (``DATABASE_URL``, ``APP_ENV``) come from
the environment / ``.env``.  Everything else that an operator may want to
tune without a code change lives in ``config.yaml`` and is read here into
an immutable :class:`ZenflowConfig`.

Every key is optional; a missing file yields the defaults below.

Usage::

    from zenflow.config import load_config

    cfg = load_config()          # reads $ZENFLOW_CONFIG or ./config.yaml
    print(cfg.app_name)          # "ZenFlow"
    print(cfg.db_timeout_seconds)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ZenflowConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    app_name: str = "ZenFlow"
    tagline: str = "Find your perfect state of flow"

    # Database
    db_timeout_seconds: float = 10.0  # Per-call ceiling for API handlers

    # Analytics dashboard
    analytics_recent_limit: int = 100

    # Geo enrichment of vote records
    geo_lookup_enabled: bool = False
    geo_lookup_url: str = "http://ip-api.com/json/{ip}"
    geo_lookup_timeout_seconds: float = 3.0

    # Quote screen before the timer opens
    quote_display_seconds: int = 5


def is_development() -> bool:
    """``True`` when ``APP_ENV`` is ``development`` (dev-only endpoints)."""
    return os.getenv("APP_ENV", "production").strip().lower() == "development"


def _as_positive_float(raw: dict, key: str, default: float) -> float:
    value = raw.get(key, default)
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"config key {key!r} must be a number, got {value!r}") from None
    if result <= 0:
        raise ValueError(f"config key {key!r} must be positive, got {value!r}")
    return result


def _as_positive_int(raw: dict, key: str, default: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"config key {key!r} must be an integer, got {value!r}")
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"config key {key!r} must be an integer, got {value!r}") from None
    if result <= 0:
        raise ValueError(f"config key {key!r} must be positive, got {value!r}")
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> ZenflowConfig:
    """Read *path* and return a :class:`ZenflowConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  Defaults to
        ``$ZENFLOW_CONFIG`` or ``config.yaml`` in the working directory.
        A missing file is not an error — all defaults apply.

    Raises
    ------
    ValueError
        If a key holds a value of the wrong type or range.
    """
    config_path = Path(path or os.getenv("ZENFLOW_CONFIG") or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        return ZenflowConfig()

    with open(config_path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a YAML mapping")

    defaults = ZenflowConfig()
    return ZenflowConfig(
        app_name=str(raw.get("app_name", defaults.app_name)),
        tagline=str(raw.get("tagline", defaults.tagline)),
        db_timeout_seconds=_as_positive_float(
            raw, "db_timeout_seconds", defaults.db_timeout_seconds
        ),
        analytics_recent_limit=_as_positive_int(
            raw, "analytics_recent_limit", defaults.analytics_recent_limit
        ),
        geo_lookup_enabled=bool(raw.get("geo_lookup_enabled", defaults.geo_lookup_enabled)),
        geo_lookup_url=str(raw.get("geo_lookup_url", defaults.geo_lookup_url)),
        geo_lookup_timeout_seconds=_as_positive_float(
            raw, "geo_lookup_timeout_seconds", defaults.geo_lookup_timeout_seconds
        ),
        quote_display_seconds=_as_positive_int(
            raw, "quote_display_seconds", defaults.quote_display_seconds
        ),
    )
