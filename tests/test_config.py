"""
tests/test_config.py — Configuration & Engine Bootstrap Tests
==============================================================
"""

from __future__ import annotations

import asyncio
import time

import pytest

from zenflow.config import ZenflowConfig, is_development, load_config
from zenflow.database.engine import create_db_engine, run_db_with_timeout


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nope.yaml")
        assert cfg == ZenflowConfig()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "app_name: Calm\n"
            "db_timeout_seconds: 2.5\n"
            "analytics_recent_limit: 25\n"
            "geo_lookup_enabled: true\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.app_name == "Calm"
        assert cfg.db_timeout_seconds == 2.5
        assert cfg.analytics_recent_limit == 25
        assert cfg.geo_lookup_enabled is True
        assert cfg.tagline == ZenflowConfig().tagline

    def test_env_var_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "other.yaml"
        path.write_text("quote_display_seconds: 9\n", encoding="utf-8")
        monkeypatch.setenv("ZENFLOW_CONFIG", str(path))
        assert load_config().quote_display_seconds == 9

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == ZenflowConfig()

    @pytest.mark.parametrize(
        "body, key",
        [
            ("db_timeout_seconds: soon\n", "db_timeout_seconds"),
            ("db_timeout_seconds: 0\n", "db_timeout_seconds"),
            ("analytics_recent_limit: -1\n", "analytics_recent_limit"),
            ("analytics_recent_limit: true\n", "analytics_recent_limit"),
        ],
    )
    def test_bad_values_name_the_key(self, tmp_path, body, key):
        path = tmp_path / "config.yaml"
        path.write_text(body, encoding="utf-8")
        with pytest.raises(ValueError, match=key):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)


class TestEnvironment:
    @pytest.mark.parametrize("value, expected", [
        ("development", True), ("Development ", True), ("production", False), ("test", False),
    ])
    def test_is_development(self, monkeypatch, value, expected):
        monkeypatch.setenv("APP_ENV", value)
        assert is_development() is expected

    def test_defaults_to_production(self, monkeypatch):
        monkeypatch.delenv("APP_ENV", raising=False)
        assert is_development() is False


class TestEngine:
    def test_missing_url_raises(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError, match="DATABASE_URL is not set"):
            create_db_engine()

    def test_sqlite_url_accepted(self, tmp_path):
        engine = create_db_engine(f"sqlite:///{tmp_path / 'zen.db'}")
        assert engine.dialect.name == "sqlite"
        engine.dispose()

    def test_timeout_raises(self):
        with pytest.raises(TimeoutError):
            asyncio.run(run_db_with_timeout(0.05, time.sleep, 0.5))

    def test_no_timeout_passes_through(self):
        assert asyncio.run(run_db_with_timeout(None, sum, [1, 2, 3])) == 6
