"""
tests/test_analytics.py — Analytics Dashboard Tests
====================================================
Aggregation over the ``votes`` table and the rendered HTML page.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from zenflow.database.models import VoteRecord
from zenflow.services.analytics_service import (
    AnalyticsSnapshot,
    RecentVote,
    collect_analytics,
    render_dashboard,
)


def _add_votes(engine, *rows: dict) -> None:
    with Session(engine) as session:
        for row in rows:
            session.add(VoteRecord(**row))
        session.commit()


class TestCollectAnalytics:
    def test_empty_database(self, db_engine):
        snap = collect_analytics(db_engine)
        assert snap.total_votes == 0
        assert snap.unique_users == 0
        assert snap.by_device == []
        assert snap.recent == []

    def test_totals_and_breakdowns(self, db_engine):
        _add_votes(
            db_engine,
            {"user_ip": "a", "meditation_type": "Breathing", "is_like": True,
             "device_type": "mobile", "browser": "Safari", "country": "Japan"},
            {"user_ip": "a", "meditation_type": "Body Scan", "is_like": False,
             "device_type": "mobile", "browser": "Safari", "country": "Japan"},
            {"user_ip": "b", "meditation_type": "Breathing", "is_like": True,
             "device_type": "desktop", "browser": "Firefox", "country": None},
        )

        snap = collect_analytics(db_engine)

        assert snap.total_votes == 3
        assert snap.unique_users == 2
        assert snap.by_device == [("mobile", 2), ("desktop", 1)]
        assert snap.by_country == [("Japan", 2), ("Unknown", 1)]
        assert snap.by_browser == [("Safari", 2), ("Firefox", 1)]
        assert snap.by_meditation_type == [("Breathing", 2), ("Body Scan", 1)]

    def test_recent_newest_first_and_limited(self, db_engine):
        _add_votes(
            db_engine,
            *[
                {"user_ip": f"ip{i}", "meditation_type": "Mindfulness", "is_like": True,
                 "created_at": datetime(2026, 1, 1, 12, i)}
                for i in range(5)
            ],
        )

        snap = collect_analytics(db_engine, recent_limit=3)

        assert len(snap.recent) == 3
        minutes = [v.created_at.minute for v in snap.recent]
        assert minutes == [4, 3, 2]


class TestRenderDashboard:
    def test_contains_sections(self):
        snap = AnalyticsSnapshot(
            total_votes=2,
            unique_users=1,
            by_device=[("mobile", 2)],
            by_meditation_type=[("Breathing", 2)],
            recent=[
                RecentVote(datetime(2026, 3, 4, 5, 6, 7), "Breathing", True, None, "mobile", None),
                RecentVote(None, "Breathing", False, "Peru", "mobile", "Chrome"),
            ],
        )

        page = render_dashboard(snap, title="ZenFlow")

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>ZenFlow Analytics Dashboard</title>" in page
        assert "Total Votes: 2" in page
        assert "Unique Users: 1" in page
        for heading in ("Device Types", "Countries", "Browsers", "Meditation Types", "Recent Votes"):
            assert heading in page
        assert "2026-03-04 05:06:07" in page
        assert "\U0001f44d" in page and "\U0001f44e" in page
        assert "Peru" in page

    def test_escapes_values(self):
        snap = AnalyticsSnapshot(
            total_votes=1,
            by_browser=[("<script>alert(1)</script>", 1)],
        )
        page = render_dashboard(snap)
        assert "<script>alert(1)</script>" not in page
        assert "&lt;script&gt;" in page
