"""
zenflow.services.analytics_service — Development analytics dashboard
=====================================================================

Aggregates the ``votes`` table into an :class:`AnalyticsSnapshot` and
renders it as a single self-contained HTML page.  Served only in
development mode by ``GET /api/analytics``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from html import escape

from sqlalchemy import Engine, distinct, func, select
from sqlalchemy.orm import Session

from zenflow.database.models import VoteRecord

UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class RecentVote:
    created_at: datetime | None
    meditation_type: str
    is_like: bool
    country: str | None
    device_type: str | None
    browser: str | None


@dataclass(slots=True)
class AnalyticsSnapshot:
    total_votes: int = 0
    unique_users: int = 0
    by_device: list[tuple[str, int]] = field(default_factory=list)
    by_country: list[tuple[str, int]] = field(default_factory=list)
    by_browser: list[tuple[str, int]] = field(default_factory=list)
    by_meditation_type: list[tuple[str, int]] = field(default_factory=list)
    recent: list[RecentVote] = field(default_factory=list)


def _breakdown(session: Session, column) -> list[tuple[str, int]]:
    rows = session.execute(
        select(column, func.count().label("cnt")).group_by(column)
    ).all()
    counts: dict[str, int] = {}
    for key, cnt in rows:
        label = key or UNKNOWN
        counts[label] = counts.get(label, 0) + cnt
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def collect_analytics(engine: Engine, recent_limit: int = 100) -> AnalyticsSnapshot:
    """Gather totals, per-dimension breakdowns and the newest votes."""
    with Session(engine) as session:
        total = session.scalar(select(func.count()).select_from(VoteRecord)) or 0
        unique = session.scalar(select(func.count(distinct(VoteRecord.user_ip)))) or 0

        recent_rows = session.scalars(
            select(VoteRecord)
            .order_by(VoteRecord.created_at.desc(), VoteRecord.id.desc())
            .limit(recent_limit)
        ).all()

        return AnalyticsSnapshot(
            total_votes=total,
            unique_users=unique,
            by_device=_breakdown(session, VoteRecord.device_type),
            by_country=_breakdown(session, VoteRecord.country),
            by_browser=_breakdown(session, VoteRecord.browser),
            by_meditation_type=_breakdown(session, VoteRecord.meditation_type),
            recent=[
                RecentVote(
                    created_at=v.created_at,
                    meditation_type=v.meditation_type,
                    is_like=v.is_like,
                    country=v.country,
                    device_type=v.device_type,
                    browser=v.browser,
                )
                for v in recent_rows
            ],
        )


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------
_STYLE = """
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Oxygen, Ubuntu, Cantarell, sans-serif;
      max-width: 1200px;
      margin: 0 auto;
      padding: 20px;
      background: #f5f5f5;
    }
    .dashboard {
      display: grid;
      grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
      gap: 20px;
      margin-bottom: 40px;
    }
    .card {
      background: white;
      padding: 20px;
      border-radius: 8px;
      box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    h1 { color: #333; margin-bottom: 30px; }
    h2 { color: #444; margin-top: 0; }
    .stat { font-size: 24px; font-weight: bold; color: #2563eb; margin: 10px 0; }
    table { width: 100%; border-collapse: collapse; margin-top: 20px; }
    th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
    th { background: #f8f9fa; }
    .recent-votes { margin-top: 40px; }
"""

ERROR_PAGE = (
    "<h1>Error loading analytics dashboard</h1>"
    "<p>Failed to fetch data from database.</p>"
)

THUMBS_UP = "\U0001f44d"
THUMBS_DOWN = "\U0001f44e"


def _breakdown_card(title: str, column: str, rows: list[tuple[str, int]]) -> str:
    body = "".join(
        f"<tr><td>{escape(label)}</td><td>{count}</td></tr>" for label, count in rows
    )
    return (
        f'<div class="card"><h2>{escape(title)}</h2><table>'
        f"<tr><th>{escape(column)}</th><th>Count</th></tr>{body}</table></div>"
    )


def _format_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else UNKNOWN


def render_dashboard(snapshot: AnalyticsSnapshot, title: str = "ZenFlow") -> str:
    """Render *snapshot* as a complete HTML document.  All values are escaped."""
    page_title = escape(f"{title} Analytics Dashboard")
    cards = "".join([
        '<div class="card"><h2>Overview</h2>'
        f'<div class="stat">Total Votes: {snapshot.total_votes}</div>'
        f'<div class="stat">Unique Users: {snapshot.unique_users}</div></div>',
        _breakdown_card("Device Types", "Device", snapshot.by_device),
        _breakdown_card("Countries", "Country", snapshot.by_country),
        _breakdown_card("Browsers", "Browser", snapshot.by_browser),
        _breakdown_card("Meditation Types", "Type", snapshot.by_meditation_type),
    ])
    recent = "".join(
        "<tr>"
        f"<td>{escape(_format_time(v.created_at))}</td>"
        f"<td>{escape(v.meditation_type)}</td>"
        f"<td>{THUMBS_UP if v.is_like else THUMBS_DOWN}</td>"
        f"<td>{escape(v.country or UNKNOWN)}</td>"
        f"<td>{escape(v.device_type or UNKNOWN)}</td>"
        f"<td>{escape(v.browser or UNKNOWN)}</td>"
        "</tr>"
        for v in snapshot.recent
    )
    return (
        "<!DOCTYPE html><html><head>"
        f'<meta charset="utf-8"><title>{page_title}</title>'
        f"<style>{_STYLE}</style></head><body>"
        f"<h1>{page_title}</h1>"
        f'<div class="dashboard">{cards}</div>'
        '<div class="card recent-votes"><h2>Recent Votes</h2><table>'
        "<tr><th>Time</th><th>Type</th><th>Vote</th>"
        "<th>Country</th><th>Device</th><th>Browser</th></tr>"
        f"{recent}</table></div>"
        "</body></html>"
    )
