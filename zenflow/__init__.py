"""
ZenFlow — Meditation Timer with Community Feedback
===================================================
A guided meditation timer (countdown + ambient audio fades) backed by a
small feedback API where listeners like or dislike each meditation style.

Package layout::

    zenflow/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Meditation catalogue, time presets, quotes
    ├── errors.py          # Domain exceptions
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   ├── models.py      # Feedback counters + vote records
    │   └── seed.py        # Zeroed counter rows
    ├── services/
    │   ├── feedback_service.py   # Read / vote / clear
    │   ├── client_context.py     # IP, user-agent and geo enrichment
    │   ├── analytics_service.py  # Dev dashboard data + HTML
    │   └── db_probe.py           # Connectivity ping
    ├── timer/
    │   ├── session.py     # Countdown state
    │   ├── audio.py       # Volume fades
    │   ├── runner.py      # Async countdown loop
    │   ├── client.py      # HTTP client for /api/feedback
    │   └── __main__.py    # Terminal timer
    └── api/
        ├── main.py        # FastAPI app
        └── routes/        # Feedback, dev-only and catalogue endpoints
"""

__version__ = "0.1.0"
