"""
zenflow.timer.__main__ — Terminal meditation timer
===================================================

Wiring:
1. Load .env (``ZENFLOW_API_URL``).
2. Build a :class:`MeditationSession` from the command line.
3. Run the countdown with a silent ambient track being faded in and out.
4. Optionally send a like / dislike to the feedback API.

Run with::

    python -m zenflow.timer --type "Body Scan" --minutes 10 --vote like
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from zenflow.constants import DEFAULT_VOLUME, MEDITATION_TYPE_NAMES, TIME_PRESETS
from zenflow.errors import ZenflowError
from zenflow.timer.audio import SilentTrack, VolumeFader
from zenflow.timer.client import DEFAULT_API_URL, FeedbackClient, FeedbackClientError
from zenflow.timer.runner import run_session
from zenflow.timer.session import MeditationSession

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("zenflow")


def build_parser() -> argparse.ArgumentParser:
    preset_minutes = [p.seconds // 60 for p in TIME_PRESETS if p.seconds > 0]
    ap = argparse.ArgumentParser(prog="zenflow-timer", description="ZenFlow meditation timer")
    ap.add_argument(
        "--type", dest="type_name", default=MEDITATION_TYPE_NAMES[0],
        choices=MEDITATION_TYPE_NAMES, help="Meditation style",
    )
    ap.add_argument(
        "--minutes", default=str(preset_minutes[0]),
        help=f"Duration in minutes (presets: {preset_minutes}; custom 1-180)",
    )
    ap.add_argument("--volume", type=float, default=DEFAULT_VOLUME, help="0.0 - 1.0")
    ap.add_argument("--vote", choices=("like", "dislike"), help="Send feedback when done")
    ap.add_argument(
        "--api-url", default=None,
        help=f"Feedback API base URL (default: $ZENFLOW_API_URL or {DEFAULT_API_URL})",
    )
    return ap


def _print_tick(session: MeditationSession) -> None:
    print(f"\r{session.display} ", end="", flush=True)


def main(argv: list[str] | None = None) -> int:
    """Run one session; returns the process exit code."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        session = MeditationSession(volume=args.volume)
        meditation_type = session.select_type(args.type_name)
        session.set_custom_minutes(args.minutes)
    except ZenflowError as exc:
        logger.error("%s", exc)
        return 2

    fader = VolumeFader(SilentTrack(meditation_type.sound))
    try:
        asyncio.run(run_session(session, fader, on_tick=_print_tick))
    except KeyboardInterrupt:
        print()
        logger.info("Session ended early")
        return 130
    print()

    if args.vote:
        api_url = args.api_url or os.getenv("ZENFLOW_API_URL", DEFAULT_API_URL)
        try:
            with FeedbackClient(api_url) as api:
                counts = api.send_feedback(meditation_type.name, args.vote == "like")
        except FeedbackClientError as exc:
            logger.error("Could not send feedback: %s", exc)
            return 1
        stats = counts.get(meditation_type.name, {})
        logger.info(
            "%s: %s likes, %s dislikes",
            meditation_type.name, stats.get("likes", 0), stats.get("dislikes", 0),
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
