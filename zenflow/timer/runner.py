"""
zenflow.timer.runner — Async countdown loop
============================================

Drives a :class:`~zenflow.timer.session.MeditationSession` one tick per
second while the :class:`~zenflow.timer.audio.VolumeFader` fades the
ambient loop in at the start and out at the end.  Cancelling the task
(Ctrl+C in the terminal timer) still fades out and rewinds the session
before the cancellation propagates.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

from zenflow.timer.audio import VolumeFader
from zenflow.timer.session import MeditationSession

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


async def run_session(
    session: MeditationSession,
    fader: VolumeFader | None = None,
    *,
    tick_seconds: float = TICK_SECONDS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    on_tick: Callable[[MeditationSession], None] | None = None,
) -> bool:
    """Run the countdown to completion.

    Returns ``True`` when time ran out, ``False`` if the session could not
    start (already running or no time left).
    """
    if not session.start():
        return False

    logger.info(
        "Meditation started: %s for %s", session.meditation_type.name, session.display
    )
    fade_task: asyncio.Task | None = None
    if fader is not None and session.volume > 0:
        fade_task = asyncio.create_task(fader.fade_in(session.volume))

    try:
        while True:
            await sleep(tick_seconds)
            finished = session.tick()
            if on_tick is not None:
                on_tick(session)
            if finished:
                break
    except asyncio.CancelledError:
        logger.info("Meditation interrupted at %s", session.display)
        await _finish(session, fader, fade_task)
        raise

    await _finish(session, fader, fade_task)
    logger.info("Meditation complete: %s", session.meditation_type.name)
    return True


async def _finish(
    session: MeditationSession,
    fader: VolumeFader | None,
    fade_task: asyncio.Task | None,
) -> None:
    try:
        if fade_task is not None and not fade_task.done():
            fade_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await fade_task
        if fader is not None:
            await fader.fade_out()
    finally:
        if session.is_active:
            session.stop()
