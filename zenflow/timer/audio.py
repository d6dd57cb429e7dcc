"""
zenflow.timer.audio — Ambient loop volume fades
================================================

:class:`VolumeFader` ramps a track's volume linearly: ``FADE_STEP`` every
``FADE_INTERVAL_SECONDS``.  Anything with a ``volume`` attribute, a
``source`` attribute and ``play()`` / ``pause()`` / ``rewind()`` methods
can be faded; :class:`SilentTrack` is the stand-in used by the terminal
timer and the tests.

Starting a fade supersedes any fade still in progress: the older loop
notices on its next step and returns without touching the volume.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from zenflow.constants import FADE_INTERVAL_SECONDS, FADE_STEP

logger = logging.getLogger(__name__)


class AudioTrack(Protocol):
    volume: float
    source: str

    def play(self) -> None: ...
    def pause(self) -> None: ...
    def rewind(self) -> None: ...


class SilentTrack:
    """An :class:`AudioTrack` that only records its state."""

    def __init__(self, source: str = "", loop: bool = True) -> None:
        self.source = source
        self.loop = loop
        self.volume = 0.0
        self.playing = False
        self.position = 0.0

    def play(self) -> None:
        self.playing = True
        logger.debug("play %s", self.source)

    def pause(self) -> None:
        self.playing = False
        logger.debug("pause %s", self.source)

    def rewind(self) -> None:
        self.position = 0.0


class VolumeFader:
    def __init__(
        self,
        track: AudioTrack,
        *,
        step: float = FADE_STEP,
        interval: float = FADE_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        if step <= 0:
            raise ValueError("step must be positive")
        self.track = track
        self.step = step
        self.interval = interval
        self._sleep = sleep
        self._generation = 0

    def _begin(self) -> int:
        self._generation += 1
        return self._generation

    def cancel(self) -> None:
        """Abandon any running fade, leaving the volume where it is."""
        self._begin()

    def set_volume(self, volume: float) -> None:
        """Apply *volume* immediately (slider moved)."""
        self.track.volume = min(max(volume, 0.0), 1.0)

    async def fade_in(self, target: float) -> bool:
        """Start playback at 0 and ramp up to *target*.

        Returns ``False`` if another fade superseded this one.
        """
        gen = self._begin()
        target = min(max(target, 0.0), 1.0)
        self.track.volume = 0.0
        self.track.play()

        current = 0.0
        steps = 0
        while current < target:
            await self._sleep(self.interval)
            if gen != self._generation:
                return False
            steps += 1
            current = min(steps * self.step, target)
            self.track.volume = current
        return True

    async def fade_out(self) -> bool:
        """Ramp down to 0, then pause and rewind the track.

        Returns ``False`` if another fade superseded this one.
        """
        gen = self._begin()
        start = current = self.track.volume
        steps = 0
        while current > 0:
            await self._sleep(self.interval)
            if gen != self._generation:
                return False
            steps += 1
            current = max(start - steps * self.step, 0.0)
            self.track.volume = current

        self.track.pause()
        self.track.rewind()
        return True

    async def switch_source(self, source: str, *, active: bool, volume: float) -> None:
        """Swap the ambient loop, fading out and back in while a session runs."""
        if active:
            await self.fade_out()
        self.track.source = source
        if active and volume > 0:
            await self.fade_in(volume)
