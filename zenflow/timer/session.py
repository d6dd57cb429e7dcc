"""
zenflow.timer.session — Countdown state for one meditation
===========================================================

:class:`MeditationSession` holds what the timer screen shows: the chosen
style, the chosen duration, the seconds left, whether the countdown is
running, and the ambient volume.  It does no I/O and never sleeps; the
async loop in :mod:`zenflow.timer.runner` calls :meth:`tick` once a second.
"""

from __future__ import annotations

from zenflow.constants import (
    CUSTOM_TIME,
    DEFAULT_VOLUME,
    MAX_CUSTOM_MINUTES,
    MEDITATION_TYPES,
    MIN_CUSTOM_MINUTES,
    TIME_PRESETS,
    MeditationType,
    get_meditation_type,
)
from zenflow.errors import InvalidDurationError, UnknownMeditationTypeError


def format_time(seconds: int) -> str:
    """Render *seconds* as ``m:ss`` (minutes are not wrapped at 60)."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins}:{secs:02d}"


def parse_custom_minutes(text: str) -> int:
    """Validate a custom duration typed by the user and return seconds.

    Accepts whole minutes from 1 to 180.
    """
    try:
        minutes = int(str(text).strip())
    except ValueError:
        raise InvalidDurationError(f"Not a whole number of minutes: {text!r}") from None
    if not MIN_CUSTOM_MINUTES <= minutes <= MAX_CUSTOM_MINUTES:
        raise InvalidDurationError(
            f"Duration must be between {MIN_CUSTOM_MINUTES} and "
            f"{MAX_CUSTOM_MINUTES} minutes, got {minutes}"
        )
    return minutes * 60


class MeditationSession:
    """Mutable countdown state.  Not thread-safe; one owner drives it."""

    def __init__(
        self,
        meditation_type: MeditationType = MEDITATION_TYPES[0],
        seconds: int = TIME_PRESETS[0].seconds,
        volume: float = DEFAULT_VOLUME,
    ) -> None:
        if seconds <= 0:
            raise InvalidDurationError(f"Duration must be positive, got {seconds}")
        self.meditation_type = meditation_type
        self.selected_time = seconds
        self.time_left = seconds
        self.is_active = False
        self.custom_prompt_open = False
        self.volume = _clamp_volume(volume)

    def __repr__(self) -> str:
        return (
            f"<MeditationSession type={self.meditation_type.name!r} "
            f"left={format_time(self.time_left)} active={self.is_active}>"
        )

    # -- selection -------------------------------------------------------
    def select_type(self, name: str) -> MeditationType:
        found = get_meditation_type(name)
        if found is None:
            raise UnknownMeditationTypeError(name)
        self.meditation_type = found
        return found

    def select_time(self, seconds: int) -> bool:
        """Pick a preset.  ``-1`` opens the custom prompt instead.

        Returns ``False`` (and changes nothing) while the countdown runs.
        """
        if self.is_active:
            return False
        if seconds == CUSTOM_TIME:
            self.custom_prompt_open = True
            return True
        if seconds <= 0:
            raise InvalidDurationError(f"Duration must be positive, got {seconds}")
        self.custom_prompt_open = False
        self.selected_time = seconds
        self.time_left = seconds
        return True

    def set_custom_minutes(self, text: str) -> int:
        """Apply a custom duration; on error nothing changes.

        Raises :class:`InvalidDurationError` while the countdown runs.
        """
        if self.is_active:
            raise InvalidDurationError("Cannot change the duration during a session")
        seconds = parse_custom_minutes(text)
        self.selected_time = seconds
        self.time_left = seconds
        self.custom_prompt_open = False
        return seconds

    def cancel_custom(self) -> None:
        self.custom_prompt_open = False

    def set_volume(self, volume: float) -> float:
        self.volume = _clamp_volume(volume)
        return self.volume

    # -- countdown -------------------------------------------------------
    def start(self) -> bool:
        if self.is_active or self.time_left <= 0:
            return False
        self.is_active = True
        return True

    def stop(self) -> None:
        """End the countdown and rewind it to the selected duration."""
        self.is_active = False
        self.time_left = self.selected_time

    def tick(self) -> bool:
        """Advance one second.  Returns ``True`` once time is up.

        A finished session stays at ``0:00`` until the next selection.
        """
        if not self.is_active:
            return False
        if self.time_left <= 1:
            self.time_left = 0
            self.is_active = False
            return True
        self.time_left -= 1
        return False

    @property
    def progress(self) -> float:
        """Fraction of the selected duration already elapsed (0.0–1.0)."""
        return 1 - self.time_left / self.selected_time

    @property
    def display(self) -> str:
        return format_time(self.time_left)


def _clamp_volume(volume: float) -> float:
    return min(max(float(volume), 0.0), 1.0)
