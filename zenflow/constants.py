"""
zenflow.constants — Meditation Catalogue & Shared Constants
============================================================

Single source of truth for the meditation styles, the timer presets and
the transition quotes.  The feedback counters are keyed by
:data:`MEDITATION_TYPE_NAMES`; nothing else may be voted on.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MeditationType:
    name: str
    description: str
    icon: str
    sound: str  # Ambient loop served by the frontend

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "sound": self.sound,
        }


@dataclass(frozen=True, slots=True)
class TimePreset:
    label: str
    seconds: int  # -1 means "ask for a custom duration"


# ---------------------------------------------------------------------------
# Meditation styles (also the fixed set of feedback categories)
# ---------------------------------------------------------------------------
MEDITATION_TYPES: tuple[MeditationType, ...] = (
    MeditationType(
        "Breathing", "Focus on your breath",
        "\U0001f32c\ufe0f", "/sounds/ambient-breathing.mp3",  # 🌬️
    ),
    MeditationType(
        "Body Scan", "Awareness of physical sensations",
        "\U0001f9d8\u200d\u2640\ufe0f", "/sounds/ambient-body-scan.mp3",  # 🧘‍♀️
    ),
    MeditationType(
        "Loving-Kindness", "Cultivate compassion",
        "\U0001f49d", "/sounds/ambient-loving-kindness.mp3",  # 💝
    ),
    MeditationType(
        "Mindfulness", "Present moment awareness",
        "\U0001f343", "/sounds/ambient-mindfulness.mp3",  # 🍃
    ),
)

MEDITATION_TYPE_NAMES: tuple[str, ...] = tuple(t.name for t in MEDITATION_TYPES)


def get_meditation_type(name: str) -> MeditationType | None:
    """Look up a meditation style by its exact display name."""
    for t in MEDITATION_TYPES:
        if t.name == name:
            return t
    return None


# ---------------------------------------------------------------------------
# Timer presets
# ---------------------------------------------------------------------------
CUSTOM_TIME = -1

TIME_PRESETS: tuple[TimePreset, ...] = (
    TimePreset("5 mins", 300),
    TimePreset("10 mins", 600),
    TimePreset("15 mins", 900),
    TimePreset("30 mins", 1800),
    TimePreset("Custom", CUSTOM_TIME),
)

MIN_CUSTOM_MINUTES = 1
MAX_CUSTOM_MINUTES = 180  # 3 hours

DEFAULT_VOLUME = 0.7

# Fade ramp: 0.05 of full scale every 100 ms
FADE_STEP = 0.05
FADE_INTERVAL_SECONDS = 0.1


# ---------------------------------------------------------------------------
# Transition quotes
# ---------------------------------------------------------------------------
QUOTES: tuple[dict[str, str], ...] = (
    {"text": "Breathe in peace, breathe out tension", "author": "Noma"},
    {"text": "The quieter you become, the more you can hear", "author": "Rumi"},
    {"text": "Peace comes from within", "author": "Buddha"},
    {"text": "Silence is a source of great strength", "author": "Lao Tzu"},
    {
        "text": "In the midst of movement and chaos, keep stillness inside of you",
        "author": "Deepak Chopra",
    },
)
