"""
zenflow.errors — Domain exceptions
===================================

Services raise these; the API layer maps them onto HTTP responses.
"""

from __future__ import annotations


class ZenflowError(Exception):
    """Base class for all ZenFlow domain errors."""


class UnknownMeditationTypeError(ZenflowError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown meditation type: {name}")
        self.name = name


class DuplicateVoteError(ZenflowError):
    """The client already voted for this meditation type."""

    def __init__(self, user_ip: str, meditation_type: str) -> None:
        super().__init__(f"You have already voted for {meditation_type}")
        self.user_ip = user_ip
        self.meditation_type = meditation_type


class InvalidDurationError(ZenflowError, ValueError):
    """A custom timer duration outside the accepted range."""
