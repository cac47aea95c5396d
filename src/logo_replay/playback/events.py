"""
Playback Events
===============

Messages processed by the PlaybackController dispatch loop.

Every state change in the viewer happens in response to exactly one of these.
"""

from dataclasses import dataclass
from typing import Union

from logo_replay.models.status import FetchResult


@dataclass(frozen=True, slots=True)
class AdvanceTick:
    """Playback timer fired."""


@dataclass(frozen=True, slots=True)
class RefreshTick:
    """Refresh timer fired; start a new fetch."""


@dataclass(frozen=True, slots=True)
class SetCursor:
    """User moved the timeline slider."""

    position: float


@dataclass(frozen=True, slots=True)
class TogglePlaying:
    """User pressed play/pause."""


@dataclass(frozen=True, slots=True)
class FetchCompleted:
    """A history fetch resolved."""

    result: FetchResult


Event = Union[AdvanceTick, RefreshTick, SetCursor, TogglePlaying, FetchCompleted]
