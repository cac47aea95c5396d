"""
Playback Module
===============

Cursor transitions, controller events and the timer-driven controller.

Example:
    from logo_replay.playback import PlaybackController, TogglePlaying

    controller = PlaybackController(client)
    await controller.start()
    controller.post(TogglePlaying())
"""

from logo_replay.playback.state import advance, set_cursor, toggle_playing
from logo_replay.playback.events import (
    AdvanceTick,
    Event,
    FetchCompleted,
    RefreshTick,
    SetCursor,
    TogglePlaying,
)
from logo_replay.playback.controller import PlaybackController


__all__ = [
    "advance",
    "set_cursor",
    "toggle_playing",
    "AdvanceTick",
    "Event",
    "FetchCompleted",
    "RefreshTick",
    "SetCursor",
    "TogglePlaying",
    "PlaybackController",
]
