"""
Playback Transitions
====================

Pure transitions over PlaybackState.

    set_cursor      - user scrubbing (slider) or programmatic seek
    toggle_playing  - play/pause button
    advance         - playback timer tick only, never user input
"""

import math
from dataclasses import replace

from logo_replay.models.playback import PlaybackState


def set_cursor(state: PlaybackState, position: float) -> PlaybackState:
    """
    Move the cursor to the nearest integer position.

    Halves round up. No bounds check is made; the slider's own bounds keep
    user input in range and rendering tolerates anything else. A non-finite
    position leaves the state unchanged.
    """
    if not math.isfinite(position):
        return state
    return replace(state, cursor=math.floor(position + 0.5))


def toggle_playing(state: PlaybackState) -> PlaybackState:
    """Flip the playing flag."""
    return replace(state, playing=not state.playing)


def advance(state: PlaybackState, history_length: int) -> PlaybackState:
    """
    Step the cursor forward by one, looping back to the start.

    Args:
        state: Current playback state
        history_length: Number of snapshots in the current history

    Returns:
        State with cursor 0 if the cursor was at or past the last index,
        otherwise with cursor incremented.
    """
    if state.cursor >= history_length - 1:
        return replace(state, cursor=0)
    return replace(state, cursor=state.cursor + 1)
