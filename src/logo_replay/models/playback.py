"""
Playback State Model
====================

Cursor position and flags owned by the playback controller.

The cursor is never validated against the history length here. Rendering
tolerates out-of-range cursors by falling back to a placeholder image.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PlaybackState:
    """
    Immutable playback state.

    Attributes:
        cursor: Index into the history currently displayed
        playing: Whether the cursor auto-advances on a timer
        show_controls: Whether the play toggle and timeline slider are rendered
    """

    cursor: int = 0
    playing: bool = False
    show_controls: bool = True
