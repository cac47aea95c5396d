"""
View Derivation
===============

Pure functions turning combined state into what the page displays.

Nothing here is stored; the view is recomputed on every render from the
current FetchStatus and PlaybackState.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field

from logo_replay.models.playback import PlaybackState
from logo_replay.models.snapshot import History
from logo_replay.models.status import Failure, FetchStatus, Loading, Success


# 1x1 transparent PNG shown while loading or for an out-of-range cursor
PLACEHOLDER_IMAGE = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

LOADING_TEXT = "Loading..."
ERROR_TEXT = "Error!"


def slider_bounds(history_length: int) -> Tuple[int, int]:
    """
    Timeline slider (min, max) for a history of the given length.

    An empty history collapses the slider to the single point 0.
    """
    return 0, max(history_length - 1, 0)


def displayed_image(history: History, cursor: int) -> str:
    """Base64 image at the cursor, or the placeholder if there is none."""
    if 0 <= cursor < len(history):
        return history[cursor].image
    return PLACEHOLDER_IMAGE


def status_text(status: FetchStatus) -> Optional[str]:
    """Text replacing the image while there is no usable history."""
    if isinstance(status, Loading):
        return LOADING_TEXT
    if isinstance(status, Failure):
        return ERROR_TEXT
    return None


class ViewModel(BaseModel):
    """
    Everything needed to render one frame of the viewer.

    Attributes:
        status_text: "Loading..." or "Error!" when there is no history to show
        image: Base64 PNG payload to display
        time: Timestamp label of the displayed snapshot, if any
        cursor: Current cursor position
        slider_min: Timeline slider minimum (always 0)
        slider_max: Timeline slider maximum
        playing: Whether playback is running
        show_controls: Whether the toggle and slider are rendered
    """

    status_text: Optional[str] = Field(default=None)
    image: str = Field(default=PLACEHOLDER_IMAGE)
    time: Optional[str] = Field(default=None)
    cursor: int = Field(default=0)
    slider_min: int = Field(default=0)
    slider_max: int = Field(default=0)
    playing: bool = Field(default=False)
    show_controls: bool = Field(default=True)


def derive_view(status: FetchStatus, playback: PlaybackState) -> ViewModel:
    """
    Combine fetch status and playback state into a ViewModel.

    Args:
        status: Current FetchStatus of the history store
        playback: Current playback state

    Returns:
        ViewModel for rendering
    """
    history: History = status.history if isinstance(status, Success) else ()
    slider_min, slider_max = slider_bounds(len(history))
    in_range = 0 <= playback.cursor < len(history)

    return ViewModel(
        status_text=status_text(status),
        image=displayed_image(history, playback.cursor),
        time=history[playback.cursor].time if in_range else None,
        cursor=playback.cursor,
        slider_min=slider_min,
        slider_max=slider_max,
        playing=playback.playing,
        show_controls=playback.show_controls,
    )
