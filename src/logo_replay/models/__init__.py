"""
Data Models
===========

Data models for the logo history viewer.

Models:
    Snapshot:
        - Snapshot: One timestamped logo image
        - History: Ordered tuple of snapshots

    Wire:
        - HistoryEntry: Schema for one element of the history response
        - HistoryPayload: Schema for the full response body

    Status:
        - Loading, Failure, Success: FetchStatus variants
        - FetchSuccess, FetchFailure: FetchResult variants

    Playback:
        - PlaybackState: Cursor and play/controls flags
"""

from logo_replay.models.snapshot import History, Snapshot
from logo_replay.models.wire import HistoryEntry, HistoryPayload
from logo_replay.models.status import (
    FAILURE,
    LOADING,
    Failure,
    FetchFailure,
    FetchResult,
    FetchStatus,
    FetchSuccess,
    Loading,
    Success,
)
from logo_replay.models.playback import PlaybackState

__all__ = [
    # Snapshot
    "Snapshot",
    "History",
    # Wire
    "HistoryEntry",
    "HistoryPayload",
    # Status
    "Loading",
    "Failure",
    "Success",
    "FetchStatus",
    "LOADING",
    "FAILURE",
    "FetchSuccess",
    "FetchFailure",
    "FetchResult",
    # Playback
    "PlaybackState",
]
