"""
History Store
=============

Holds the most recent usable history and the status of the last fetch.

Transition rule (applied by apply_fetch_result):
    any      + FetchSuccess(h) -> Success(h)
    Success  + FetchFailure    -> Success (unchanged, stale data retained)
    Loading  + FetchFailure    -> Failure
    Failure  + FetchFailure    -> Failure

Keeping the last good value on a transient failure avoids flicker in the
rendered surface; only a cold start can end up showing "Error!".
"""

import logging
from typing import Optional

from logo_replay.models.snapshot import History
from logo_replay.models.status import (
    FAILURE,
    LOADING,
    FetchFailure,
    FetchResult,
    FetchStatus,
    FetchSuccess,
    Success,
)


logger = logging.getLogger(__name__)


def apply_fetch_result(current: FetchStatus, result: FetchResult) -> FetchStatus:
    """
    Reduce a fetch outcome into the next status.

    Args:
        current: Status before the fetch completed
        result: Outcome of the fetch

    Returns:
        The next FetchStatus
    """
    if isinstance(result, FetchSuccess):
        return Success(history=result.history)
    if isinstance(current, Success):
        return current
    return FAILURE


class HistoryStoreMetrics:
    """Counters for HistoryStore observability."""

    __slots__ = (
        "fetches_applied",
        "successes",
        "failures",
        "stale_retained",
        "last_error",
    )

    def __init__(self) -> None:
        self.fetches_applied: int = 0
        self.successes: int = 0
        self.failures: int = 0
        self.stale_retained: int = 0
        self.last_error: Optional[str] = None

    def to_dict(self) -> dict:
        """Export metrics as dict."""
        return {
            "fetches_applied": self.fetches_applied,
            "successes": self.successes,
            "failures": self.failures,
            "stale_retained": self.stale_retained,
            "last_error": self.last_error,
        }


class HistoryStore:
    """
    Mutable holder of the current FetchStatus.

    Only the playback controller's dispatch loop writes to the store.

    Example:
        store = HistoryStore()
        store.apply(FetchSuccess(history=(snapshot,)))
        assert len(store.history) == 1
    """

    def __init__(self, status: FetchStatus = LOADING) -> None:
        self._status: FetchStatus = status
        self.metrics = HistoryStoreMetrics()

    @property
    def status(self) -> FetchStatus:
        """Current fetch status."""
        return self._status

    @property
    def history(self) -> History:
        """Current history, empty unless the status is Success."""
        if isinstance(self._status, Success):
            return self._status.history
        return ()

    def apply(self, result: FetchResult) -> FetchStatus:
        """
        Apply a fetch outcome and return the new status.

        Args:
            result: Outcome of a completed fetch
        """
        previous = self._status
        self._status = apply_fetch_result(previous, result)
        self.metrics.fetches_applied += 1

        if isinstance(result, FetchSuccess):
            self.metrics.successes += 1
            logger.info(f"History updated: {len(result.history)} snapshots")
        elif isinstance(result, FetchFailure):
            self.metrics.failures += 1
            self.metrics.last_error = result.reason
            if self._status is previous and isinstance(previous, Success):
                self.metrics.stale_retained += 1
                logger.warning("History fetch failed, keeping previous history")
            else:
                logger.error("History fetch failed with no usable history")

        return self._status
