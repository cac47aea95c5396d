"""
Fetch Status Models
===================

Tagged unions describing the lifecycle of history fetches.

FetchStatus (held by the store):
    Loading            - no fetch has completed successfully or unsuccessfully yet
    Failure            - the last fetch failed and there is no usable data
    Success(history)   - the most recent usable history

FetchResult (delivered by one fetch):
    FetchSuccess(history)
    FetchFailure(reason)

Example:
    from logo_replay.models.status import LOADING, Success

    status = LOADING
    status = Success(history=(snapshot,))
    if isinstance(status, Success):
        print(len(status.history))
"""

from dataclasses import dataclass
from typing import Union

from logo_replay.models.snapshot import History


@dataclass(frozen=True, slots=True)
class Loading:
    """No fetch has completed yet."""


@dataclass(frozen=True, slots=True)
class Failure:
    """The last fetch failed and no prior success exists."""


@dataclass(frozen=True, slots=True)
class Success:
    """A successfully decoded history."""

    history: History


FetchStatus = Union[Loading, Failure, Success]

LOADING = Loading()
FAILURE = Failure()


@dataclass(frozen=True, slots=True)
class FetchSuccess:
    """Outcome of a fetch that returned a decodable 2xx body."""

    history: History


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """
    Outcome of a fetch that failed for any reason.

    The reason is for logs only; users only ever see "Error!".
    """

    reason: str = ""


FetchResult = Union[FetchSuccess, FetchFailure]
