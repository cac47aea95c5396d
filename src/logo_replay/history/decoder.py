"""
History Decoder
===============

Codec between the JSON body of the history service and the internal History.

Design Rules:
    - This is the ONLY place that knows the wire field names
    - Image payloads are passed through as base64, never decoded
    - Any JSON or schema problem raises HistoryDecodeError
"""

import logging
from typing import Union

from pydantic import ValidationError

from logo_replay.models.snapshot import History, Snapshot
from logo_replay.models.wire import HistoryEntry, HistoryPayload


logger = logging.getLogger(__name__)


class HistoryDecodeError(Exception):
    """Raised when a history response body cannot be decoded."""
    pass


def _describe(error: ValidationError) -> str:
    """First validation error as '<msg> at <loc>', e.g. 'Field required at 1.logo'."""
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{first['msg']} at {loc}" if loc else first["msg"]


def decode_history(body: Union[str, bytes]) -> History:
    """
    Decode a raw history response body.

    Args:
        body: JSON text of the response

    Returns:
        History in the order received

    Raises:
        HistoryDecodeError: If the body is not a JSON array of {time, logo}
    """
    try:
        payload = HistoryPayload.model_validate_json(body)
    except ValidationError as e:
        raise HistoryDecodeError(
            f"Malformed history body ({e.error_count()} errors): {_describe(e)}"
        ) from e

    return tuple(
        Snapshot(time=entry.time, image=entry.logo)
        for entry in payload.root
    )


def encode_history(history: History) -> str:
    """
    Encode a History into the JSON shape served by the history service.

    Args:
        history: Snapshots to encode

    Returns:
        JSON array text of {time, logo} objects
    """
    payload = HistoryPayload(
        [HistoryEntry(time=s.time, logo=s.image) for s in history]
    )
    return payload.model_dump_json()
