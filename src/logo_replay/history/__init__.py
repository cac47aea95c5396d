"""
History Module
==============

Fetching, decoding and holding the logo history.

    - HistoryClient: HTTP client for GET /api/v1/history
    - decode_history / encode_history: JSON codec for the response body
    - apply_fetch_result: pure status reducer
    - HistoryStore: holder of the current FetchStatus
"""

from logo_replay.history.decoder import HistoryDecodeError, decode_history, encode_history
from logo_replay.history.client import HistoryClient
from logo_replay.history.store import HistoryStore, HistoryStoreMetrics, apply_fetch_result


__all__ = [
    "HistoryClient",
    "HistoryDecodeError",
    "decode_history",
    "encode_history",
    "apply_fetch_result",
    "HistoryStore",
    "HistoryStoreMetrics",
]
