"""
Startup Flags
=============

Reads the initial playback flags from the viewer URL, once, at startup.

Query Parameters:
    play          "true" | "false"  -> initial playing flag (default false)
    showControls  "true" | "false"  -> control visibility (default true)

Anything else, including a missing parameter, silently falls back to the
default.

Example:
    from logo_replay.startup import parse_startup_flags

    state = parse_startup_flags("http://localhost:8080/?play=true")
    assert state.playing
"""

from typing import Mapping, Optional, Union
from urllib.parse import parse_qs, urlsplit

from logo_replay.models.playback import PlaybackState


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value == "true":
        return True
    if value == "false":
        return False
    return default


def _query_params(query: Union[str, Mapping[str, str], None]) -> Mapping[str, str]:
    if query is None:
        return {}
    if not isinstance(query, str):
        return query

    # Accept a full URL as well as a bare query string
    if "?" in query or "://" in query:
        query = urlsplit(query).query
    return {key: values[0] for key, values in parse_qs(query).items()}


def parse_startup_flags(query: Union[str, Mapping[str, str], None] = None) -> PlaybackState:
    """
    Build the initial PlaybackState from startup query parameters.

    Args:
        query: Viewer URL, raw query string, or already-parsed mapping

    Returns:
        PlaybackState with cursor 0 and the parsed flags
    """
    params = _query_params(query)
    return PlaybackState(
        cursor=0,
        playing=_parse_bool(params.get("play"), False),
        show_controls=_parse_bool(params.get("showControls"), True),
    )
