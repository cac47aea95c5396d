"""
Snapshot Data Model
===================

Internal representation of one historical logo image.

Design Rules:
    - Snapshots are immutable once received
    - The image payload is passed through as base64, never decoded
    - A History is a plain tuple: insertion order is chronological order
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    One historical data point from the history service.

    Attributes:
        time: Opaque timestamp label, displayed as-is
        image: Base64-encoded PNG payload (NOT decoded)
    """

    time: str
    image: str

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the full image."""
        return f"Snapshot(time={self.time!r}, image=<{len(self.image)} chars>)"


History = Tuple[Snapshot, ...]
