"""
History Client
==============

HTTP client for the remote history service.

This client:
    - Issues GET {base_url}/api/v1/history
    - Decodes the JSON array into a History
    - Folds every error (transport, HTTP status, malformed body) into FetchFailure

Example:
    from logo_replay.history import HistoryClient

    client = HistoryClient("http://localhost:3000/api/v1/history")
    result = await client.fetch_history()

Design Rules:
    - Never raises: callers only see FetchSuccess or FetchFailure
    - Does not block the event loop (requests runs in a worker thread)
    - No retry or backoff; the refresh timer is the only retry mechanism
"""

import asyncio
import logging
from typing import Optional

import requests

from logo_replay.history.decoder import HistoryDecodeError, decode_history
from logo_replay.models.status import FetchFailure, FetchResult, FetchSuccess


logger = logging.getLogger(__name__)


class HistoryClient:
    """
    Fetches the full logo history.

    Attributes:
        url: Full URL of the history endpoint
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize history client.

        Args:
            url: Full URL of the history endpoint
            timeout: Per-request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    async def fetch_history(self) -> FetchResult:
        """
        Fetch and decode the history without blocking the event loop.

        Returns:
            FetchSuccess with the decoded history, or FetchFailure
        """
        return await asyncio.to_thread(self.fetch_history_sync)

    def fetch_history_sync(self) -> FetchResult:
        """Blocking variant of fetch_history."""
        try:
            response = self._session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            # raise_for_status lets unfollowed 1xx/3xx responses through
            if not 200 <= response.status_code < 300:
                raise requests.HTTPError(
                    f"Unexpected status {response.status_code} from {self.url}",
                    response=response,
                )
            history = decode_history(response.content)
        except requests.RequestException as e:
            logger.warning(f"History fetch failed: {e}")
            return FetchFailure(reason=str(e))
        except HistoryDecodeError as e:
            logger.warning(f"History decode failed: {e}")
            return FetchFailure(reason=str(e))

        logger.debug(f"Fetched {len(history)} snapshots from {self.url}")
        return FetchSuccess(history=history)

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
