"""
History Tests
=============

Tests for the history codec, status reducer, store and HTTP client.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from logo_replay.history import (
    HistoryClient,
    HistoryDecodeError,
    HistoryStore,
    apply_fetch_result,
    decode_history,
    encode_history,
)
from logo_replay.models.snapshot import Snapshot
from logo_replay.models.status import (
    FAILURE,
    LOADING,
    Failure,
    FetchFailure,
    FetchSuccess,
    Loading,
    Success,
)


class TestDecoder:
    """Tests for decode_history / encode_history."""

    def test_decode_preserves_order(self, sample_body, sample_history):
        assert decode_history(sample_body) == sample_history

    def test_decode_bytes(self, sample_body, sample_history):
        assert decode_history(sample_body.encode()) == sample_history

    def test_decode_empty_array(self):
        assert decode_history("[]") == ()

    def test_round_trip(self, sample_history):
        assert decode_history(encode_history(sample_history)) == sample_history

    def test_encode_uses_wire_field_names(self, sample_history):
        assert json.loads(encode_history(sample_history)) == [
            {"time": "t0", "logo": "AAA"},
            {"time": "t1", "logo": "BBB"},
        ]

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            '{"time": "t0", "logo": "AAA"}',
            '[{"time": "t0"}]',
            '[{"time": "t0", "logo": 5}]',
            "",
        ],
    )
    def test_malformed_body_raises(self, body):
        with pytest.raises(HistoryDecodeError):
            decode_history(body)

    def test_error_names_failing_field(self):
        with pytest.raises(HistoryDecodeError, match=r"at 1\.logo"):
            decode_history('[{"time": "t0", "logo": "AAA"}, {"time": "t1"}]')


class TestApplyFetchResult:
    """Tests for the status reducer."""

    def test_success_from_loading(self, sample_history):
        status = apply_fetch_result(LOADING, FetchSuccess(history=sample_history))
        assert status == Success(history=sample_history)

    def test_cold_failure(self):
        assert apply_fetch_result(LOADING, FetchFailure(reason="boom")) == FAILURE

    def test_stale_history_retained_on_failure(self, sample_history):
        current = Success(history=sample_history)
        status = apply_fetch_result(current, FetchFailure(reason="timeout"))
        assert status is current

    def test_failure_after_failure(self):
        assert isinstance(apply_fetch_result(FAILURE, FetchFailure()), Failure)

    def test_success_recovers_from_failure(self, sample_history):
        status = apply_fetch_result(FAILURE, FetchSuccess(history=sample_history))
        assert status == Success(history=sample_history)

    def test_success_replaces_wholesale(self, sample_history):
        newer = (Snapshot(time="t9", image="ZZZ"),)
        status = apply_fetch_result(
            Success(history=sample_history), FetchSuccess(history=newer)
        )
        assert status == Success(history=newer)

    def test_empty_success(self):
        assert apply_fetch_result(LOADING, FetchSuccess(history=())) == Success(history=())


class TestHistoryStore:
    """Tests for HistoryStore."""

    def test_starts_loading(self):
        store = HistoryStore()
        assert isinstance(store.status, Loading)
        assert store.history == ()

    def test_apply_success(self, sample_history):
        store = HistoryStore()
        store.apply(FetchSuccess(history=sample_history))
        assert store.history == sample_history
        assert store.metrics.successes == 1

    def test_stale_retention_counted(self, sample_history):
        store = HistoryStore()
        store.apply(FetchSuccess(history=sample_history))
        store.apply(FetchFailure(reason="connection refused"))

        assert store.history == sample_history
        assert store.metrics.failures == 1
        assert store.metrics.stale_retained == 1
        assert store.metrics.last_error == "connection refused"

    def test_cold_failure(self):
        store = HistoryStore()
        store.apply(FetchFailure(reason="boom"))
        assert isinstance(store.status, Failure)
        assert store.history == ()
        assert store.metrics.stale_retained == 0

    def test_metrics_dict(self):
        metrics = HistoryStore().metrics.to_dict()
        assert metrics["fetches_applied"] == 0
        assert metrics["last_error"] is None


def _session_returning(
    content: bytes = b"", error: Exception = None, status_code: int = 200
) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    if error is not None:
        response.raise_for_status.side_effect = error
    session = MagicMock()
    session.get.return_value = response
    return session


class TestHistoryClient:
    """Tests for HistoryClient error folding."""

    def test_success(self, sample_body, sample_history):
        session = _session_returning(sample_body.encode())
        client = HistoryClient("http://history/api/v1/history", timeout=3, session=session)

        result = client.fetch_history_sync()

        assert result == FetchSuccess(history=sample_history)
        session.get.assert_called_once_with("http://history/api/v1/history", timeout=3)

    @pytest.mark.parametrize("status_code", [300, 302, 304])
    def test_non_2xx_without_raise_is_failure(self, status_code):
        session = _session_returning(b"[]", status_code=status_code)
        result = HistoryClient("http://history", session=session).fetch_history_sync()

        assert isinstance(result, FetchFailure)
        assert str(status_code) in result.reason

    def test_http_error_is_failure(self):
        session = _session_returning(error=requests.HTTPError("500 Server Error"))
        result = HistoryClient("http://history", session=session).fetch_history_sync()

        assert isinstance(result, FetchFailure)
        assert "500" in result.reason

    def test_transport_error_is_failure(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection refused")
        result = HistoryClient("http://history", session=session).fetch_history_sync()

        assert isinstance(result, FetchFailure)

    def test_timeout_is_failure(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout("timed out")
        result = HistoryClient("http://history", session=session).fetch_history_sync()

        assert isinstance(result, FetchFailure)

    def test_malformed_body_is_failure(self):
        session = _session_returning(b"<html>oops</html>")
        result = HistoryClient("http://history", session=session).fetch_history_sync()

        assert isinstance(result, FetchFailure)

    @pytest.mark.asyncio
    async def test_async_fetch(self, sample_body, sample_history):
        session = _session_returning(sample_body.encode())
        client = HistoryClient("http://history", session=session)

        result = await client.fetch_history()

        assert result == FetchSuccess(history=sample_history)

    def test_close(self):
        session = MagicMock()
        HistoryClient("http://history", session=session).close()
        session.close.assert_called_once()
