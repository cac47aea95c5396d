"""
API Tests
=========

Tests for the FastAPI service surface.
"""

import asyncio
import time

import pytest
from fastapi.testclient import TestClient

from logo_replay import main
from logo_replay.models.playback import PlaybackState
from logo_replay.models.status import FetchFailure, FetchSuccess, Success
from logo_replay.view import derive_view

from tests.fakes import FakeHistoryClient


def _wait_for_view(client: TestClient, predicate, timeout: float = 2.0) -> dict:
    deadline = time.monotonic() + timeout
    while True:
        view = client.get("/view").json()
        if predicate(view):
            return view
        if time.monotonic() > deadline:
            raise AssertionError(f"view never matched: {view}")
        time.sleep(0.01)


@pytest.fixture
def api(monkeypatch, sample_history):
    """Provide a TestClient backed by a fake history service."""
    fake = FakeHistoryClient(FetchSuccess(history=sample_history))
    monkeypatch.setattr(main, "create_history_client", lambda: fake)
    monkeypatch.setattr(main.settings.viewer, "start_url", "")
    with TestClient(main.app) as client:
        _wait_for_view(client, lambda v: v["status_text"] is None)
        yield client
    assert fake.closed


class TestEndpoints:
    """Tests for HTTP endpoints."""

    def test_view(self, api):
        view = api.get("/view").json()
        assert view["image"] == "AAA"
        assert view["slider_max"] == 1
        assert view["playing"] is False

    def test_index_page(self, api):
        response = api.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Timeline" in response.text
        assert "data:image/png;base64,AAA" in response.text

    def test_cursor(self, api):
        view = api.post("/cursor", params={"position": 0.7}).json()
        assert view["cursor"] == 1
        assert view["image"] == "BBB"

    def test_cursor_requires_position(self, api):
        assert api.post("/cursor").status_code == 422

    @pytest.mark.parametrize("position", ["nan", "inf", "-inf"])
    def test_cursor_rejects_non_finite(self, api, position):
        response = api.post("/cursor", params={"position": position})

        assert response.status_code == 422
        assert api.get("/view").json()["cursor"] == 0

    def test_toggle(self, api):
        assert api.post("/toggle").json()["playing"] is True
        assert api.post("/toggle").json()["playing"] is False

    def test_health(self, api):
        body = api.get("/health").json()
        assert body["status"] == "healthy"
        assert body["history_length"] == 2
        assert body["successes"] >= 1

    def test_websocket_pushes_view(self, api):
        with api.websocket_connect("/ws/view") as ws:
            first = ws.receive_json()
            assert first["image"] == "AAA"

            api.post("/cursor", params={"position": 1})
            pushed = ws.receive_json()
            assert pushed["cursor"] == 1


class TestStartupFailure:
    """Tests for a history service that never answers."""

    def test_error_page(self, monkeypatch):
        fake = FakeHistoryClient(FetchFailure(reason="connection refused"))
        monkeypatch.setattr(main, "create_history_client", lambda: fake)
        monkeypatch.setattr(
            main.settings.viewer, "start_url", "http://viewer/?play=true&showControls=false"
        )

        with TestClient(main.app) as client:
            view = _wait_for_view(client, lambda v: v["status_text"] == "Error!")
            assert view["status_text"] == "Error!"
            assert view["playing"] is True
            assert view["show_controls"] is False
            assert "Error!" in client.get("/").text


class _BrokenWebSocket:
    """WebSocket whose sends always fail."""

    async def send_json(self, data) -> None:
        raise RuntimeError("socket closed")


class TestViewListeners:
    """Tests for per-listener view forwarding."""

    @pytest.mark.asyncio
    async def test_failed_send_drops_listener(self, caplog, sample_history):
        queue = asyncio.Queue()
        queue.put_nowait(derive_view(Success(history=sample_history), PlaybackState()))
        main._listeners[999] = queue

        with caplog.at_level("WARNING", logger="logo_replay.main"):
            await asyncio.wait_for(main._send_views(_BrokenWebSocket(), 999, queue), timeout=1.0)

        assert 999 not in main._listeners
        assert "dropping listener 999" in caplog.text
