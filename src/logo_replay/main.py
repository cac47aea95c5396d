"""
Logo Replay Main Application
============================

FastAPI entry point for the logo history viewer.

The process owns the viewer state: a HistoryStore fed from the remote history
service and a PlaybackController driving the cursor. The browser only displays
what this service renders and posts user actions back.

Endpoints:
    GET  /         - Rendered viewer page
    GET  /view     - Current view model
    POST /toggle   - Play/pause
    POST /cursor   - Move the cursor (?position=<float>)
    GET  /health   - Liveness probe with fetch counters
    WS   /ws/view  - View model pushed after every state change
"""

import asyncio
import itertools
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse, JSONResponse

from logo_replay.config import settings
from logo_replay.history import HistoryClient
from logo_replay.playback import PlaybackController, SetCursor, TogglePlaying
from logo_replay.startup import parse_startup_flags
from logo_replay.view import ViewModel, derive_view, render_page


logger = logging.getLogger(__name__)


# =============================================================================
# Global State
# =============================================================================

_controller: Optional[PlaybackController] = None
_startup_time: float = 0.0

# Queues for each of the websocket listeners
_listeners: Dict[int, "asyncio.Queue[ViewModel]"] = {}
_listener_ids = itertools.count(1)

LISTENER_QUEUE_SIZE = 8


# =============================================================================
# Getters
# =============================================================================

def get_controller() -> PlaybackController:
    if _controller is None:
        raise HTTPException(status_code=503, detail="Viewer not started")
    return _controller


def current_view() -> ViewModel:
    controller = get_controller()
    return derive_view(controller.store.status, controller.state)


# =============================================================================
# Factories
# =============================================================================

def create_history_client() -> HistoryClient:
    """Create the history client from settings."""
    return HistoryClient(
        url=settings.history.url,
        timeout=settings.history.timeout_seconds,
    )


def create_controller() -> PlaybackController:
    """Create the playback controller from settings and the startup URL."""
    initial = parse_startup_flags(settings.viewer.start_url)
    logger.info(
        f"Startup flags: playing={initial.playing}, "
        f"show_controls={initial.show_controls}"
    )
    return PlaybackController(
        client=create_history_client(),
        initial=initial,
        advance_interval=settings.playback.advance_interval_ms / 1000.0,
        refresh_interval=settings.playback.refresh_interval_seconds,
    )


# =============================================================================
# Live listeners
# =============================================================================

def broadcast_view() -> None:
    """Push the current view to every websocket listener, dropping stale views."""
    if not _listeners:
        return

    view = current_view()
    for queue in _listeners.values():
        if queue.full():
            try:
                queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
        queue.put_nowait(view)


# =============================================================================
# Lifespan Management
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    global _controller, _startup_time

    _startup_time = time.time()
    logger.info(f"Starting {settings.app.name} {settings.app.version}")
    logger.info(f"History URL: {settings.history.url}")

    _controller = create_controller()
    unsubscribe = _controller.subscribe(broadcast_view)
    await _controller.start()

    yield

    logger.info("Shutting down...")
    unsubscribe()
    await _controller.stop()
    _controller.client.close()
    _controller = None
    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Logo Replay",
    description="Replays the logo history as a scrubbable timeline",
    version=settings.app.version,
    lifespan=lifespan,
)


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Rendered viewer page."""
    return HTMLResponse(
        render_page(current_view(), image_width=settings.viewer.image_width)
    )


@app.get("/view")
async def view() -> JSONResponse:
    """Current view model."""
    return JSONResponse(current_view().model_dump(mode="json"))


@app.post("/toggle")
async def toggle() -> JSONResponse:
    """Play/pause."""
    get_controller().handle(TogglePlaying())
    return JSONResponse(current_view().model_dump(mode="json"))


@app.post("/cursor")
async def cursor(position: float = Query(..., allow_inf_nan=False)) -> JSONResponse:
    """Move the cursor to the nearest integer position."""
    get_controller().handle(SetCursor(position=position))
    return JSONResponse(current_view().model_dump(mode="json"))


@app.get("/health")
async def health() -> JSONResponse:
    """
    Liveness probe.

    Always returns 200 while the process is running; fetch failures are
    reported in the body, not the status code.
    """
    controller = get_controller()
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
        "history_length": len(controller.store.history),
        "pending_fetches": controller.pending_fetches,
        "listeners": len(_listeners),
        **controller.store.metrics.to_dict(),
    })


# =============================================================================
# WebSocket Endpoints
# =============================================================================

async def _send_views(
    websocket: WebSocket, listener_id: int, queue: "asyncio.Queue[ViewModel]"
) -> None:
    """Forward queued views to one listener; a failed send drops the listener."""
    try:
        while True:
            view_model = await queue.get()
            await websocket.send_json(view_model.model_dump(mode="json"))
    except Exception as e:
        logger.warning(f"Send failed, dropping listener {listener_id}: {e}")
        _listeners.pop(listener_id, None)


@app.websocket("/ws/view")
async def view_stream(websocket: WebSocket) -> None:
    """WebSocket endpoint pushing the view after every state change."""
    await websocket.accept()

    listener_id = next(_listener_ids)
    queue: asyncio.Queue[ViewModel] = asyncio.Queue(maxsize=LISTENER_QUEUE_SIZE)
    queue.put_nowait(current_view())
    _listeners[listener_id] = queue
    logger.info(f"New listener: {listener_id}")

    sender = asyncio.create_task(
        _send_views(websocket, listener_id, queue), name=f"view_listener_{listener_id}"
    )

    try:
        # Listeners have nothing to say; read until they disconnect
        while True:
            message = await websocket.receive_text()
            logger.debug(f"Message from listener {listener_id}: {message}")
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.warning(f"WebSocket error (listener={listener_id}): {e}")
    finally:
        _listeners.pop(listener_id, None)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        logger.info(f"Good bye listener: {listener_id}")
