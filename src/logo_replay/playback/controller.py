"""
Playback Controller
===================

Owns the playback state and drives the two viewer timers.

This module provides the PlaybackController class which:
    - Runs an explicit event dispatch loop over an asyncio.Queue
    - Advances the cursor on a short timer while playing
    - Re-fetches the history on a long timer for its whole lifetime
    - Applies fetch results to the HistoryStore
    - Notifies subscribers after every handled event

Design Rules:
    - Single writer: only handle() mutates state, one event at a time
    - The advance timer exists only while playing
    - In-flight fetches are never cancelled by newer ones; last to resolve wins
    - Timer ticks, user input and fetch completions may interleave in any order
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from logo_replay.history.client import HistoryClient
from logo_replay.history.store import HistoryStore
from logo_replay.models.playback import PlaybackState
from logo_replay.playback.events import (
    AdvanceTick,
    Event,
    FetchCompleted,
    RefreshTick,
    SetCursor,
    TogglePlaying,
)
from logo_replay.playback.state import advance, set_cursor, toggle_playing


logger = logging.getLogger(__name__)


Subscriber = Callable[[], None]


class PlaybackController:
    """
    Event-driven playback controller.

    Attributes:
        store: HistoryStore receiving fetch results
        advance_interval: Seconds between cursor advances while playing
        refresh_interval: Seconds between history re-fetches

    Example:
        controller = PlaybackController(
            client=HistoryClient(settings.history.url),
            initial=PlaybackState(playing=True),
        )
        await controller.start()
        ...
        controller.post(TogglePlaying())
        ...
        await controller.stop()
    """

    def __init__(
        self,
        client: HistoryClient,
        store: Optional[HistoryStore] = None,
        initial: PlaybackState = PlaybackState(),
        advance_interval: float = 0.05,
        refresh_interval: float = 300.0,
    ) -> None:
        """
        Initialize playback controller.

        Args:
            client: Client used for every history fetch
            store: Store to apply results to (a fresh one if omitted)
            initial: Playback state from the startup flags
            advance_interval: Advance timer period in seconds
            refresh_interval: Refresh timer period in seconds
        """
        if advance_interval <= 0 or refresh_interval <= 0:
            raise ValueError("timer intervals must be > 0")

        self.client = client
        self.store = store if store is not None else HistoryStore()
        self.advance_interval = advance_interval
        self.refresh_interval = refresh_interval

        self._state = initial
        self._queue: asyncio.Queue[Event] = asyncio.Queue()
        self._subscribers: List[Subscriber] = []
        self._running: bool = False

        self._dispatch_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self._advance_task: Optional[asyncio.Task] = None
        self._fetch_tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> PlaybackState:
        """Current playback state."""
        return self._state

    @property
    def running(self) -> bool:
        """Whether the dispatch loop and timers are active."""
        return self._running

    @property
    def advancing(self) -> bool:
        """Whether the advance timer is currently scheduled."""
        return self._advance_task is not None

    @property
    def pending_fetches(self) -> int:
        """Number of fetches still in flight."""
        return len(self._fetch_tasks)

    # -------------------------------------------------------------------------
    # Subscribers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback run after every handled event.

        Returns:
            A function that removes the callback again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback()
            except Exception as e:
                logger.error(f"Subscriber error, removing subscriber: {e}")
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """
        Start the dispatch loop and timers.

        The refresh timer fires immediately, so this also triggers the
        initial history fetch.
        """
        if self._running:
            return

        self._running = True
        logger.info(
            f"PlaybackController starting "
            f"(advance={self.advance_interval * 1000:.0f}ms, "
            f"refresh={self.refresh_interval:.0f}s, playing={self._state.playing})"
        )

        self._dispatch_task = asyncio.create_task(
            self._dispatch_loop(), name="playback_dispatch"
        )
        self._refresh_task = asyncio.create_task(
            self._refresh_timer(), name="history_refresh"
        )
        self._sync_advance_timer()

    async def stop(self) -> None:
        """Cancel timers, in-flight fetches and the dispatch loop."""
        if not self._running:
            return

        logger.info("PlaybackController stopping...")
        self._running = False

        tasks = [
            t for t in (self._advance_task, self._refresh_task, self._dispatch_task)
            if t is not None
        ]
        tasks.extend(self._fetch_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._advance_task = None
        self._refresh_task = None
        self._dispatch_task = None
        self._fetch_tasks.clear()

        logger.info("PlaybackController stopped")

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def post(self, event: Event) -> None:
        """Queue an event for the dispatch loop."""
        self._queue.put_nowait(event)

    def handle(self, event: Event) -> PlaybackState:
        """
        Apply one event to completion.

        Safe to call directly from code running on the event loop; it never
        awaits, so it cannot interleave with the dispatch loop.

        Args:
            event: Event to apply

        Returns:
            Playback state after the event
        """
        if isinstance(event, AdvanceTick):
            # A tick queued just before a pause is dropped
            if self._state.playing:
                self._state = advance(self._state, len(self.store.history))
        elif isinstance(event, RefreshTick):
            self._spawn_fetch()
        elif isinstance(event, SetCursor):
            self._state = set_cursor(self._state, event.position)
        elif isinstance(event, TogglePlaying):
            self._state = toggle_playing(self._state)
            logger.info(f"Playback {'started' if self._state.playing else 'paused'}")
            self._sync_advance_timer()
        elif isinstance(event, FetchCompleted):
            self.store.apply(event.result)
        else:
            raise TypeError(f"Unknown event: {event!r}")

        self._notify()
        return self._state

    async def _dispatch_loop(self) -> None:
        """Process queued events one at a time until cancelled."""
        while True:
            event = await self._queue.get()
            try:
                self.handle(event)
            except Exception as e:
                logger.error(f"Error handling {type(event).__name__}: {e}")

    # -------------------------------------------------------------------------
    # Timers and fetches
    # -------------------------------------------------------------------------

    def _sync_advance_timer(self) -> None:
        """Start or cancel the advance timer to match the playing flag."""
        if not self._running:
            return

        if self._state.playing and self._advance_task is None:
            self._advance_task = asyncio.create_task(
                self._advance_timer(), name="playback_advance"
            )
        elif not self._state.playing and self._advance_task is not None:
            self._advance_task.cancel()
            self._advance_task = None

    async def _advance_timer(self) -> None:
        while True:
            await asyncio.sleep(self.advance_interval)
            self.post(AdvanceTick())

    async def _refresh_timer(self) -> None:
        while True:
            self.post(RefreshTick())
            await asyncio.sleep(self.refresh_interval)

    def _spawn_fetch(self) -> None:
        if not self._running:
            logger.debug("Refresh ignored, controller not running")
            return

        task = asyncio.create_task(self._fetch(), name="history_fetch")
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)

    async def _fetch(self) -> None:
        result = await self.client.fetch_history()
        self.post(FetchCompleted(result=result))
