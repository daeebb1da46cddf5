"""Fan-out of full post snapshots to realtime subscribers."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable, Sequence
from threading import Lock

from campus_board.models.records import PostRecord

logger = logging.getLogger(__name__)

Snapshot = Sequence[PostRecord]
SnapshotListener = Callable[[Snapshot], None]


class SnapshotHub:
    """Delivers the whole post collection to every listener after each write.

    Listeners are plain callables and may be invoked from any thread; use
    :func:`queue_listener` to bridge into an event loop.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, SnapshotListener] = {}
        self._ids = itertools.count(1)
        self._lock = Lock()

    @property
    def has_listeners(self) -> bool:
        """Return True when at least one listener is registered."""
        with self._lock:
            return bool(self._listeners)

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        token = next(self._ids)
        with self._lock:
            self._listeners[token] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(token, None)

        return unsubscribe

    def publish(self, snapshot: Snapshot) -> None:
        """Send ``snapshot`` to every listener.

        A failing listener is logged and skipped so the remaining listeners
        still receive the snapshot.
        """
        with self._lock:
            listeners = list(self._listeners.values())
        frozen = tuple(snapshot)
        for listener in listeners:
            try:
                listener(frozen)
            except Exception:
                logger.exception("Snapshot listener failed")


def queue_listener(
    loop: asyncio.AbstractEventLoop,
    queue: asyncio.Queue[Snapshot],
) -> SnapshotListener:
    """Return a listener that hands snapshots to ``queue`` on ``loop``.

    Only the newest snapshot matters, so when the queue is full the oldest
    pending snapshot is dropped to make room.
    """

    def _offer(snapshot: Snapshot) -> None:
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(snapshot)

    def listener(snapshot: Snapshot) -> None:
        if loop.is_closed():
            return
        loop.call_soon_threadsafe(_offer, snapshot)

    return listener


_hub = SnapshotHub()


def get_snapshot_hub() -> SnapshotHub:
    """Return the process-wide snapshot hub."""
    return _hub
