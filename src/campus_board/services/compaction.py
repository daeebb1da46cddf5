"""Background removal of expired posts from the store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from campus_board.core.errors import StoreUnavailable
from campus_board.core.settings import settings
from campus_board.db.time import now_ms
from campus_board.repositories.post_repo import PostRepository

from .realtime import SnapshotHub, get_snapshot_hub

logger = logging.getLogger(__name__)


class ExpirySweepWorker:
    """Periodically deletes posts whose expiry instant has passed.

    Readers never depend on this worker: expired posts are already hidden by
    the expiry filter. The sweep only reclaims storage, the way a TTL index
    would in a document store.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        hub: SnapshotHub | None = None,
        interval: float | None = None,
    ) -> None:
        """Initialize the sweep worker.

        Args:
            session_factory: Callable returning a new database session per sweep.
            hub: Snapshot hub notified when rows are removed.
            interval: Seconds between sweeps; defaults to the configured value.
        """
        self._session_factory = session_factory
        self._hub = hub or get_snapshot_hub()
        self._interval = max(
            0.1,
            float(interval if interval is not None else settings.expiry_sweep_interval_seconds),
        )
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    async def start(self) -> None:
        """Start the background sweep loop."""
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background sweep loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    def sweep_once(self, now: int | None = None) -> int:
        """Run a single sweep and return how many posts were removed."""
        session = self._session_factory()
        try:
            removed = PostRepository(session, self._hub).purge_expired(
                now if now is not None else now_ms()
            )
        finally:
            session.close()
        if removed:
            logger.info("Expiry sweep removed %d posts", removed)
        return removed

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.to_thread(self.sweep_once)
            except StoreUnavailable as e:
                logger.warning("ExpirySweepWorker could not reach the store: %s", e)
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except TimeoutError:
                continue
