"""Snapshot holder for a single reader of the realtime feed."""

from __future__ import annotations

from collections.abc import Iterable

from campus_board.models.enums import RankingMode
from campus_board.models.records import Instant, PostRecord

from .expiry import filter_live
from .feed import CategorySelection, compose_feed


class BoardState:
    """Latest post collection seen by one subscriber.

    The collection is only ever swapped out whole by :meth:`replace`; readers
    rerun the pure feed pipeline against it instead of patching it.
    """

    def __init__(self) -> None:
        self._posts: tuple[PostRecord, ...] = ()

    @property
    def posts(self) -> tuple[PostRecord, ...]:
        """Return the current snapshot."""
        return self._posts

    def replace(self, snapshot: Iterable[PostRecord]) -> None:
        """Swap in a new full snapshot."""
        self._posts = tuple(snapshot)

    def feed(
        self,
        selection: CategorySelection,
        mode: RankingMode,
        now: Instant,
    ) -> list[PostRecord]:
        """Return the live, filtered and ranked view of the snapshot."""
        return compose_feed(filter_live(self._posts, now), selection, mode, now)
