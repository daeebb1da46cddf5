"""Time-to-live enforcement for posts.

A post is live while ``now < expires_at``. Liveness is a pure function of the
wall clock, so display never waits on the sweep worker to delete anything.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime

from campus_board.core.settings import settings
from campus_board.models.records import Instant, PostRecord


def normalize_instant(value: Instant | date) -> int:
    """Return ``value`` as integer epoch milliseconds.

    Numbers are taken to be epoch milliseconds already. Naive datetimes are
    read as UTC; a bare ``date`` means midnight UTC of that day.

    Raises:
        TypeError: If ``value`` is not a number, datetime or date.
    """
    if isinstance(value, bool):
        raise TypeError("instant must be a number or datetime, not bool")
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return int(value.timestamp() * 1000)
    if isinstance(value, date):
        return normalize_instant(datetime(value.year, value.month, value.day, tzinfo=UTC))
    raise TypeError(f"unsupported instant type: {type(value).__name__}")


def expiry_of(post: PostRecord) -> int:
    """Return the normalized expiry instant of ``post``.

    Records without ``expires_at`` expire one TTL after their timestamp.
    """
    if post.expires_at is None:
        return normalize_instant(post.timestamp) + settings.post_ttl_ms
    return normalize_instant(post.expires_at)


def is_expired(post: PostRecord, now: Instant) -> bool:
    """Return True once ``now`` has reached the post's expiry instant."""
    return expiry_of(post) <= normalize_instant(now)


def time_remaining(post: PostRecord, now: Instant) -> int:
    """Return the milliseconds left before ``post`` expires, never negative."""
    return max(0, expiry_of(post) - normalize_instant(now))


def filter_live(posts: Iterable[PostRecord], now: Instant) -> list[PostRecord]:
    """Return the posts that have not expired at ``now``, keeping input order."""
    reference = normalize_instant(now)
    return [post for post in posts if expiry_of(post) > reference]
