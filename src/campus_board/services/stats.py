"""Counters for the admin console and the public analytics endpoint."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from campus_board.models.enums import ReportStatus
from campus_board.models.records import Instant, PostRecord, ReportRecord

from .expiry import filter_live


@dataclass(frozen=True, slots=True)
class BoardStats:
    """Admin dashboard numbers."""

    live_posts: int
    total_likes: int
    unique_authors: int
    pending_reports: int


@dataclass(frozen=True, slots=True)
class Analytics:
    """Collection-wide counts, expired rows included."""

    total_posts: int
    active_posts: int
    expired_posts: int
    unique_authors: int


def board_stats(
    posts: Sequence[PostRecord],
    reports: Sequence[ReportRecord],
    now: Instant,
) -> BoardStats:
    """Summarize the collection for the admin console.

    Likes and authors are counted over every stored post; only the post count
    is restricted to live posts.
    """
    return BoardStats(
        live_posts=len(filter_live(posts, now)),
        total_likes=sum(post.likes for post in posts),
        unique_authors=len({post.anonymous_user_id for post in posts}),
        pending_reports=sum(1 for report in reports if report.status == ReportStatus.PENDING),
    )


def analytics(posts: Sequence[PostRecord], now: Instant) -> Analytics:
    """Return total, active and expired counts plus distinct authors."""
    active = len(filter_live(posts, now))
    return Analytics(
        total_posts=len(posts),
        active_posts=active,
        expired_posts=len(posts) - active,
        unique_authors=len({post.anonymous_user_id for post in posts}),
    )
