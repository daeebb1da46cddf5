"""Immutable in-memory records handed between the store and the feed engine.

The ORM classes in :mod:`campus_board.models.post` and
:mod:`campus_board.models.report` own persistence; these records are what the
pure feed functions consume and what snapshots carry to subscribers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from .enums import Category, ReportStatus

# Upstream data may carry instants as epoch milliseconds or as datetimes.
Instant = int | float | datetime


@dataclass(frozen=True, slots=True)
class NewPost:
    """A validated submission that has not been assigned an id yet."""

    title: str
    content: str
    category: Category
    timestamp: int
    expires_at: int
    anonymous_user_id: str


@dataclass(frozen=True, slots=True)
class PostRecord:
    """A post as seen by readers of a snapshot."""

    id: str
    title: str
    content: str
    category: Category
    timestamp: int
    expires_at: Instant | None
    anonymous_user_id: str
    likes: int = 0
    liked_by: frozenset[str] = field(default_factory=frozenset)
    # Legacy flag; liveness is derived from expires_at only.
    is_active: bool = True


class LikeChange(StrEnum):
    """Direction of a like toggle."""

    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class PatchOp:
    """Field patch produced by a like toggle.

    ``likes`` is the absolute value to write (last write wins); the ``liked_by``
    change only touches the entry for ``user_id``.
    """

    post_id: str
    likes: int
    user_id: str
    change: LikeChange


@dataclass(frozen=True, slots=True)
class ReportRecord:
    """A report filed against a post."""

    post_id: str
    reported_by: str
    reason: str
    timestamp: int
    status: ReportStatus = ReportStatus.PENDING
    admin_action: int | None = None
    id: str | None = None
