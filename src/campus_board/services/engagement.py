"""Like toggling, report submission and author deletes."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from campus_board.core.errors import Unauthorized, ValidationError
from campus_board.models.records import LikeChange, PatchOp, PostRecord, ReportRecord


def toggle_like(post: PostRecord, user_id: str) -> PatchOp:
    """Return the patch that flips ``user_id``'s like on ``post``.

    The new ``likes`` value is computed from the caller's snapshot and written
    as an absolute value, so the store applies it last-write-wins. Removing a
    like never takes the counter below zero, even when the snapshot is stale.

    Two toggles from the same user racing each other can both read the same
    snapshot and double count; nothing here serializes them.
    """
    if not user_id:
        raise ValidationError("A user id is required to like a post")
    if user_id in post.liked_by:
        return PatchOp(
            post_id=post.id,
            likes=max(0, post.likes - 1),
            user_id=user_id,
            change=LikeChange.REMOVE,
        )
    return PatchOp(
        post_id=post.id,
        likes=max(0, post.likes) + 1,
        user_id=user_id,
        change=LikeChange.ADD,
    )


def apply_patch(post: PostRecord, patch: PatchOp) -> PostRecord:
    """Return ``post`` with ``patch`` applied.

    Raises:
        ValueError: If the patch targets a different post.
    """
    if patch.post_id != post.id:
        raise ValueError(f"patch for {patch.post_id} applied to post {post.id}")
    if patch.change == LikeChange.ADD:
        liked_by = post.liked_by | {patch.user_id}
    else:
        liked_by = post.liked_by - {patch.user_id}
    return dataclasses.replace(post, likes=max(0, patch.likes), liked_by=liked_by)


def submit_report(post_id: str, user_id: str, reason: str, now: int) -> ReportRecord:
    """Build a pending report against ``post_id``.

    ``reason`` may be one of the listed report reasons or free text. There is
    no rate limit on how many reports a user may file.

    Raises:
        ValidationError: If the post id, user id or reason is blank.
    """
    if not post_id or not user_id:
        raise ValidationError("Missing required fields")
    cleaned = (reason or "").strip()
    if not cleaned:
        raise ValidationError("A report reason is required")
    return ReportRecord(
        post_id=post_id,
        reported_by=user_id,
        reason=cleaned,
        timestamp=now,
    )


def delete_own_post(post: PostRecord, user_id: str, *, delete_post: Callable[[str], bool]) -> bool:
    """Delete ``post`` on behalf of its author.

    Returns:
        Whatever ``delete_post`` reports, True when a row was removed.

    Raises:
        Unauthorized: If ``user_id`` did not write the post.
    """
    if not user_id or post.anonymous_user_id != user_id:
        raise Unauthorized("Only the author can delete this post")
    return delete_post(post.id)
