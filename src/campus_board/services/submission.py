"""Service-level helpers for turning a submission into a storable post."""
from __future__ import annotations

from campus_board.core.errors import ValidationError
from campus_board.core.settings import settings
from campus_board.models.enums import normalize_category
from campus_board.models.records import NewPost

from .moderation import ensure_allowed


def build_post(
    *,
    title: str | None,
    content: str | None,
    category: str | None,
    author_id: str | None,
    now: int,
) -> NewPost:
    """Validate, moderate and normalize a submission.

    Args:
        title: Raw title text.
        content: Raw body text.
        category: Category name; absent or unknown names fall back to ``general``.
        author_id: Anonymous session id of the author.
        now: Creation instant in epoch milliseconds.

    Returns:
        A post ready for insertion, with title and content truncated and the
        expiry set one TTL after ``now``.

    Raises:
        ValidationError: If title, content or author is missing.
        ModerationRejected: If the text matches the banned-term list.

    Notes:
        Moderation runs on the full text before truncation, so a banned term
        past the length limit still rejects the post.
    """
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content or not author_id:
        raise ValidationError("Missing required fields")

    ensure_allowed(title, content)

    return NewPost(
        title=title[: settings.title_max_length],
        content=content[: settings.content_max_length],
        category=normalize_category(category),
        timestamp=now,
        expires_at=now + settings.post_ttl_ms,
        anonymous_user_id=author_id,
    )
