# src/campus_board/services/moderation.py
"""Banned-term gate applied to submissions before they reach the store."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from campus_board.core.errors import ModerationRejected

logger = logging.getLogger(__name__)

BANNED_TERMS: tuple[str, ...] = (
    "spam", "scam", "fraud", "hate", "violence", "bullying", "harassment",
    "abuse", "discrimination", "threat", "illegal", "explicit", "nsfw",
    "offensive", "inappropriate", "drugs", "alcohol", "gambling",
)

REJECTION_REASON = "Content contains inappropriate language. Please revise your post."


@dataclass(frozen=True, slots=True)
class ModerationVerdict:
    """Outcome of the banned-term check."""

    allowed: bool
    reason: str | None = None


def moderate(title: str, content: str) -> ModerationVerdict:
    """Check a submission against the banned-term list.

    This is a plain case-insensitive substring match over ``title`` and
    ``content``; it does no tokenization and is easy to evade. The verdict
    never names the term that matched.
    """
    text = f"{title} {content}".lower()
    for term in BANNED_TERMS:
        if term in text:
            return ModerationVerdict(allowed=False, reason=REJECTION_REASON)
    return ModerationVerdict(allowed=True)


def ensure_allowed(title: str, content: str) -> None:
    """Raise :class:`ModerationRejected` when :func:`moderate` rejects."""
    verdict = moderate(title, content)
    if not verdict.allowed:
        logger.info("Submission rejected by banned-term filter")
        raise ModerationRejected(verdict.reason or REJECTION_REASON)
