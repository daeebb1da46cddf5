"""Feed composition: category selection followed by a ranking pass.

Callers run :func:`campus_board.services.expiry.filter_live` first; nothing in
this module looks at expiry.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final, Literal

from campus_board.core.settings import settings
from campus_board.models.enums import AdminView, Category, RankingMode
from campus_board.models.records import Instant, PostRecord

from .expiry import normalize_instant

ALL: Final = "all"

CategorySelection = Literal["all"] | frozenset[Category]


def parse_category_selection(raw: str | Iterable[str] | None) -> CategorySelection:
    """Build a category selection from user input.

    Accepts a comma separated string or an iterable of names. ``None``, an
    empty input, or any input naming ``all`` selects every category. Unknown
    names are ignored, so a selection made only of unknown names matches
    nothing.
    """
    if raw is None:
        return ALL
    names = raw.split(",") if isinstance(raw, str) else list(raw)
    cleaned = [name.strip().lower() for name in names if name and name.strip()]
    if not cleaned or ALL in cleaned:
        return ALL
    selected: set[Category] = set()
    for name in cleaned:
        try:
            selected.add(Category(name))
        except ValueError:
            continue
    return frozenset(selected)


def select_categories(
    posts: Iterable[PostRecord],
    selection: CategorySelection,
) -> list[PostRecord]:
    """Keep the posts whose category is part of ``selection``."""
    if selection == ALL:
        return list(posts)
    return [post for post in posts if post.category in selection]


def trending_score(post: PostRecord, now: Instant) -> int:
    """Return the point-in-time trending score of ``post``.

    Posts created inside the trending window count their likes with the
    configured multiplier; older posts count them once.
    """
    window_start = normalize_instant(now) - settings.trending_window_ms
    if post.timestamp > window_start:
        return post.likes * settings.trending_multiplier
    return post.likes


def rank(posts: Iterable[PostRecord], mode: RankingMode, now: Instant) -> list[PostRecord]:
    """Order ``posts`` for ``mode``; equal keys keep their input order."""
    # sorted() is stable with reverse=True as well, which the ranking relies on.
    if mode == RankingMode.BEST:
        return sorted(posts, key=lambda post: post.likes, reverse=True)
    if mode == RankingMode.TRENDING:
        reference = normalize_instant(now)
        return sorted(posts, key=lambda post: trending_score(post, reference), reverse=True)
    return sorted(posts, key=lambda post: post.timestamp, reverse=True)


def compose_feed(
    posts: Iterable[PostRecord],
    selection: CategorySelection,
    mode: RankingMode,
    now: Instant,
) -> list[PostRecord]:
    """Return the display order for already expiry-filtered ``posts``.

    Args:
        posts: Live posts, typically the output of ``filter_live``.
        selection: ``ALL`` or a set of categories to keep.
        mode: Ranking mode to apply.
        now: Reference instant; only the trending mode depends on it.

    Returns:
        A new list; the input is never reordered in place.
    """
    return rank(select_categories(posts, selection), RankingMode(mode), now)


def admin_view(
    posts: Iterable[PostRecord],
    view: AdminView,
    *,
    flagged_ids: frozenset[str] = frozenset(),
) -> list[PostRecord]:
    """Return one of the admin console listings over live ``posts``.

    ``recent`` is the newest few posts, ``popular`` orders by likes and
    ``flagged`` keeps posts that have a pending report in ``flagged_ids``.
    """
    items = list(posts)
    if view == AdminView.RECENT:
        newest = sorted(items, key=lambda post: post.timestamp, reverse=True)
        return newest[: settings.admin_recent_limit]
    if view == AdminView.POPULAR:
        return sorted(items, key=lambda post: post.likes, reverse=True)
    if view == AdminView.FLAGGED:
        return [post for post in items if post.id in flagged_ids]
    return items
