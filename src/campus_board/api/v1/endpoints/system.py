"""Catalogue and transparency endpoints for the Campus Board API."""

from __future__ import annotations

from fastapi import APIRouter

from campus_board.api.v1.dependencies import NowDep, PostRepoDep, http_error
from campus_board.core.errors import BoardError
from campus_board.models.enums import CATEGORY_NAMES, Category
from campus_board.schemas.post import CategoryInfo
from campus_board.schemas.stats import AnalyticsResponse
from campus_board.services.stats import analytics

router = APIRouter(tags=["system"])


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories() -> list[CategoryInfo]:
    """Return every category with its display name, in menu order."""
    return [CategoryInfo(value=category, name=CATEGORY_NAMES[category]) for category in Category]


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(repo: PostRepoDep, now: NowDep) -> AnalyticsResponse:
    """Return total, active and expired post counts plus distinct authors.

    Expired posts still count toward the total until the sweep removes them.
    """
    try:
        result = analytics(repo.list_all(), now)
    except BoardError as exc:
        raise http_error(exc) from exc
    return AnalyticsResponse(
        total_posts=result.total_posts,
        active_posts=result.active_posts,
        expired_posts=result.expired_posts,
        unique_authors=result.unique_authors,
    )
