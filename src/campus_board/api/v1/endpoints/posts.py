# src/campus_board/api/v1/endpoints/posts.py
"""Post-related endpoints for the Campus Board API."""

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status

from campus_board.api.v1.dependencies import (
    CurrentUserDep,
    NowDep,
    OptionalUserDep,
    PostRepoDep,
    ReportRepoDep,
    http_error,
)
from campus_board.core.errors import BoardError, NotFound
from campus_board.models.enums import RankingMode
from campus_board.models.records import PostRecord
from campus_board.repositories import PostRepository
from campus_board.schemas.post import PostCreate, PostResponse
from campus_board.schemas.report import ReportCreate, ReportResponse
from campus_board.services.engagement import delete_own_post, submit_report, toggle_like
from campus_board.services.expiry import filter_live, is_expired
from campus_board.services.feed import compose_feed, parse_category_selection
from campus_board.services.submission import build_post

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def _live_post(repo: PostRepository, post_id: str, now: int) -> PostRecord:
    """Return the post if it exists and has not expired.

    Raises:
        NotFound: If the post is missing or expired
    """
    post = repo.get(post_id)
    if post is None or is_expired(post, now):
        raise NotFound("Post not found")
    return post


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    repo: PostRepoDep,
    viewer_id: OptionalUserDep,
    now: NowDep,
    categories: str | None = Query(
        None, description="Comma separated categories, or 'all'"
    ),
    sort: RankingMode = Query(RankingMode.NEWEST, description="newest, best or trending"),
    limit: int | None = Query(None, ge=1, le=500, description="Maximum posts, all when omitted"),
) -> list[PostResponse]:
    """Return the live feed for the selected categories and ranking.

    Args:
        repo: Post repository
        viewer_id: Caller's anonymous id, if signed in
        now: Reference instant
        categories: Category selection; empty or containing ``all`` means every category
        sort: Ranking mode
        limit: Maximum number of posts to return; the whole feed when omitted

    Returns:
        Live posts in display order
    """
    try:
        posts = repo.list_all()
    except BoardError as exc:
        raise http_error(exc) from exc
    selection = parse_category_selection(categories)
    feed = compose_feed(filter_live(posts, now), selection, sort, now)
    return [
        PostResponse.from_record(post, now=now, viewer_id=viewer_id)
        for post in feed[:limit]
    ]


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
    now: NowDep,
) -> PostResponse:
    """Create a new post after validation and moderation.

    Args:
        post_data: Title, content and category
        current_user: Anonymous author id
        repo: Post repository
        now: Creation instant

    Returns:
        The stored post

    Raises:
        HTTPException: 400 for missing fields or rejected content, 503 if the
            store is unavailable
    """
    try:
        new_post = build_post(
            title=post_data.title,
            content=post_data.content,
            category=post_data.category,
            author_id=current_user,
            now=now,
        )
        post_id = repo.insert(new_post)
        stored = repo.get(post_id)
    except BoardError as exc:
        raise http_error(exc) from exc
    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Post was not stored",
        )
    logger.info("Created post %s in %s", post_id, new_post.category)
    return PostResponse.from_record(stored, now=now, viewer_id=current_user)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    repo: PostRepoDep,
    viewer_id: OptionalUserDep,
    now: NowDep,
) -> PostResponse:
    """Get a specific live post by ID.

    Raises:
        HTTPException: If the post is missing or expired
    """
    try:
        post = _live_post(repo, post_id, now)
    except BoardError as exc:
        raise http_error(exc) from exc
    return PostResponse.from_record(post, now=now, viewer_id=viewer_id)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> Response:
    """Delete a post written by the caller.

    Raises:
        HTTPException: 404 if the post does not exist, 403 if the caller is
            not its author
    """
    try:
        post = repo.get(post_id)
        if post is None:
            raise NotFound("Post not found")
        delete_own_post(post, current_user, delete_post=repo.delete)
    except BoardError as exc:
        raise http_error(exc) from exc
    logger.info("Author deleted post %s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=PostResponse)
async def like_post(
    post_id: str,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
    now: NowDep,
) -> PostResponse:
    """Toggle the caller's like on a post.

    The first call likes the post, the second removes the like.

    Returns:
        The post with its updated counter
    """
    try:
        post = _live_post(repo, post_id, now)
        patch = toggle_like(post, current_user)
        updated = repo.patch(post_id, patch)
    except BoardError as exc:
        raise http_error(exc) from exc
    logger.debug("User %s %s like on post %s", current_user, patch.change, post_id)
    return PostResponse.from_record(updated, now=now, viewer_id=current_user)


@router.post(
    "/{post_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_post(
    post_id: str,
    report_data: ReportCreate,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
    reports: ReportRepoDep,
    now: NowDep,
) -> ReportResponse:
    """File a report against a live post.

    Args:
        post_id: Reported post
        report_data: Reason, either a listed reason or free text
        current_user: Reporter's anonymous id
        repo: Post repository
        reports: Report repository
        now: Report instant

    Returns:
        The pending report
    """
    try:
        _live_post(repo, post_id, now)
        report = reports.append(submit_report(post_id, current_user, report_data.reason, now))
    except BoardError as exc:
        raise http_error(exc) from exc
    logger.info("Post %s reported: %s", post_id, report.reason)
    return ReportResponse.from_record(report)
