# src/campus_board/api/v1/endpoints/admin.py
"""Admin console endpoints: post views, report review and dashboard stats."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Response, status

from campus_board.api.v1.dependencies import (
    AdminDep,
    NowDep,
    PostRepoDep,
    ReportRepoDep,
    http_error,
)
from campus_board.core.errors import BoardError, NotFound
from campus_board.models.enums import AdminView, ReportStatus
from campus_board.schemas.post import PostResponse
from campus_board.schemas.report import ReportResolve, ReportResponse
from campus_board.schemas.stats import BoardStatsResponse
from campus_board.services.expiry import filter_live
from campus_board.services.feed import admin_view
from campus_board.services.reports import resolve_report
from campus_board.services.stats import board_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/posts", response_model=list[PostResponse])
async def list_admin_posts(
    _admin: AdminDep,
    repo: PostRepoDep,
    reports: ReportRepoDep,
    now: NowDep,
    view: AdminView = Query(AdminView.ALL, description="all, recent, popular or flagged"),
) -> list[PostResponse]:
    """Return live posts for one of the admin views.

    ``flagged`` lists live posts that have at least one pending report.
    """
    try:
        posts = filter_live(repo.list_all(), now)
        flagged_ids: frozenset[str] = frozenset()
        if view == AdminView.FLAGGED:
            flagged_ids = frozenset(
                report.post_id for report in reports.list_reports(status=ReportStatus.PENDING)
            )
    except BoardError as exc:
        raise http_error(exc) from exc
    return [
        PostResponse.from_record(post, now=now)
        for post in admin_view(posts, view, flagged_ids=flagged_ids)
    ]


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_post(post_id: str, _admin: AdminDep, repo: PostRepoDep) -> Response:
    """Delete any post. Deleting a post that is already gone succeeds."""
    try:
        removed = repo.delete(post_id)
    except BoardError as exc:
        raise http_error(exc) from exc
    if removed:
        logger.info("Admin deleted post %s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(
    _admin: AdminDep,
    reports: ReportRepoDep,
    status_filter: ReportStatus | None = Query(None, alias="status"),
    post_id: str | None = Query(None),
) -> list[ReportResponse]:
    """Return reports, oldest first, optionally filtered by status or post."""
    try:
        records = reports.list_reports(status=status_filter, post_id=post_id)
    except BoardError as exc:
        raise http_error(exc) from exc
    return [ReportResponse.from_record(report) for report in records]


@router.post("/reports/{report_id}/resolve", response_model=ReportResponse)
async def resolve(
    report_id: str,
    decision: ReportResolve,
    _admin: AdminDep,
    repo: PostRepoDep,
    reports: ReportRepoDep,
    now: NowDep,
) -> ReportResponse:
    """Approve or reject a pending report.

    The decision is stored first, only while the report is still pending;
    a rejection then removes the reported post.

    Raises:
        HTTPException: 404 for an unknown report, 409 if the report is no
            longer pending or the action is not a final status
    """
    try:
        report = reports.get(report_id)
        if report is None:
            raise NotFound("Report not found")
        saved = resolve_report(
            report,
            decision.action,
            delete_post=repo.delete,
            now=now,
            claim=reports.save,
        )
    except BoardError as exc:
        raise http_error(exc) from exc
    logger.info("Report %s resolved as %s", report_id, saved.status)
    return ReportResponse.from_record(saved)


@router.get("/stats", response_model=BoardStatsResponse)
async def get_stats(
    _admin: AdminDep,
    repo: PostRepoDep,
    reports: ReportRepoDep,
    now: NowDep,
) -> BoardStatsResponse:
    """Return the admin dashboard counters."""
    try:
        stats = board_stats(repo.list_all(), reports.list_reports(), now)
    except BoardError as exc:
        raise http_error(exc) from exc
    return BoardStatsResponse(
        live_posts=stats.live_posts,
        total_likes=stats.total_likes,
        unique_authors=stats.unique_authors,
        pending_reports=stats.pending_reports,
    )
