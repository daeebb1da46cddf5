"""Admin decisions on reports."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from campus_board.core.errors import InvalidTransition
from campus_board.models.enums import TERMINAL_REPORT_STATUSES, ReportStatus
from campus_board.models.records import ReportRecord

logger = logging.getLogger(__name__)


def resolve_report(
    report: ReportRecord,
    action: ReportStatus | str,
    *,
    delete_post: Callable[[str], object],
    now: int,
    claim: Callable[[ReportRecord], ReportRecord] | None = None,
) -> ReportRecord:
    """Move a pending report to ``approved`` or ``rejected``.

    ``approved`` dismisses the report and leaves the post alone. ``rejected``
    also removes the reported post through ``delete_post``; that callable must
    treat a post that is already gone as success.

    When ``claim`` is given it stores the decision before the post is touched
    and raises if another decision got there first, so only the winning
    rejection deletes anything.

    Args:
        report: The report to resolve.
        action: ``approved`` or ``rejected``.
        delete_post: Store operation that deletes a post by id.
        now: Instant recorded as ``admin_action``.
        claim: Store operation that persists the decision on a still-pending
            report and returns the stored record.

    Returns:
        The resolved report; the input record is left unchanged.

    Raises:
        InvalidTransition: If the report is not pending or ``action`` is not
            a terminal status.
    """
    try:
        target = ReportStatus(action)
    except ValueError as err:
        raise InvalidTransition(f"Unknown report action: {action}") from err
    if target not in TERMINAL_REPORT_STATUSES:
        raise InvalidTransition("A report can only be resolved to approved or rejected")
    if report.status != ReportStatus.PENDING:
        raise InvalidTransition(f"Report {report.id} is already {report.status}")

    resolved = dataclasses.replace(report, status=target, admin_action=now)
    if claim is not None:
        resolved = claim(resolved)

    if target == ReportStatus.REJECTED:
        delete_post(report.post_id)
        logger.info("Removed post %s after report %s", report.post_id, report.id)

    return resolved
