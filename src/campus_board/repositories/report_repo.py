"""Data access helpers for the report log."""
from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_board.core.errors import InvalidTransition, NotFound, StoreUnavailable
from campus_board.models.enums import ReportStatus
from campus_board.models.records import ReportRecord
from campus_board.models.report import Report

__all__ = ["ReportRepository"]

logger = logging.getLogger(__name__)


def _to_record(report: Report) -> ReportRecord:
    return ReportRecord(
        id=report.id,
        post_id=report.post_id,
        reported_by=report.reported_by,
        reason=report.reason,
        timestamp=int(report.timestamp),
        status=ReportStatus(report.status),
        admin_action=int(report.admin_action) if report.admin_action is not None else None,
    )


class ReportRepository:
    """Append-only log of reports keyed by post id, plus status updates."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def append(self, report: ReportRecord) -> ReportRecord:
        """Store a new report and return it with its assigned id."""
        row = Report(
            post_id=report.post_id,
            reported_by=report.reported_by,
            reason=report.reason,
            timestamp=report.timestamp,
            status=report.status.value,
            admin_action=report.admin_action,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("append report", exc) from exc
        return _to_record(row)

    def get(self, report_id: str) -> ReportRecord | None:
        """Return a report by identifier."""
        try:
            row = self.session.get(Report, report_id)
        except SQLAlchemyError as exc:
            raise self._unavailable("load report", exc) from exc
        return _to_record(row) if row is not None else None

    def list_reports(
        self,
        *,
        status: ReportStatus | None = None,
        post_id: str | None = None,
    ) -> list[ReportRecord]:
        """Return reports, oldest first, optionally filtered."""
        stmt = select(Report)
        if status is not None:
            stmt = stmt.where(Report.status == status.value)
        if post_id is not None:
            stmt = stmt.where(Report.post_id == post_id)
        stmt = stmt.order_by(Report.timestamp)
        try:
            return [_to_record(row) for row in self.session.execute(stmt).scalars()]
        except SQLAlchemyError as exc:
            raise self._unavailable("list reports", exc) from exc

    def save(self, report: ReportRecord) -> ReportRecord:
        """Record the decision on a report that is still pending.

        The update only matches a stored row whose status is ``pending``, so
        of two decisions made from the same pending record only the first is
        kept.

        Raises:
            NotFound: If the report does not exist.
            InvalidTransition: If the stored report is no longer pending.
        """
        stmt = (
            update(Report)
            .where(Report.id == report.id, Report.status == ReportStatus.PENDING.value)
            .values(status=report.status.value, admin_action=report.admin_action)
        )
        try:
            claimed = self.session.execute(stmt).rowcount
            self.session.commit()
            row = self.session.get(Report, report.id, populate_existing=True) if report.id else None
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("update report", exc) from exc
        if row is None:
            raise NotFound("Report not found")
        if not claimed:
            raise InvalidTransition(f"Report {report.id} is already {row.status}")
        return _to_record(row)

    @staticmethod
    def _unavailable(action: str, exc: SQLAlchemyError) -> StoreUnavailable:
        logger.error("Report store failed to %s: %s", action, exc, exc_info=True)
        return StoreUnavailable(f"Could not {action}")
