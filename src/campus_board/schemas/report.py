"""Report-related Pydantic schemas."""

from pydantic import BaseModel, Field

from campus_board.models.enums import ReportStatus
from campus_board.models.records import ReportRecord


class ReportCreate(BaseModel):
    """Schema for reporting a post."""

    reason: str = Field(..., description="One of the listed reasons or free text")


class ReportResolve(BaseModel):
    """Schema for an admin decision on a report."""

    action: ReportStatus = Field(..., description="approved dismisses, rejected removes the post")


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: str
    post_id: str
    reason: str
    timestamp: int
    status: ReportStatus
    admin_action: int | None = None

    @classmethod
    def from_record(cls, report: ReportRecord) -> "ReportResponse":
        """Convert a report record; the reporter id is not exposed."""
        return cls(
            id=report.id or "",
            post_id=report.post_id,
            reason=report.reason,
            timestamp=report.timestamp,
            status=report.status,
            admin_action=report.admin_action,
        )
