# src/campus_board/models/report.py
"""Model for reports filed against posts."""

from uuid import uuid4

from sqlalchemy import BigInteger, CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campus_board.db.session import Base

from .enums import ReportStatus


class Report(Base):
    """User report awaiting, or carrying, an admin decision.

    ``post_id`` deliberately has no foreign key: a report outlives the post it
    points at once that post is deleted or swept.
    """

    __tablename__ = "report"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_report_status",
        ),
        Index("ix_report_post_id", "post_id"),
        Index("ix_report_status", "status"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid4().hex)
    post_id: Mapped[str] = mapped_column(String(32), nullable=False)
    reported_by: Mapped[str] = mapped_column(String(64), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=ReportStatus.PENDING.value,
    )
    # Epoch milliseconds of the admin decision; null while pending.
    admin_action: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
