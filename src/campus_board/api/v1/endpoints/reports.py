# src/campus_board/api/v1/endpoints/reports.py
"""Public report metadata."""

from fastapi import APIRouter

from campus_board.models.enums import REPORT_REASONS

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/reasons", response_model=list[str])
async def list_report_reasons() -> list[str]:
    """Return the reasons offered when reporting a post."""
    return list(REPORT_REASONS)
