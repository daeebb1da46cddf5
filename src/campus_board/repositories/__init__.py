"""Store adapters for posts and reports."""

from .post_repo import PostRepository
from .report_repo import ReportRepository

__all__ = ["PostRepository", "ReportRepository"]
