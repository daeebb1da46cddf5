"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .auth import AdminLogin, AnonymousSession, TokenResponse
from .post import CategoryInfo, PostCreate, PostResponse
from .report import ReportCreate, ReportResolve, ReportResponse
from .stats import AnalyticsResponse, BoardStatsResponse

__all__ = [
    "AdminLogin", "AnonymousSession", "TokenResponse",
    "CategoryInfo", "PostCreate", "PostResponse",
    "ReportCreate", "ReportResolve", "ReportResponse",
    "AnalyticsResponse", "BoardStatsResponse",
]
