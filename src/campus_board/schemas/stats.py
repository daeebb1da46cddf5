"""Schemas for dashboard counters."""

from pydantic import BaseModel


class BoardStatsResponse(BaseModel):
    """Admin dashboard numbers."""

    live_posts: int
    total_likes: int
    unique_authors: int
    pending_reports: int


class AnalyticsResponse(BaseModel):
    """Collection-wide post counts."""

    total_posts: int
    active_posts: int
    expired_posts: int
    unique_authors: int
