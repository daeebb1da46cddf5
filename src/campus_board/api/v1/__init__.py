# src/campus_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    auth_router,
    feed_router,
    posts_router,
    reports_router,
    system_router,
)

__all__ = [
    "admin_router",
    "auth_router",
    "feed_router",
    "posts_router",
    "reports_router",
    "system_router",
]
