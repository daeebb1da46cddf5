# src/campus_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .auth import router as auth_router
from .feed import router as feed_router
from .posts import router as posts_router
from .reports import router as reports_router
from .system import router as system_router

__all__ = [
    "admin_router",
    "auth_router",
    "feed_router",
    "posts_router",
    "reports_router",
    "system_router",
]
