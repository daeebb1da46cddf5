# src/campus_board/models/__init__.py
"""SQLAlchemy models for the Campus Board application."""

from .post import Post, PostLike
from .report import Report

__all__ = [
    "Post", "PostLike",
    "Report",
]
