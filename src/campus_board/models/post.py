# src/campus_board/models/post.py
"""SQLAlchemy models for posts and the likes recorded against them."""

from uuid import uuid4

from sqlalchemy import BigInteger, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_board.db.session import Base

from .enums import Category


def _new_id() -> str:
    return uuid4().hex


class Post(Base):
    """Anonymous confession that lives for a fixed time window.

    Expiry is derived from ``expires_at``; the index on that column lets the
    sweep worker reclaim expired rows cheaply.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_expires_at", "expires_at"),
        Index("ix_post_active_timestamp", "is_active", "timestamp"),
        Index("ix_post_anonymous_user_id", "anonymous_user_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=Category.GENERAL.value,
    )

    # Epoch milliseconds, both immutable once written.
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expires_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    anonymous_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    likes: Mapped[int] = mapped_column(default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False)

    likers: Mapped[list["PostLike"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class PostLike(Base):
    """One like from one anonymous user on one post.

    The composite primary key keeps a user from contributing a second like.
    """

    __tablename__ = "post_like"

    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    post: Mapped[Post] = relationship(back_populates="likers")
