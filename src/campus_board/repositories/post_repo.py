"""Post store adapter backed by SQLAlchemy."""
from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_board.core.errors import NotFound, StoreUnavailable
from campus_board.models.enums import normalize_category
from campus_board.models.post import Post, PostLike
from campus_board.models.records import LikeChange, NewPost, PatchOp, PostRecord
from campus_board.services.realtime import SnapshotHub, SnapshotListener

__all__ = ["PostRepository", "to_record"]

logger = logging.getLogger(__name__)


def to_record(post: Post) -> PostRecord:
    """Convert a Post ORM instance to an immutable record.

    Unknown categories read back as ``general`` and a negative counter reads
    back as zero.
    """
    return PostRecord(
        id=post.id,
        title=post.title,
        content=post.content,
        category=normalize_category(post.category),
        timestamp=int(post.timestamp),
        expires_at=int(post.expires_at),
        anonymous_user_id=post.anonymous_user_id,
        likes=max(0, int(post.likes or 0)),
        liked_by=frozenset(like.user_id for like in post.likers),
        is_active=bool(post.is_active),
    )


class PostRepository:
    """Insert, patch, delete and snapshot access to the post collection.

    Every successful write commits on its own and, when a hub is attached,
    publishes the full collection to its listeners.
    """

    def __init__(self, session: Session, hub: SnapshotHub | None = None) -> None:
        """Initialize the repository with a SQLAlchemy session and optional hub."""
        self.session = session
        self.hub = hub

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for snapshots and return its unsubscribe callable.

        Raises:
            StoreUnavailable: If no hub is attached to this repository.
        """
        if self.hub is None:
            raise StoreUnavailable("Realtime snapshots are not available")
        return self.hub.subscribe(listener)

    def list_all(self) -> list[PostRecord]:
        """Return every stored post, expired ones included, newest first."""
        try:
            rows = self.session.execute(
                select(Post).order_by(Post.timestamp.desc())
            ).scalars()
            return [to_record(row) for row in rows]
        except SQLAlchemyError as exc:
            raise self._unavailable("list posts", exc) from exc

    def get(self, post_id: str) -> PostRecord | None:
        """Return a post by identifier."""
        try:
            row = self.session.get(Post, post_id)
        except SQLAlchemyError as exc:
            raise self._unavailable("load post", exc) from exc
        return to_record(row) if row is not None else None

    def insert(self, new_post: NewPost) -> str:
        """Persist a new post and return its store-assigned id."""
        row = Post(
            title=new_post.title,
            content=new_post.content,
            category=new_post.category.value,
            timestamp=new_post.timestamp,
            expires_at=new_post.expires_at,
            anonymous_user_id=new_post.anonymous_user_id,
            likes=0,
            is_active=True,
        )
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("insert post", exc) from exc
        self._publish()
        return row.id

    def patch(self, post_id: str, patch: PatchOp) -> PostRecord:
        """Apply a like patch: write ``likes`` and add or drop one liker.

        Raises:
            NotFound: If the post does not exist.
        """
        try:
            row = self.session.get(Post, post_id)
            if row is None:
                raise NotFound("Post not found")
            row.likes = max(0, patch.likes)
            existing = next(
                (like for like in row.likers if like.user_id == patch.user_id),
                None,
            )
            if patch.change == LikeChange.ADD and existing is None:
                row.likers.append(PostLike(post_id=post_id, user_id=patch.user_id))
            elif patch.change == LikeChange.REMOVE and existing is not None:
                row.likers.remove(existing)
            self.session.commit()
            self.session.refresh(row)
            record = to_record(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("patch post", exc) from exc
        self._publish()
        return record

    def delete(self, post_id: str) -> bool:
        """Delete a post; a missing id counts as success.

        Returns:
            True if a row was removed, False if the post was already gone.
        """
        try:
            row = self.session.get(Post, post_id)
            if row is None:
                return False
            self.session.delete(row)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("delete post", exc) from exc
        self._publish()
        return True

    def purge_expired(self, now: int) -> int:
        """Remove posts whose expiry instant has passed and return the count."""
        try:
            expired_ids = list(
                self.session.execute(
                    select(Post.id).where(Post.expires_at <= now)
                ).scalars()
            )
            if not expired_ids:
                return 0
            self.session.execute(delete(PostLike).where(PostLike.post_id.in_(expired_ids)))
            self.session.execute(delete(Post).where(Post.id.in_(expired_ids)))
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._unavailable("purge expired posts", exc) from exc
        self._publish()
        return len(expired_ids)

    def _publish(self) -> None:
        if self.hub is None or not self.hub.has_listeners:
            return
        self.session.expire_all()
        self.hub.publish(self.list_all())

    @staticmethod
    def _unavailable(action: str, exc: SQLAlchemyError) -> StoreUnavailable:
        logger.error("Post store failed to %s: %s", action, exc, exc_info=True)
        return StoreUnavailable(f"Could not {action}")
