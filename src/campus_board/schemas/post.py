"""Post-related Pydantic schemas."""

from pydantic import BaseModel, Field

from campus_board.models.enums import Category
from campus_board.models.records import PostRecord
from campus_board.services.expiry import expiry_of, time_remaining


class PostCreate(BaseModel):
    """Schema for submitting a new post.

    Length limits are enforced by truncation in the service layer, not here.
    """

    title: str | None = Field(None, description="Post title, truncated to 100 characters")
    content: str | None = Field(None, description="Post body, truncated to 500 characters")
    category: str | None = Field(None, description="Category name; defaults to general")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    category: Category
    timestamp: int
    expires_at: int
    time_remaining_ms: int
    likes: int
    liked_by_me: bool = False
    is_mine: bool = False

    @classmethod
    def from_record(
        cls,
        post: PostRecord,
        *,
        now: int,
        viewer_id: str | None = None,
    ) -> "PostResponse":
        """Build the public view of ``post`` for ``viewer_id``.

        The author id and the full liker set stay server-side; the viewer only
        learns whether they liked or wrote the post.
        """
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            category=post.category,
            timestamp=post.timestamp,
            expires_at=expiry_of(post),
            time_remaining_ms=time_remaining(post, now),
            likes=post.likes,
            liked_by_me=viewer_id is not None and viewer_id in post.liked_by,
            is_mine=viewer_id is not None and viewer_id == post.anonymous_user_id,
        )


class CategoryInfo(BaseModel):
    """Category value with its display name."""

    value: Category
    name: str
