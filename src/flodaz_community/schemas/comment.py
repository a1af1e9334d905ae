# src/flodaz_community/schemas/comment.py
"""Comment-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .post import AuthorOut


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    post_id: int | None = Field(None, alias="postId", description="Parent post id")
    content: str | None = Field(None, description="Comment text")
    user_id: str | None = Field(None, alias="userId", description="Identity-store user id")

    model_config = ConfigDict(populate_by_name=True)


class CommentOut(BaseModel):
    """Public representation of a comment."""

    id: int
    content: str
    timestamp: str
    author: AuthorOut


class CommentListResponse(BaseModel):
    """Response body of ``GET /api/comments/{postId}``."""

    comments: list[CommentOut]


class CommentCreatedResponse(BaseModel):
    """Response body of ``POST /api/comments``."""

    message: str = "Comment created successfully"
    comment: CommentOut
