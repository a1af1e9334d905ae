# src/flodaz_community/schemas/post.py
"""Post-related Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post.

    Required-field checks happen in the post service so that empty strings and
    missing keys produce the same 400 response.
    """

    type: str | None = Field(None, description="Post type: text, image, recipe, ...")
    title: str | None = Field(None, description="Post title")
    content: str | None = Field(None, description="Post body text")
    tags: list[str] | str | None = Field(
        None, description="Tags as a list or a comma-separated string"
    )
    images: list[str] | None = Field(None, description="Image URLs returned by /upload-images")
    recipe: dict[str, Any] | None = Field(None, description="Recipe payload for recipe posts")
    user_id: str | None = Field(None, alias="userId", description="Identity-store user id")

    model_config = ConfigDict(populate_by_name=True)


class AuthorOut(BaseModel):
    """Public author identity embedded in posts and comments."""

    name: str
    username: str
    avatar: str


class PostOut(BaseModel):
    """Public representation of a post."""

    id: int
    type: str
    title: str
    content: str
    images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    likes: int = 0
    comments: int = 0
    shares: int = 0
    liked: bool = False
    bookmarked: bool = False
    timestamp: str
    author: AuthorOut
    recipe: Any | None = None


class Pagination(BaseModel):
    """Pagination block of the feed response."""

    page: int
    limit: int
    total: int
    has_more: bool = Field(..., alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class PostListResponse(BaseModel):
    """Response body of ``GET /api/posts``."""

    posts: list[PostOut]
    pagination: Pagination


class PostCreatedResponse(BaseModel):
    """Response body of ``POST /api/posts``."""

    message: str = "Post created successfully"
    post: PostOut


class PostEnvelope(BaseModel):
    """Response body of ``GET /api/posts/{id}``."""

    post: PostOut


class LikeResponse(BaseModel):
    """Response body of ``POST /api/posts/{id}/like``."""

    message: str = "Post liked"
    liked: bool = True
    likes: int
