# src/flodaz_community/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentCreatedResponse, CommentListResponse, CommentOut
from .common import HealthResponse, UploadResponse
from .post import (
    AuthorOut,
    LikeResponse,
    Pagination,
    PostCreate,
    PostCreatedResponse,
    PostEnvelope,
    PostListResponse,
    PostOut,
)

__all__ = [
    "AuthorOut",
    "CommentCreate", "CommentCreatedResponse", "CommentListResponse", "CommentOut",
    "HealthResponse", "UploadResponse",
    "LikeResponse", "Pagination",
    "PostCreate", "PostCreatedResponse", "PostEnvelope", "PostListResponse", "PostOut",
]
