"""Repositories over the relational content store."""

from .comment_repo import CommentRepository
from .post_repo import PostRepository

__all__ = ["CommentRepository", "PostRepository"]
