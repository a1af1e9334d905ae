"""Business logic services for the Flodaz Community application."""

from .comments import CommentService
from .identity import IdentityClient, IdentityResolver
from .media import MediaClient, UploadService
from .posts import PostService

__all__ = [
    "CommentService",
    "IdentityClient",
    "IdentityResolver",
    "MediaClient",
    "PostService",
    "UploadService",
]
