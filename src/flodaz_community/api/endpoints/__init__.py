# src/flodaz_community/api/endpoints/__init__.py
"""API endpoint modules."""

from .comments import router as comments_router
from .posts import router as posts_router
from .system import router as system_router
from .uploads import router as uploads_router

__all__ = [
    "comments_router",
    "posts_router",
    "system_router",
    "uploads_router",
]
