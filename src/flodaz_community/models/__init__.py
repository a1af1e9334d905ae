# src/flodaz_community/models/__init__.py
"""SQLAlchemy models for the Flodaz Community application."""

from .comment import Comment
from .post import Post

__all__ = ["Comment", "Post"]
