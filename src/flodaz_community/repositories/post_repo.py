"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flodaz_community.core.errors import StoreError
from flodaz_community.models.post import Post

__all__ = ["PostRepository"]

logger = logging.getLogger(__name__)


class PostRepository:
    """Thin wrapper around database access for post entities.

    Every SQLAlchemy failure is rolled back and re-raised as ``StoreError``.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _fail(self, action: str, exc: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error("Post store failure while %s: %s", action, exc)
        return StoreError(f"Failed to {action}")

    def list_page(self, *, offset: int, limit: int, post_type: str | None = None) -> list[Post]:
        """Return one page of posts, newest first, optionally filtered by type."""
        stmt = select(Post)
        if post_type:
            stmt = stmt.where(Post.type == post_type)
        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc()).offset(offset).limit(limit)
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            raise self._fail("fetch posts", exc) from exc

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        try:
            return self.session.get(Post, post_id)
        except SQLAlchemyError as exc:
            raise self._fail("fetch post", exc) from exc

    def create(self, values: dict[str, Any]) -> Post:
        """Insert a new post and return the persisted row."""
        post = Post(**values)
        try:
            self.session.add(post)
            self.session.commit()
            self.session.refresh(post)
        except SQLAlchemyError as exc:
            raise self._fail("create post", exc) from exc
        return post

    def _increment(self, post_id: int, column: Any, action: str) -> int | None:
        # Single UPDATE ... RETURNING: the store applies the increment atomically.
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values({column: func.coalesce(column, 0) + 1})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        try:
            new_value = self.session.execute(stmt).scalar_one_or_none()
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(action, exc) from exc
        return new_value

    def increment_likes(self, post_id: int) -> int | None:
        """Add one like and return the new count, or None for an unknown post."""
        return self._increment(post_id, Post.likes, "like post")

    def increment_comment_count(self, post_id: int) -> int | None:
        """Add one to the cached comment counter of a post."""
        return self._increment(post_id, Post.comment_count, "update comment count")

    def ping(self) -> int:
        """Run a trivial query against the posts table."""
        try:
            return int(self.session.execute(select(func.count()).select_from(Post)).scalar_one())
        except SQLAlchemyError as exc:
            raise self._fail("reach the database", exc) from exc
