"""Data access helpers for working with comments."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flodaz_community.core.errors import StoreError
from flodaz_community.db.time import utcnow
from flodaz_community.models.comment import Comment

__all__ = ["CommentRepository"]

logger = logging.getLogger(__name__)


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Return comments of a post, newest first."""
        stmt = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Comments fetch error for post %s: %s", post_id, exc)
            raise StoreError("Failed to fetch comments") from exc

    def create(self, *, post_id: int, user_id: str, content: str) -> Comment:
        """Insert a comment and return the persisted row."""
        comment = Comment(post_id=post_id, user_id=user_id, content=content, created_at=utcnow())
        try:
            self.session.add(comment)
            self.session.commit()
            self.session.refresh(comment)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Comment creation error for post %s: %s", post_id, exc)
            raise StoreError("Failed to create comment") from exc
        return comment
