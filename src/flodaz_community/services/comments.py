"""Service-level helpers for comments."""
from __future__ import annotations

import logging

from flodaz_community.core.errors import StoreError, ValidationError
from flodaz_community.db.time import JUST_NOW
from flodaz_community.repositories.comment_repo import CommentRepository
from flodaz_community.repositories.post_repo import PostRepository
from flodaz_community.schemas.comment import CommentCreate, CommentOut
from flodaz_community.services.composer import compose_comment, compose_comments
from flodaz_community.services.identity import IdentityResolver

logger = logging.getLogger(__name__)


class CommentService:
    """Comment listing and creation."""

    def __init__(
        self,
        comments: CommentRepository,
        posts: PostRepository,
        resolver: IdentityResolver,
    ) -> None:
        self.comments = comments
        self.posts = posts
        self.resolver = resolver

    async def list_comments(self, post_id: int) -> list[CommentOut]:
        """Return the comments of a post, newest first."""
        rows = self.comments.list_for_post(post_id)
        identities = await self.resolver.resolve(row.user_id for row in rows)
        return compose_comments(rows, identities)

    async def create_comment(self, payload: CommentCreate) -> CommentOut:
        """Persist a comment and bump the parent's cached comment counter.

        The counter update is best effort: its failure is logged and the
        comment is still reported as created.

        Raises:
            ValidationError: If post id, content or user id is missing.
            StoreError: If the comment insert fails.
        """
        if not (payload.post_id and payload.content):
            raise ValidationError("Post ID and content are required")
        if not payload.user_id:
            raise ValidationError("User ID is required")

        row = self.comments.create(
            post_id=payload.post_id,
            user_id=payload.user_id,
            content=payload.content,
        )

        try:
            count = self.posts.increment_comment_count(payload.post_id)
        except StoreError as exc:
            logger.warning("Comment count update error for post %s: %s", payload.post_id, exc)
        else:
            if count is None:
                logger.warning("Comment %s references missing post %s", row.id, payload.post_id)

        identity = await self.resolver.resolve_one(payload.user_id)
        identities = {payload.user_id: identity} if identity else {}
        return compose_comment(row, identities, timestamp=JUST_NOW)
