"""Service-level helpers for the post feed and post mutations."""
from __future__ import annotations

import logging
from typing import Any

from flodaz_community.core.errors import NotFoundError, ValidationError
from flodaz_community.db.time import JUST_NOW, utcnow
from flodaz_community.repositories.post_repo import PostRepository
from flodaz_community.schemas.post import Pagination, PostCreate, PostOut
from flodaz_community.services.composer import NO_VIEWER, ViewerState, compose_post, compose_posts
from flodaz_community.services.feed import has_more, normalize_type_filter, paginate
from flodaz_community.services.identity import IdentityResolver

logger = logging.getLogger(__name__)

RECIPE_TYPE = "recipe"
MAX_POST_ID = 2**63 - 1


def normalize_tags(tags: list[str] | str | None) -> list[str]:
    """Accept tags as a list or a comma-separated string."""
    if tags is None:
        return []
    if isinstance(tags, str):
        return [tag.strip() for tag in tags.split(",") if tag.strip()]
    return [str(tag).strip() for tag in tags if str(tag).strip()]


def parse_post_id(raw: int | str) -> int:
    """Turn a path segment into a post id.

    Raises:
        NotFoundError: If ``raw`` is not a positive 64-bit integer, since no
            post can match it.
    """
    try:
        post_id = int(raw)
    except (TypeError, ValueError) as exc:
        raise NotFoundError("Post not found") from exc
    if not 0 < post_id <= MAX_POST_ID:
        raise NotFoundError("Post not found")
    return post_id


class PostService:
    """Feed reads and post mutations over the content store and identity provider."""

    def __init__(
        self,
        posts: PostRepository,
        resolver: IdentityResolver,
        *,
        viewer: ViewerState = NO_VIEWER,
        max_limit: int | None = None,
    ) -> None:
        self.posts = posts
        self.resolver = resolver
        self.viewer = viewer
        self.max_limit = max_limit

    async def list_feed(
        self, *, page: int, limit: int, post_type: str | None = None
    ) -> tuple[list[PostOut], Pagination]:
        """Return one feed page and its pagination block.

        ``total`` counts the rows on this page only.
        """
        window = paginate(page, limit, max_limit=self.max_limit)
        rows = self.posts.list_page(
            offset=window.offset,
            limit=window.limit,
            post_type=normalize_type_filter(post_type),
        )
        identities = await self.resolver.resolve(row.user_id for row in rows)
        pagination = Pagination(
            page=window.page,
            limit=window.limit,
            total=len(rows),
            has_more=has_more(len(rows), window.limit),
        )
        return compose_posts(rows, identities, viewer=self.viewer), pagination

    async def get_post(self, post_id: int | str) -> PostOut:
        """Return one post composed exactly like a feed entry.

        Raises:
            NotFoundError: If no post has ``post_id``.
        """
        row = self.posts.get_by_id(parse_post_id(post_id))
        if row is None:
            raise NotFoundError("Post not found")
        identities = await self.resolver.resolve([row.user_id])
        return compose_post(row, identities, viewer=self.viewer)

    async def create_post(self, payload: PostCreate) -> PostOut:
        """Validate and persist a new post, then return it composed.

        Raises:
            ValidationError: If type, title, content or user id is missing.
            StoreError: If the insert fails.
        """
        if not (payload.type and payload.title and payload.content):
            raise ValidationError("Type, title, and content are required")
        if not payload.user_id:
            raise ValidationError("User ID is required")

        values: dict[str, Any] = {
            "type": payload.type,
            "title": payload.title,
            "content": payload.content,
            "tags": normalize_tags(payload.tags),
            "images": list(payload.images or []),
            "user_id": payload.user_id,
            "likes": 0,
            "shares": 0,
            "comment_count": 0,
            "created_at": utcnow(),
        }
        if payload.type == RECIPE_TYPE and payload.recipe:
            values["recipe_data"] = payload.recipe

        row = self.posts.create(values)
        logger.info("Created %s post %s for user %s", row.type, row.id, row.user_id)

        identity = await self.resolver.resolve_one(payload.user_id)
        identities = {payload.user_id: identity} if identity else {}
        return compose_post(row, identities, viewer=self.viewer, timestamp=JUST_NOW)

    def like_post(self, post_id: int | str) -> int:
        """Add one like to a post and return the new like count.

        Raises:
            NotFoundError: If no post has ``post_id``.
            StoreError: If the update fails.
        """
        likes = self.posts.increment_likes(parse_post_id(post_id))
        if likes is None:
            raise NotFoundError("Post not found")
        return likes
