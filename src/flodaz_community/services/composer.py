"""Assemble public post and comment payloads.

Rows come from the content store and authors from ``IdentityResolver``; the
two are joined here in memory. Every optional row field has a default so a
sparse or legacy row still renders.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from flodaz_community.db.time import format_timestamp
from flodaz_community.schemas.comment import CommentOut
from flodaz_community.schemas.post import AuthorOut, PostOut
from flodaz_community.services.avatar import initials
from flodaz_community.services.identity import DisplayIdentity

ANONYMOUS = DisplayIdentity(
    id="",
    email="unknown@example.com",
    full_name="Anonymous",
    username="anonymous",
)


class ViewerState(Protocol):
    """Per-viewer flags for a post (liked, bookmarked)."""

    def liked(self, post_id: int) -> bool: ...

    def bookmarked(self, post_id: int) -> bool: ...


class NoViewerState:
    """Viewer state used while requests carry no session: every flag is False."""

    def liked(self, post_id: int) -> bool:
        return False

    def bookmarked(self, post_id: int) -> bool:
        return False


NO_VIEWER = NoViewerState()


def author_for(user_id: Any, identities: Mapping[str, DisplayIdentity]) -> AuthorOut:
    """Return the public author block, falling back to the anonymous identity."""
    identity = identities.get(str(user_id)) if user_id else None
    identity = identity or ANONYMOUS
    return AuthorOut(
        name=identity.full_name,
        username=identity.username,
        avatar=initials(identity.full_name),
    )


def _list_or_empty(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list | tuple) else []


def _count(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def compose_post(
    row: Any,
    identities: Mapping[str, DisplayIdentity],
    *,
    viewer: ViewerState = NO_VIEWER,
    timestamp: str | None = None,
) -> PostOut:
    """Build the public representation of one post row."""
    post_id = int(row.id)
    return PostOut(
        id=post_id,
        type=getattr(row, "type", None) or "",
        title=getattr(row, "title", None) or "",
        content=getattr(row, "content", None) or "",
        images=_list_or_empty(getattr(row, "images", None)),
        tags=_list_or_empty(getattr(row, "tags", None)),
        likes=_count(getattr(row, "likes", None)),
        comments=_count(getattr(row, "comment_count", None)),
        shares=_count(getattr(row, "shares", None)),
        liked=viewer.liked(post_id),
        bookmarked=viewer.bookmarked(post_id),
        timestamp=timestamp or format_timestamp(getattr(row, "created_at", None)),
        author=author_for(getattr(row, "user_id", None), identities),
        recipe=getattr(row, "recipe_data", None),
    )


def compose_posts(
    rows: Iterable[Any],
    identities: Mapping[str, DisplayIdentity],
    *,
    viewer: ViewerState = NO_VIEWER,
) -> list[PostOut]:
    """Compose a page of posts, preserving row order."""
    return [compose_post(row, identities, viewer=viewer) for row in rows]


def compose_comment(
    row: Any,
    identities: Mapping[str, DisplayIdentity],
    *,
    timestamp: str | None = None,
) -> CommentOut:
    """Build the public representation of one comment row."""
    return CommentOut(
        id=int(row.id),
        content=getattr(row, "content", None) or "",
        timestamp=timestamp or format_timestamp(getattr(row, "created_at", None)),
        author=author_for(getattr(row, "user_id", None), identities),
    )


def compose_comments(
    rows: Iterable[Any], identities: Mapping[str, DisplayIdentity]
) -> list[CommentOut]:
    """Compose comments, preserving row order."""
    return [compose_comment(row, identities) for row in rows]
