# src/flodaz_community/api/endpoints/posts.py
"""Post-related endpoints for the Flodaz Community API."""

from fastapi import APIRouter, Query, status

from flodaz_community.api.dependencies import PostServiceDep, SettingsDep
from flodaz_community.schemas.post import (
    LikeResponse,
    PostCreate,
    PostCreatedResponse,
    PostEnvelope,
    PostListResponse,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostListResponse)
async def list_posts(
    service: PostServiceDep,
    settings: SettingsDep,
    page: int = Query(1, description="1-based page number"),
    limit: int | None = Query(None, description="Posts per page"),
    post_type: str | None = Query(None, alias="type", description="Filter by post type"),
) -> PostListResponse:
    """List posts newest first with their authors resolved.

    ``pagination.hasMore`` is true whenever the page is full, so a final page
    of exactly ``limit`` posts still reports more.
    """
    posts, pagination = await service.list_feed(
        page=page,
        limit=limit if limit is not None else settings.feed_default_limit,
        post_type=post_type,
    )
    return PostListResponse(posts=posts, pagination=pagination)


@router.post("", response_model=PostCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, service: PostServiceDep) -> PostCreatedResponse:
    """Create a post; recipe data is stored only for recipe posts."""
    post = await service.create_post(payload)
    return PostCreatedResponse(post=post)


@router.get("/{post_id}", response_model=PostEnvelope)
async def get_post(post_id: str, service: PostServiceDep) -> PostEnvelope:
    """Get a single post, composed the same way as feed entries.

    A non-numeric id matches no post and answers 404.
    """
    return PostEnvelope(post=await service.get_post(post_id))


@router.post("/{post_id}/like", response_model=LikeResponse)
def like_post(post_id: str, service: PostServiceDep) -> LikeResponse:
    """Add one like to a post. Runs in the threadpool."""
    return LikeResponse(likes=service.like_post(post_id))
