# src/flodaz_community/api/endpoints/comments.py
"""Comment endpoints for the Flodaz Community API."""

from fastapi import APIRouter, status

from flodaz_community.api.dependencies import CommentServiceDep
from flodaz_community.schemas.comment import (
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{post_id}", response_model=CommentListResponse)
async def list_comments(post_id: int, service: CommentServiceDep) -> CommentListResponse:
    """Get the comments of a post, newest first."""
    return CommentListResponse(comments=await service.list_comments(post_id))


@router.post("", response_model=CommentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate, service: CommentServiceDep
) -> CommentCreatedResponse:
    """Create a comment; a failed comment-count update does not fail the request."""
    comment = await service.create_comment(payload)
    return CommentCreatedResponse(comment=comment)
