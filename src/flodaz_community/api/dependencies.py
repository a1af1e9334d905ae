"""Shared API dependencies.

Long-lived clients are built once by ``create_app`` and stored on
``app.state``; these providers hand them, or services wired from them, to the
endpoints. Tests replace the clients by passing fakes to ``create_app``.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from flodaz_community.core.settings import Settings
from flodaz_community.db.session import get_db
from flodaz_community.repositories import CommentRepository, PostRepository
from flodaz_community.services import (
    CommentService,
    IdentityResolver,
    MediaClient,
    PostService,
    UploadService,
)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_identity_resolver(request: Request) -> IdentityResolver:
    """Return a resolver over the application's identity client."""
    return IdentityResolver(request.app.state.identity_client)


ResolverDep = Annotated[IdentityResolver, Depends(get_identity_resolver)]


def get_post_repository(db: SessionDep) -> PostRepository:
    return PostRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


def get_post_service(
    posts: PostRepoDep,
    resolver: ResolverDep,
    settings: SettingsDep,
) -> PostService:
    """Wire the post service for one request."""
    return PostService(posts, resolver, max_limit=settings.feed_max_limit)


def get_comment_service(
    db: SessionDep,
    posts: PostRepoDep,
    resolver: ResolverDep,
) -> CommentService:
    """Wire the comment service for one request."""
    return CommentService(CommentRepository(db), posts, resolver)


def get_upload_service(request: Request, settings: SettingsDep) -> UploadService:
    """Wire the upload service over the application's media client."""
    client: MediaClient = request.app.state.media_client
    return UploadService(
        client,
        max_files=settings.upload_max_files,
        max_bytes=settings.upload_max_file_bytes,
    )


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
