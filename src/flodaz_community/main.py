# src/flodaz_community/main.py
"""Main entry point for the Flodaz Community application."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy import Engine

from flodaz_community.api import api_router
from flodaz_community.api.errors import register_exception_handlers
from flodaz_community.core.logging import configure_logging
from flodaz_community.core.settings import Settings
from flodaz_community.core.settings import settings as default_settings
from flodaz_community.db.session import build_engine, build_session_factory
from flodaz_community.services.identity import IdentityClient, load_identity_config
from flodaz_community.services.media import MediaClient, load_media_config

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "health": "GET /api/health",
    "posts": "GET /api/posts",
    "getPost": "GET /api/posts/:id",
    "createPost": "POST /api/posts",
    "uploadImages": "POST /api/upload-images",
    "likePost": "POST /api/posts/:id/like",
    "getComments": "GET /api/comments/:postId",
    "createComment": "POST /api/comments",
}


def create_app(
    settings: Settings | None = None,
    *,
    engine: Engine | None = None,
    identity_client: IdentityClient | None = None,
    media_client: MediaClient | None = None,
) -> FastAPI:
    """Build the ASGI application and its external clients.

    Any client not supplied is constructed from ``settings``.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Community feed API: posts, recipes, images, likes and comments",
        version=settings.app_version,
    )

    engine = engine or build_engine(settings.database_url, echo=settings.sql_debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.identity_client = identity_client or IdentityClient(load_identity_config(settings))
    app.state.media_client = media_client or MediaClient(load_media_config(settings))

    if not app.state.identity_client.enabled:
        logger.warning("Identity provider not configured; authors will show as Anonymous")
    if not app.state.media_client.enabled:
        logger.warning("Media service not configured; image uploads will fail")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app, settings)
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint describing the API and its endpoints."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running",
            "endpoints": ENDPOINTS,
        }

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.identity_client.close()
        await app.state.media_client.close()
        app.state.engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info("Environment: %s", default_settings.environment)
    logger.info("Health check: http://localhost:%s/api/health", default_settings.port)
    uvicorn.run(
        "flodaz_community.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )
