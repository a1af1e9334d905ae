"""API router wiring.

Composes the ``/api`` surface from the endpoint sub-routers. Contains no
endpoint definitions of its own.
"""
from __future__ import annotations

from typing import Final

from fastapi import APIRouter

from .endpoints import comments_router, posts_router, system_router, uploads_router

api_router: Final[APIRouter] = APIRouter()
api_router.include_router(system_router)
api_router.include_router(uploads_router)
api_router.include_router(posts_router)
api_router.include_router(comments_router)

__all__ = ["api_router"]
