"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Body of ``GET /api/health``; never reports a hard failure."""

    status: str
    timestamp: str
    message: str
    database: str


class UploadResponse(BaseModel):
    """Body of ``POST /api/upload-images``."""

    message: str = "Images uploaded successfully"
    image_urls: list[str] = Field(..., alias="imageUrls")

    model_config = ConfigDict(populate_by_name=True)
