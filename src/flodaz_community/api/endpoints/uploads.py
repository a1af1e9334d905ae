# src/flodaz_community/api/endpoints/uploads.py
"""Image upload endpoint."""

from fastapi import APIRouter, File, UploadFile

from flodaz_community.api.dependencies import UploadServiceDep
from flodaz_community.schemas.common import UploadResponse
from flodaz_community.services.media import ImageUpload

router = APIRouter(tags=["uploads"])


@router.post("/upload-images", response_model=UploadResponse)
async def upload_images(
    service: UploadServiceDep,
    images: list[UploadFile] | None = File(None, description="Up to 5 image files"),
) -> UploadResponse:
    """Push images to the media CDN and return their URLs in upload order."""
    uploads = [
        ImageUpload(
            filename=image.filename or "image",
            content_type=image.content_type or "",
            data=await image.read(),
        )
        for image in images or []
    ]
    return UploadResponse(image_urls=await service.upload_images(uploads))
