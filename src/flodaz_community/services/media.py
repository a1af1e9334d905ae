"""Image upload to the media CDN.

Images are pushed to Cloudinary's signed upload API, which resizes them
(``c_limit,h_600,w_800``) and recompresses them (``q_auto:good``) before
returning a durable HTTPS URL.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

import httpx

from flodaz_community.core.errors import MediaError, UploadError
from flodaz_community.core.settings import Settings

logger = logging.getLogger(__name__)

HTTP_OK = 200
CLOUDINARY_API_BASE = "https://api.cloudinary.com"
IMAGE_TRANSFORMATION = "c_limit,h_600,w_800/q_auto:good"


@dataclass(frozen=True)
class ImageUpload:
    """One file taken from the multipart request."""

    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class MediaConfig:
    """Immutable configuration for the media CDN."""

    cloud_name: str | None
    api_key: str | None
    api_secret: str | None
    folder: str
    timeout_seconds: float
    api_base: str = CLOUDINARY_API_BASE

    @property
    def enabled(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


def load_media_config(settings: Settings) -> MediaConfig:
    """Build the media configuration from application settings."""
    return MediaConfig(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
        timeout_seconds=float(settings.media_timeout_seconds),
    )


def validate_uploads(files: Sequence[ImageUpload], *, max_files: int, max_bytes: int) -> None:
    """Check the file constraints of an upload request.

    Raises:
        UploadError: With status 400 for any violated constraint.
    """
    if not files:
        raise UploadError("No images provided")
    if len(files) > max_files:
        raise UploadError(f"Too many files. Maximum is {max_files}.")
    for upload in files:
        if not (upload.content_type or "").startswith("image/"):
            raise UploadError("Only image files are allowed!")
        if len(upload.data) > max_bytes:
            limit_mb = max_bytes // (1024 * 1024)
            raise UploadError(f"File too large. Maximum size is {limit_mb}MB.")


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Return the Cloudinary SHA-1 signature for ``params``."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key])
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class MediaClient:
    """HTTP client wrapper for the Cloudinary upload API."""

    def __init__(
        self,
        config: MediaConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise MediaError("Media service is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.api_base,
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def upload_image(self, upload: ImageUpload) -> str:
        """Upload one image and return its secure URL."""
        client = await self._ensure_client()
        params = {
            "folder": self.config.folder,
            "timestamp": str(int(time.time())),
            "transformation": IMAGE_TRANSFORMATION,
        }
        form = {
            **params,
            "api_key": self.config.api_key or "",
            "signature": sign_params(params, self.config.api_secret or ""),
        }
        try:
            response = await client.post(
                f"/v1_1/{self.config.cloud_name}/image/upload",
                data=form,
                files={"file": (upload.filename, upload.data, upload.content_type)},
            )
        except httpx.HTTPError as exc:
            raise MediaError(f"Media upload failed: {exc}") from exc

        if response.status_code != HTTP_OK:
            raise MediaError(f"Media service responded with {response.status_code}")
        try:
            secure_url = response.json().get("secure_url")
        except ValueError as exc:
            raise MediaError("Media service returned malformed JSON") from exc
        if not secure_url:
            raise MediaError("Media service response has no secure_url")
        return str(secure_url)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class UploadService:
    """Validate an upload request and push every image to the CDN."""

    def __init__(self, client: MediaClient, *, max_files: int, max_bytes: int) -> None:
        self.client = client
        self.max_files = max_files
        self.max_bytes = max_bytes

    async def upload_images(self, files: Sequence[ImageUpload]) -> list[str]:
        """Return the CDN URLs of ``files`` in request order.

        Raises:
            UploadError: 400 for constraint violations, 500 if any upload fails.
        """
        validate_uploads(files, max_files=self.max_files, max_bytes=self.max_bytes)
        try:
            urls = await asyncio.gather(*(self.client.upload_image(f) for f in files))
        except MediaError as exc:
            logger.error("Image upload error: %s", exc, exc_info=True)
            raise UploadError("Failed to upload images", status_code=500) from exc
        return list(urls)
