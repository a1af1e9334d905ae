"""Tests for image upload validation and the media client."""

import hashlib

import httpx
import pytest

from flodaz_community.core.errors import UploadError
from flodaz_community.services.media import (
    IMAGE_TRANSFORMATION,
    ImageUpload,
    MediaClient,
    MediaConfig,
    UploadService,
    sign_params,
    validate_uploads,
)
from tests.conftest import CDN_URL

MAX_BYTES = 5 * 1024 * 1024


def _image(name: str = "cake.jpg", size: int = 16, content_type: str = "image/jpeg") -> ImageUpload:
    return ImageUpload(filename=name, content_type=content_type, data=b"\xff" * size)


def _config() -> MediaConfig:
    return MediaConfig(
        cloud_name="flodaz",
        api_key="1234",
        api_secret="shh",
        folder="flodaz_community",
        timeout_seconds=5.0,
    )


class TestValidateUploads:
    def test_accepts_images_within_limits(self):
        validate_uploads([_image(), _image("b.png", content_type="image/png")], max_files=5, max_bytes=MAX_BYTES)

    def test_rejects_empty(self):
        with pytest.raises(UploadError, match="No images provided") as exc_info:
            validate_uploads([], max_files=5, max_bytes=MAX_BYTES)
        assert exc_info.value.status_code == 400

    def test_rejects_non_image(self):
        with pytest.raises(UploadError, match="Only image files"):
            validate_uploads([_image("notes.txt", content_type="text/plain")], max_files=5, max_bytes=MAX_BYTES)

    def test_rejects_oversized_file(self):
        with pytest.raises(UploadError, match="Maximum size is 5MB") as exc_info:
            validate_uploads([_image(size=MAX_BYTES + 1)], max_files=5, max_bytes=MAX_BYTES)
        assert exc_info.value.status_code == 400

    def test_rejects_too_many_files(self):
        with pytest.raises(UploadError, match="Too many files"):
            validate_uploads([_image() for _ in range(6)], max_files=5, max_bytes=MAX_BYTES)


def test_sign_params_matches_cloudinary_scheme():
    params = {"folder": "f", "timestamp": "100", "transformation": "t"}
    expected = hashlib.sha1(b"folder=f&timestamp=100&transformation=tsecret").hexdigest()

    assert sign_params(params, "secret") == expected


@pytest.mark.asyncio
async def test_upload_image_posts_signed_form():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"secure_url": f"{CDN_URL}/cake.jpg"})

    client = MediaClient(_config(), transport=httpx.MockTransport(handler))

    url = await client.upload_image(_image())

    assert url == f"{CDN_URL}/cake.jpg"
    request = seen[0]
    assert request.url.path == "/v1_1/flodaz/image/upload"
    body = request.read()
    assert b'name="api_key"' in body
    assert b'name="signature"' in body
    assert IMAGE_TRANSFORMATION.encode() in body
    await client.close()


@pytest.mark.asyncio
async def test_upload_service_returns_all_urls(media_client):
    service = UploadService(media_client, max_files=5, max_bytes=MAX_BYTES)

    urls = await service.upload_images([_image("a.jpg"), _image("b.jpg"), _image("c.jpg")])

    assert len(urls) == 3
    assert all(url.startswith(CDN_URL) for url in urls)


@pytest.mark.asyncio
async def test_upload_service_maps_cdn_failure_to_500():
    client = MediaClient(_config(), transport=httpx.MockTransport(lambda r: httpx.Response(502)))
    service = UploadService(client, max_files=5, max_bytes=MAX_BYTES)

    with pytest.raises(UploadError) as exc_info:
        await service.upload_images([_image()])

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Failed to upload images"


@pytest.mark.asyncio
async def test_unconfigured_media_client_fails_upload():
    config = MediaConfig(
        cloud_name=None, api_key=None, api_secret=None, folder="x", timeout_seconds=1.0
    )
    service = UploadService(MediaClient(config), max_files=5, max_bytes=MAX_BYTES)

    with pytest.raises(UploadError) as exc_info:
        await service.upload_images([_image()])

    assert exc_info.value.status_code == 500
