"""Cloudinary Client — verifies signing, request shape and error mapping.

Tests:
    - Signatures follow Cloudinary's sorted "k=v&..." + secret scheme
    - Uploads post to /auto/upload with a signed folder
    - Destroy treats "not found" as success
    - HTTP and transport failures become MediaServiceError
"""

import hashlib

import httpx
import pytest

from portfolio.config import Settings
from portfolio.core.errors import MediaNotConfiguredError, MediaServiceError
from portfolio.infrastructure.media_service import (
    CloudinaryClient, release_assets, resource_type_for, sign_params,
)


def _client(handler):
    return CloudinaryClient(
        cloud_name="demo", api_key="key", api_secret="secret", folder="portfolio",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_sign_params_sorts_and_skips_empty():
    signature = sign_params({"timestamp": 100, "folder": "a", "eager": ""}, "secret")
    expected = hashlib.sha1(b"folder=a&timestamp=100secret").hexdigest()
    assert signature == expected


async def test_upload_posts_signed_request():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/portfolio/images/a.png",
            "public_id": "portfolio/images/a",
            "resource_type": "image",
            "bytes": 3,
            "width": 10,
            "height": 20,
            "format": "png",
        })

    client = _client(handler)
    asset = await client.upload(b"abc", "a.png", "image/png", subfolder="images")
    await client.aclose()

    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/auto/upload"
    assert b"portfolio/images" in seen["body"]
    assert b"signature" in seen["body"]
    assert b"api_key" in seen["body"]
    assert asset.public_id == "portfolio/images/a"
    assert asset.is_image
    assert (asset.width, asset.height) == (10, 20)


async def test_upload_error_maps_to_media_error():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    client = _client(handler)
    with pytest.raises(MediaServiceError, match="Invalid image file"):
        await client.upload(b"abc", "a.png", "image/png")


async def test_transport_error_maps_to_media_error():
    def handler(request):
        raise httpx.ConnectError("unreachable")

    client = _client(handler)
    with pytest.raises(MediaServiceError) as exc_info:
        await client.destroy("portfolio/images/a")
    assert exc_info.value.http_status == 502


@pytest.mark.parametrize("result, expected", [("ok", True), ("not found", False)])
async def test_destroy_results(result, expected):
    def handler(request):
        assert request.url.path == "/v1_1/demo/raw/destroy"
        return httpx.Response(200, json={"result": result})

    assert await _client(handler).destroy("portfolio/files/x.txt", "raw") is expected


async def test_destroy_unexpected_result():
    client = _client(lambda request: httpx.Response(200, json={"result": "error"}))
    with pytest.raises(MediaServiceError):
        await client.destroy("x")


async def test_release_assets_swallows_media_errors():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(500, json={"error": {"message": "down"}})

    await release_assets(_client(handler), [("a", "image"), ("b", "raw")])
    assert calls == ["/v1_1/demo/image/destroy", "/v1_1/demo/raw/destroy"]


async def test_release_assets_without_client_is_noop():
    await release_assets(None, [("a", "image")])


def test_from_settings_requires_credentials():
    with pytest.raises(MediaNotConfiguredError):
        CloudinaryClient.from_settings(Settings(cloudinary_cloud_name="demo"))


@pytest.mark.parametrize("mime, expected", [
    ("image/png", "image"), ("application/pdf", "image"),
    ("text/plain", "raw"), (None, "raw"),
])
def test_resource_type_for(mime, expected):
    assert resource_type_for(mime) == expected
