"""Media Service — signed uploads to and deletions from the Cloudinary REST API.

Invariants:
    - Every request is signed: sha1 over the sorted "k=v&k=v" params + api_secret
    - Transport and API failures surface as MediaServiceError, never httpx errors
    - Missing credentials surface as MediaNotConfiguredError before any request
    - destroy() treats "not found" as success (deletion is idempotent)

Design Decisions:
    - Plain httpx instead of the cloudinary SDK: only upload and destroy are needed
    - resource_type "auto" on upload so PDFs and images share one endpoint
"""

import hashlib
import logging
import time
from dataclasses import dataclass, field

import httpx

from portfolio.config import Settings, get_settings
from portfolio.core.errors import MediaServiceError, MediaNotConfiguredError

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"


@dataclass
class UploadedAsset:
    """What the rest of the app keeps about an uploaded file."""
    url: str
    public_id: str
    resource_type: str
    mime_type: str
    size: int
    original_name: str
    width: int | None = None
    height: int | None = None
    extra: dict = field(default_factory=dict)

    @property
    def is_image(self) -> bool:
        return self.resource_type == "image" and self.mime_type.startswith("image/")


def sign_params(params: dict, api_secret: str) -> str:
    """Cloudinary request signature. Empty values are excluded."""
    to_sign = "&".join(
        f"{key}={params[key]}"
        for key in sorted(params)
        if params[key] not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "portfolio",
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.folder = folder
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryClient":
        if not settings.media_configured:
            raise MediaNotConfiguredError()
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            timeout=settings.media_timeout_seconds,
        )

    def _signed(self, params: dict) -> dict:
        params = {**params, "timestamp": int(time.time())}
        params["signature"] = sign_params(params, self._api_secret)
        params["api_key"] = self.api_key
        return params

    async def _post(self, operation: str, url: str, data: dict, files=None) -> dict:
        try:
            response = await self._http.post(url, data=data, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Media {operation} transport error: {e}")
            raise MediaServiceError(str(e) or e.__class__.__name__, operation)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.status_code >= 400:
            message = (payload.get("error") or {}).get("message") or response.reason_phrase
            logger.error(
                f"Media {operation} rejected ({response.status_code}): {message}",
            )
            raise MediaServiceError(message, operation)
        return payload

    async def upload(
        self,
        content: bytes,
        filename: str,
        mime_type: str,
        subfolder: str | None = None,
    ) -> UploadedAsset:
        folder = f"{self.folder}/{subfolder}" if subfolder else self.folder
        data = self._signed({"folder": folder})
        payload = await self._post(
            "upload",
            f"{API_BASE}/{self.cloud_name}/auto/upload",
            data,
            files={"file": (filename, content, mime_type)},
        )
        asset = UploadedAsset(
            url=payload["secure_url"],
            public_id=payload["public_id"],
            resource_type=payload.get("resource_type", "raw"),
            mime_type=mime_type,
            size=payload.get("bytes", len(content)),
            original_name=filename,
            width=payload.get("width"),
            height=payload.get("height"),
            extra={"format": payload.get("format")},
        )
        logger.info("Media uploaded", extra={"public_id": asset.public_id})
        return asset

    async def destroy(self, public_id: str, resource_type: str = "image") -> bool:
        data = self._signed({"public_id": public_id})
        payload = await self._post(
            "destroy",
            f"{API_BASE}/{self.cloud_name}/{resource_type}/destroy",
            data,
        )
        result = payload.get("result")
        if result not in ("ok", "not found"):
            raise MediaServiceError(f"unexpected result '{result}'", "destroy")
        logger.info(f"Media destroy: {result}", extra={"public_id": public_id})
        return result == "ok"

    async def aclose(self) -> None:
        await self._http.aclose()


async def get_media_service():
    """FastAPI dependency yielding a configured client; closed after the request."""
    client = CloudinaryClient.from_settings(get_settings())
    try:
        yield client
    finally:
        await client.aclose()


async def get_optional_media_service():
    """Like get_media_service, but yields None when uploads are not configured."""
    settings = get_settings()
    if not settings.media_configured:
        yield None
        return
    client = CloudinaryClient.from_settings(settings)
    try:
        yield client
    finally:
        await client.aclose()


async def release_assets(
    media: CloudinaryClient | None, assets: list[tuple[str, str]],
) -> None:
    """Best-effort destroy of (public_id, resource_type) pairs after a delete."""
    if media is None or not assets:
        return
    for public_id, resource_type in assets:
        try:
            await media.destroy(public_id, resource_type)
        except MediaServiceError as e:
            logger.warning(
                f"Could not release media asset: {e.message}",
                extra={"public_id": public_id},
            )


def resource_type_for(mime_type: str | None) -> str:
    """Cloudinary stores images and PDFs as "image", everything else as "raw"."""
    mime_type = mime_type or ""
    if mime_type.startswith("image/") or mime_type == "application/pdf":
        return "image"
    return "raw"
