"""Image Warmup — requests the optimized variant of a fresh upload once.

Cloudinary derives transformed variants on first request. Running the
progressive-image preload right after an upload means the first visitor gets
a cached variant instead of paying for the transformation.

Invariants:
    - Warmup failures are logged, never raised (it runs as a background task)
    - Only media-host URLs are fetched
"""

import logging

import httpx

from portfolio.presentation.media_urls import is_media_url
from portfolio.presentation.progressive_image import ImageState, ProgressiveImage

logger = logging.getLogger(__name__)

WARMUP_TIMEOUT_SECONDS = 30.0


def make_preloader(client: httpx.AsyncClient):
    async def preload(url: str) -> None:
        response = await client.get(url)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/"):
            raise ValueError(f"unexpected content type '{content_type}'")
    return preload


async def warm_image(
    url: str, width: int | str = 800, client: httpx.AsyncClient | None = None,
) -> ImageState:
    if not is_media_url(url):
        return ImageState.PLACEHOLDER_SHOWN
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=WARMUP_TIMEOUT_SECONDS)
    image = ProgressiveImage(url, width=width)
    try:
        state = await image.activate(make_preloader(client))
    finally:
        image.deactivate()
        if owns_client:
            await client.aclose()
    logger.info(f"Image warmup finished in state {state.value}: {image.final_src}")
    return state
