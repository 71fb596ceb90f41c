"""Progressive Image — verifies the placeholder-then-final state machine.

Tests:
    - Starts on the placeholder and swaps once after a successful preload
    - priority=True skips the placeholder stage entirely
    - Failed and cancelled preloads leave the placeholder in place
    - activate() is idempotent and deactivate() is safe to repeat
"""

import asyncio

from portfolio.presentation.progressive_image import ImageState, ProgressiveImage

SAMPLE = "https://res.cloudinary.com/demo/image/upload/sample.jpg"


async def test_initial_state_is_placeholder():
    image = ProgressiveImage(SAMPLE, width=800)
    assert image.state == ImageState.PLACEHOLDER_SHOWN
    assert image.current_src == image.placeholder_src
    assert "e_blur:1000" in image.current_src


async def test_successful_preload_swaps_to_final():
    requested = []

    async def preload(url):
        requested.append(url)

    image = ProgressiveImage(SAMPLE, width=800)
    state = await image.activate(preload)
    assert state == ImageState.FINAL_SHOWN
    assert image.current_src == image.final_src
    assert requested == [image.final_src]
    assert "w_800" in image.final_src


async def test_priority_skips_placeholder():
    calls = []

    async def preload(url):
        calls.append(url)

    image = ProgressiveImage(SAMPLE, priority=True)
    assert image.state == ImageState.FINAL_SHOWN
    assert await image.activate(preload) == ImageState.FINAL_SHOWN
    assert calls == []


async def test_failed_preload_keeps_placeholder():
    async def preload(url):
        raise ConnectionError("offline")

    image = ProgressiveImage(SAMPLE)
    assert await image.activate(preload) == ImageState.PLACEHOLDER_SHOWN
    assert image.current_src == image.placeholder_src


async def test_non_media_source_shows_real_image_during_placeholder_stage():
    image = ProgressiveImage("https://example.com/a.jpg")
    assert image.placeholder_src == ""
    assert image.state == ImageState.PLACEHOLDER_SHOWN
    assert image.current_src == "https://example.com/a.jpg"


async def test_non_media_source_keeps_real_image_after_failed_preload():
    async def preload(url):
        raise ConnectionError("offline")

    image = ProgressiveImage("https://example.com/a.jpg")
    assert await image.activate(preload) == ImageState.PLACEHOLDER_SHOWN
    assert image.current_src == "https://example.com/a.jpg"


async def test_missing_source_resolves_immediately():
    async def preload(url):
        raise AssertionError("should not preload")

    image = ProgressiveImage(None)
    assert await image.activate(preload) == ImageState.PLACEHOLDER_SHOWN
    assert image.current_src == ""


async def test_activate_is_idempotent():
    calls = []

    async def preload(url):
        calls.append(url)

    image = ProgressiveImage(SAMPLE)
    first = image.activate(preload)
    second = image.activate(preload)
    assert first is second
    await first
    assert len(calls) == 1


async def test_deactivate_cancels_pending_preload():
    started = asyncio.Event()

    async def preload(url):
        started.set()
        await asyncio.sleep(10)

    image = ProgressiveImage(SAMPLE)
    settled = image.activate(preload)
    await started.wait()
    image.deactivate()
    image.deactivate()
    assert await settled == ImageState.PLACEHOLDER_SHOWN
    assert image.state == ImageState.PLACEHOLDER_SHOWN


async def test_mark_loaded_transitions_once():
    image = ProgressiveImage(SAMPLE)
    assert image.mark_loaded() is True
    assert image.mark_loaded() is False
    assert image.state == ImageState.FINAL_SHOWN
