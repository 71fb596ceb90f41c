"""Progressive Image — placeholder-then-final state machine for one image.

Invariants:
    - With a source and no priority, the initial state is PLACEHOLDER_SHOWN
    - PLACEHOLDER_SHOWN -> FINAL_SHOWN happens at most once and never reverses
    - priority=True starts in FINAL_SHOWN and never issues a placeholder stage
    - A failed or cancelled preload leaves the placeholder in place
    - Without a blur variant (non-media URL) the placeholder stage shows the final URL
    - activate() is idempotent: repeated calls return the same future
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable

from portfolio.presentation.media_urls import (
    AUTO, blur_placeholder, build_srcset, optimize_image_url,
)

logger = logging.getLogger(__name__)

Preloader = Callable[[str], Awaitable[None]]


class ImageState(str, Enum):
    PLACEHOLDER_SHOWN = "placeholder-shown"
    FINAL_SHOWN = "final-shown"


class ProgressiveImage:
    """Tracks which variant of an image should currently be displayed.

    The preloader is any coroutine function that fetches a URL and raises on
    failure; activate() runs it as a background task and resolves the
    returned future with the state reached once the attempt settles.
    """

    def __init__(
        self, src: str | None, width: int | str = AUTO, priority: bool = False,
    ):
        self.src = src or ""
        self.priority = priority
        self.final_src = optimize_image_url(
            self.src, width=width, quality=AUTO, format=AUTO,
        )
        self.srcset = build_srcset(self.src)
        self.placeholder_src = blur_placeholder(self.src)
        self._state = (
            ImageState.FINAL_SHOWN if priority else ImageState.PLACEHOLDER_SHOWN
        )
        self._task: asyncio.Task | None = None
        self._settled: asyncio.Future | None = None

    @property
    def state(self) -> ImageState:
        return self._state

    @property
    def current_src(self) -> str:
        if self._state == ImageState.FINAL_SHOWN:
            return self.final_src
        return self.placeholder_src or self.final_src

    def activate(self, preloader: Preloader) -> asyncio.Future:
        """Start preloading the final variant. Must run inside an event loop."""
        if self._settled is not None:
            return self._settled
        loop = asyncio.get_running_loop()
        self._settled = loop.create_future()
        if not self.src or self._state == ImageState.FINAL_SHOWN:
            self._settled.set_result(self._state)
            return self._settled
        self._task = loop.create_task(self._preload(preloader))
        return self._settled

    def deactivate(self) -> None:
        """Cancel an in-flight preload. Safe to call repeatedly."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        if self._settled is not None and not self._settled.done():
            self._settled.set_result(self._state)

    def mark_loaded(self) -> bool:
        """Swap to the final variant. Returns False when already swapped."""
        if self._state == ImageState.FINAL_SHOWN:
            return False
        self._state = ImageState.FINAL_SHOWN
        return True

    async def _preload(self, preloader: Preloader) -> None:
        try:
            await preloader(self.final_src)
        except asyncio.CancelledError:
            logger.debug(f"Preload cancelled for {self.final_src}")
            raise
        except Exception as e:
            logger.warning(f"Preload failed for {self.final_src}: {e}")
        else:
            self.mark_loaded()
        finally:
            if self._settled is not None and not self._settled.done():
                self._settled.set_result(self._state)
