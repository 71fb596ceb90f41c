"""Section Tracker — reports which page section the reader has scrolled into.

Invariants:
    - Scroll events are coalesced: at most one evaluation per requested frame
    - The callback fires only when the selected section changes
    - Above the offset (scroll_top < offset) the selection is NO_SECTION
    - Ties go to the section whose offset-adjusted top is closest to scroll_top,
      then to the earlier section in the given order
    - Each tracker owns its listener and issues one handle per attachment
    - Cancelling a handle twice is a no-op; a stale handle never detaches a later attachment
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)

NO_SECTION = ""
DEFAULT_OFFSET = 100


@dataclass(frozen=True)
class SectionBox:
    """Section geometry in page coordinates (top measured from the document top)."""
    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


class Viewport(Protocol):
    """The slice of a scrolling surface the tracker needs."""

    def scroll_top(self) -> float: ...

    def section_box(self, section_id: str) -> SectionBox | None: ...

    def add_scroll_listener(self, listener: Callable[[], None]) -> None: ...

    def remove_scroll_listener(self, listener: Callable[[], None]) -> None: ...

    def request_frame(self, callback: Callable[[], None]) -> None: ...


def select_section(
    scroll_top: float,
    boxes: Mapping[str, SectionBox | None],
    order: Iterable[str],
    offset: float = DEFAULT_OFFSET,
) -> str:
    """Pick the active section for a scroll position. Pure; used by SectionTracker."""
    if scroll_top < offset:
        return NO_SECTION
    selected = NO_SECTION
    best_distance = float("inf")
    for section_id in order:
        box = boxes.get(section_id)
        if box is None:
            continue
        adjusted_top = box.top - offset
        if adjusted_top <= scroll_top < box.bottom - offset:
            distance = abs(scroll_top - adjusted_top)
            if distance < best_distance:
                best_distance = distance
                selected = section_id
    return selected


class TrackerHandle:
    """Returned by SectionTracker.attach(); cancel() detaches the listener.

    A handle only controls the attachment that issued it: once the tracker is
    detached (by any means) the handle goes inactive, and cancelling it never
    touches a later attachment.
    """

    def __init__(self, tracker: "SectionTracker"):
        self._tracker: "SectionTracker | None" = tracker

    @property
    def active(self) -> bool:
        return self._tracker is not None and self._tracker.handle is self

    def cancel(self) -> None:
        tracker, self._tracker = self._tracker, None
        if tracker is not None and tracker.handle is self:
            tracker.detach()

    __call__ = cancel


class SectionTracker:
    def __init__(
        self,
        sections: Sequence[str],
        callback: Callable[[str], None],
        viewport: Viewport,
        offset: float = DEFAULT_OFFSET,
    ):
        self.sections = tuple(sections)
        self.offset = offset
        self._callback = callback
        self._viewport = viewport
        self._current = NO_SECTION
        self._frame_pending = False
        self._handle: TrackerHandle | None = None

    @property
    def current(self) -> str:
        return self._current

    @property
    def attached(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> TrackerHandle | None:
        return self._handle

    def attach(self) -> TrackerHandle:
        """Start listening and schedule an initial evaluation.

        While attached, repeated calls return the same handle.
        """
        if self._handle is None:
            self._handle = TrackerHandle(self)
            self._viewport.add_scroll_listener(self._on_scroll)
            self._schedule()
        return self._handle

    def detach(self) -> None:
        if self._handle is None:
            return
        self._handle = None
        self._viewport.remove_scroll_listener(self._on_scroll)

    def evaluate(self) -> str:
        """Recompute the active section now, notifying on change."""
        scroll_top = self._viewport.scroll_top()
        boxes = {sid: self._viewport.section_box(sid) for sid in self.sections}
        selected = select_section(scroll_top, boxes, self.sections, self.offset)
        if selected != self._current:
            self._current = selected
            self._callback(selected)
        return selected

    def _on_scroll(self) -> None:
        self._schedule()

    def _schedule(self) -> None:
        if self._frame_pending:
            return
        self._frame_pending = True
        self._viewport.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_pending = False
        if self._handle is not None:
            self.evaluate()

    def __enter__(self) -> "SectionTracker":
        self.attach()
        return self

    def __exit__(self, *exc) -> None:
        self.detach()
