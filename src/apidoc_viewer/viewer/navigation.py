"""Brings a changed section into view."""

from __future__ import annotations

from collections.abc import Callable

import structlog

from apidoc_viewer.config import NavigationConfig
from apidoc_viewer.viewer.events import EventKind, TrackerEvent
from apidoc_viewer.viewer.viewport import ScrollOptions, ScrollPrimitive

logger = structlog.get_logger()


class NavigationTrigger:
    """Best-effort navigation to a section id.

    A missing element (not rendered yet, collapsed, filtered out) is a miss,
    not an error; the trigger never retries.
    """

    def __init__(
        self,
        scroller: ScrollPrimitive,
        config: NavigationConfig | None = None,
        *,
        observer: Callable[[TrackerEvent], None] | None = None,
    ) -> None:
        self.scroller = scroller
        self.config = config or NavigationConfig()
        self._observer = observer

    def set_observer(self, observer: Callable[[TrackerEvent], None] | None) -> None:
        self._observer = observer

    def go_to(self, section_id: str) -> bool:
        if not self.config.enabled:
            return False
        options = ScrollOptions(behavior=self.config.behavior, block=self.config.block)
        try:
            found = bool(self.scroller.scroll_to(section_id, options))
        except Exception as exc:
            self._report(
                TrackerEvent(
                    kind=EventKind.NAVIGATION_FAILED,
                    message="Scrolling to section failed",
                    detail={"section_id": section_id, "error": str(exc)},
                )
            )
            return False

        if found:
            logger.debug("Scrolled section into view", section_id=section_id)
        else:
            self._report(
                TrackerEvent(
                    kind=EventKind.NAVIGATION_MISSED,
                    message="Section is not rendered",
                    detail={"section_id": section_id},
                )
            )
        return found

    def _report(self, event: TrackerEvent) -> None:
        if self._observer is not None:
            self._observer(event)
