"""Events reported by the version tracker and navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger()


class EventKind(str, Enum):
    DOCUMENT_LOADED = "document_loaded"
    DOCUMENT_UPDATED = "document_updated"
    DOCUMENT_CLEARED = "document_cleared"
    PARSE_FAILED = "parse_failed"
    DIFF_PRECONDITION_FAILED = "diff_precondition_failed"
    DIFF_ENGINE_FAILED = "diff_engine_failed"
    NAVIGATION_MISSED = "navigation_missed"
    NAVIGATION_FAILED = "navigation_failed"


_WARNINGS = frozenset(
    {
        EventKind.PARSE_FAILED,
        EventKind.DIFF_PRECONDITION_FAILED,
        EventKind.DIFF_ENGINE_FAILED,
        EventKind.NAVIGATION_FAILED,
    }
)


@dataclass(frozen=True, slots=True)
class TrackerEvent:
    kind: EventKind
    message: str
    detail: dict[str, Any] = field(default_factory=dict)

    @property
    def is_warning(self) -> bool:
        return self.kind in _WARNINGS


def log_event(event: TrackerEvent) -> None:
    """Default observer: forward events to structlog."""
    if event.is_warning:
        logger.warning(event.message, kind=event.kind.value, **event.detail)
    else:
        logger.info(event.message, kind=event.kind.value, **event.detail)
