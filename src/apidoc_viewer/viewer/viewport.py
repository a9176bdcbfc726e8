"""In-memory stand-in for the rendered page the viewer scrolls."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal, Protocol


@dataclass(frozen=True, slots=True)
class ScrollOptions:
    behavior: Literal["smooth", "auto", "instant"] = "smooth"
    block: Literal["start", "center", "end", "nearest"] = "start"


@dataclass(frozen=True, slots=True)
class ScrollRequest:
    element_id: str
    options: ScrollOptions


class ScrollPrimitive(Protocol):
    def scroll_to(self, element_id: str, options: ScrollOptions) -> bool:
        """Bring an element into view, returning whether it exists."""


class Viewport:
    """Tracks which element ids are rendered and which one is in view."""

    def __init__(self, element_ids: Iterable[str] = ()) -> None:
        self._elements: list[str] = []
        self.history: list[ScrollRequest] = []
        self.in_view: str | None = None
        self.mount(element_ids)

    def mount(self, element_ids: Iterable[str]) -> None:
        """Replace the rendered elements, e.g. after a re-render."""
        self._elements = list(dict.fromkeys(element_ids))
        if self.in_view not in self._elements:
            self.in_view = None

    def elements(self) -> list[str]:
        return list(self._elements)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._elements

    def scroll_to(self, element_id: str, options: ScrollOptions | None = None) -> bool:
        if element_id not in self._elements:
            return False
        self.history.append(ScrollRequest(element_id=element_id, options=options or ScrollOptions()))
        self.in_view = element_id
        return True
