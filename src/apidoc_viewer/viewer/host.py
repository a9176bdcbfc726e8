"""Viewer host: wires tracker, navigation, rendering and tracing together."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apidoc_viewer.config import ViewerConfig
from apidoc_viewer.diff.calculator import ChangeCalculator
from apidoc_viewer.diff.engine import DiffEngine
from apidoc_viewer.document.parser import DocumentParser
from apidoc_viewer.obs.tracing import Timer, TransitionRecord, TransitionStore
from apidoc_viewer.viewer.events import log_event
from apidoc_viewer.viewer.navigation import NavigationTrigger
from apidoc_viewer.viewer.outline import Outline, render_outline
from apidoc_viewer.viewer.tracker import Transition, VersionTracker
from apidoc_viewer.viewer.viewport import Viewport


class DocumentViewer:
    """Plays the role of the hosting UI component.

    Every new input goes through the tracker; navigation happens against the
    page as it is currently rendered, and the page is re-rendered from the
    committed document afterwards.
    """

    def __init__(
        self,
        config: ViewerConfig | Mapping[str, Any] | None = None,
        *,
        parser: DocumentParser | None = None,
        engine: DiffEngine | None = None,
        viewport: Viewport | None = None,
        transition_store: TransitionStore | None = None,
    ) -> None:
        self.config = config if isinstance(config, ViewerConfig) else ViewerConfig.merged(config)
        self.viewport = viewport or Viewport()
        self.transition_store = transition_store or TransitionStore()
        self.tracker = VersionTracker(
            parser=parser,
            calculator=ChangeCalculator(engine=engine),
            navigator=NavigationTrigger(self.viewport, self.config.navigation),
            observer=log_event,
        )
        self._outline = Outline()

    def update(self, source: Any) -> tuple[Transition, TransitionRecord]:
        with Timer() as timer:
            transition = self.tracker.on_input_changed(source)
            self._outline = render_outline(self.tracker.current, self.config, error=self.tracker.error)
            self.viewport.mount(self._outline.element_ids())

        current = self.tracker.current
        record = self.transition_store.create_record(
            transition,
            document_version=current.version() if current is not None else None,
            latency_ms=timer.elapsed_ms,
        )
        return transition, record

    def outline(self) -> Outline:
        return self._outline
