"""Version tracker: keeps current/previous snapshots and reports what changed."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from apidoc_viewer.diff.calculator import ChangeCalculator
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.document.parser import DocumentParser
from apidoc_viewer.errors import DiffEngineError, DiffPreconditionError, ParseError
from apidoc_viewer.types import ChangedSection, ErrorObject
from apidoc_viewer.viewer.events import EventKind, TrackerEvent, log_event
from apidoc_viewer.viewer.navigation import NavigationTrigger

_NO_INPUT = object()


class TrackerStatus(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"


class TransitionKind(str, Enum):
    NOOP = "noop"
    INITIAL_LOAD = "initial_load"
    UPDATE = "update"
    CLEARED = "cleared"


@dataclass(frozen=True, slots=True)
class TrackerState:
    """The snapshot pair; replaced as a whole on every transition."""

    current: DocumentSnapshot | None = None
    previous: DocumentSnapshot | None = None

    @property
    def status(self) -> TrackerStatus:
        return TrackerStatus.EMPTY if self.current is None else TrackerStatus.LOADED


@dataclass(slots=True)
class Transition:
    """Outcome of one `on_input_changed` call."""

    kind: TransitionKind
    changes: list[ChangedSection] = field(default_factory=list)
    navigated_to: str | None = None
    navigation_succeeded: bool = False
    events: list[TrackerEvent] = field(default_factory=list)
    error: ErrorObject | None = None

    @property
    def warnings(self) -> list[TrackerEvent]:
        return [event for event in self.events if event.is_warning]


class VersionTracker:
    """State machine driven by changes of the raw document input.

    States are `EMPTY` (no current document) and `LOADED`. The first
    successful parse stores the snapshot as both current and previous, so the
    next update diffs against a real prior revision instead of reporting the
    whole document as new. Later updates diff the old current snapshot
    against the new one, navigate to the first changed section and then
    commit `previous = old current, current = new`. Parse failures clear both
    snapshots. Diff failures are reported as warnings and the update still
    commits, just without changes.

    The tracker only reacts when the input object changes identity; calling
    it again with the very same input is a no-op.
    """

    def __init__(
        self,
        *,
        parser: DocumentParser | None = None,
        calculator: ChangeCalculator | None = None,
        navigator: NavigationTrigger | None = None,
        observer: Callable[[TrackerEvent], None] | None = log_event,
        initial_input: Any = _NO_INPUT,
    ) -> None:
        self.parser = parser or DocumentParser()
        self.calculator = calculator or ChangeCalculator()
        self.navigator = navigator
        self._observer = observer
        self._state = TrackerState()
        self._last_input: Any = _NO_INPUT
        self._error: ErrorObject | None = None
        if initial_input is not _NO_INPUT:
            self.on_input_changed(initial_input)

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def status(self) -> TrackerStatus:
        return self._state.status

    @property
    def current(self) -> DocumentSnapshot | None:
        return self._state.current

    @property
    def previous(self) -> DocumentSnapshot | None:
        return self._state.previous

    @property
    def error(self) -> ErrorObject | None:
        """Why the last input produced no document, if it did not."""
        return self._error

    def set_observer(self, observer: Callable[[TrackerEvent], None] | None) -> None:
        """Set an optional callback invoked for every reported event."""
        self._observer = observer

    def on_input_changed(self, new_input: Any) -> Transition:
        if new_input is self._last_input:
            return Transition(kind=TransitionKind.NOOP)
        self._last_input = new_input

        events: list[TrackerEvent] = []
        try:
            snapshot = self.parser.parse(new_input)
        except ParseError as exc:
            return self._clear(exc.error, events)

        old_current = self._state.current
        if snapshot is old_current:
            return Transition(kind=TransitionKind.NOOP)

        if old_current is None:
            self._commit(TrackerState(current=snapshot, previous=snapshot))
            self._emit(
                events,
                TrackerEvent(
                    kind=EventKind.DOCUMENT_LOADED,
                    message="Document loaded",
                    detail={"version": snapshot.version()},
                ),
            )
            return Transition(kind=TransitionKind.INITIAL_LOAD, events=events)

        changes = self._changes(old_current, snapshot, events)
        transition = Transition(kind=TransitionKind.UPDATE, changes=changes, events=events)
        if changes and self.navigator is not None:
            transition.navigated_to = changes[0].section_id
            self.navigator.set_observer(lambda event: self._emit(events, event))
            try:
                transition.navigation_succeeded = self.navigator.go_to(transition.navigated_to)
            finally:
                self.navigator.set_observer(None)

        self._commit(TrackerState(current=snapshot, previous=old_current))
        self._emit(
            events,
            TrackerEvent(
                kind=EventKind.DOCUMENT_UPDATED,
                message="Document updated",
                detail={
                    "change_count": len(changes),
                    "section_ids": [section.section_id for section in changes],
                },
            ),
        )
        return transition

    def _changes(
        self,
        old: DocumentSnapshot,
        new: DocumentSnapshot,
        events: list[TrackerEvent],
    ) -> list[ChangedSection]:
        try:
            return self.calculator.calculate(old, new)
        except DiffPreconditionError as exc:
            self._emit(
                events,
                TrackerEvent(
                    kind=EventKind.DIFF_PRECONDITION_FAILED,
                    message="Documents cannot be diffed",
                    detail={"error": str(exc)},
                ),
            )
        except DiffEngineError as exc:
            self._emit(
                events,
                TrackerEvent(
                    kind=EventKind.DIFF_ENGINE_FAILED,
                    message="Diff engine failed",
                    detail={"error": str(exc)},
                ),
            )
        return []

    def _clear(self, error: ErrorObject, events: list[TrackerEvent]) -> Transition:
        had_document = self._state.current is not None
        self._commit(TrackerState())
        self._error = error
        self._emit(
            events,
            TrackerEvent(
                kind=EventKind.PARSE_FAILED,
                message="Document could not be parsed",
                detail={"error_type": error.type, "title": error.title},
            ),
        )
        if had_document:
            self._emit(events, TrackerEvent(kind=EventKind.DOCUMENT_CLEARED, message="Document cleared"))
        return Transition(kind=TransitionKind.CLEARED, events=events, error=error)

    def _commit(self, state: TrackerState) -> None:
        self._state = state
        self._error = None

    def _emit(self, events: list[TrackerEvent], event: TrackerEvent) -> None:
        events.append(event)
        if self._observer is not None:
            self._observer(event)
