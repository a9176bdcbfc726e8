import pytest

from apidoc_viewer.obs.tracing import TransitionStore
from apidoc_viewer.types import ChangedSection, SectionType
from apidoc_viewer.viewer.events import EventKind, TrackerEvent
from apidoc_viewer.viewer.tracker import Transition, TransitionKind


def _update(hit: bool) -> Transition:
    return Transition(
        kind=TransitionKind.UPDATE,
        changes=[ChangedSection.build(SectionType.SERVERS, "s1")],
        navigated_to="server-s1",
        navigation_succeeded=hit,
    )


def test_summary_counts_kinds_and_navigation_hits() -> None:
    store = TransitionStore()
    store.create_record(Transition(kind=TransitionKind.INITIAL_LOAD), document_version="3.0.0", latency_ms=2.0)
    store.create_record(_update(True), document_version="3.0.0", latency_ms=4.0)
    store.create_record(_update(False), document_version="3.0.0", latency_ms=6.0)
    store.create_record(
        Transition(
            kind=TransitionKind.UPDATE,
            events=[TrackerEvent(kind=EventKind.DIFF_ENGINE_FAILED, message="Diff engine failed")],
        ),
        document_version="3.0.0",
        latency_ms=8.0,
    )

    summary = store.summary()

    assert summary["total_transitions"] == 4
    assert summary["initial_load_count"] == 1
    assert summary["update_count"] == 3
    assert summary["navigation_attempts"] == 2
    assert summary["navigation_hit_rate"] == pytest.approx(0.5)
    assert summary["total_warnings"] == 1
    assert summary["avg_latency_ms"] == pytest.approx(5.0)


def test_records_are_bounded_and_retrievable() -> None:
    store = TransitionStore(max_records=2)
    first = store.create_record(_update(True), document_version=None, latency_ms=1.0)
    second = store.create_record(_update(True), document_version=None, latency_ms=1.0)
    third = store.create_record(_update(True), document_version=None, latency_ms=1.0)

    assert [r.trace_id for r in store.list_recent()] == [second.trace_id, third.trace_id]
    assert store.get(third.trace_id).section_ids == ["server-s1"]
    with pytest.raises(KeyError):
        store.get(first.trace_id)


def test_empty_summary() -> None:
    assert TransitionStore().summary()["total_transitions"] == 0
