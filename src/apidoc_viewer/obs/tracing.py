"""Transition tracing and summary metrics."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from apidoc_viewer.viewer.tracker import Transition, TransitionKind


@dataclass(slots=True)
class TransitionRecord:
    trace_id: str
    timestamp_utc: str
    kind: str
    document_version: str | None
    section_ids: list[str]
    navigated_to: str | None
    navigation_succeeded: bool
    warnings: list[str]
    error_type: str | None
    latency_ms: float


class TransitionStore:
    """In-memory transition storage for API-level observability."""

    def __init__(self, *, max_records: int = 1000) -> None:
        self._records: dict[str, TransitionRecord] = {}
        self._max_records = max_records

    def create_record(
        self,
        transition: Transition,
        *,
        document_version: str | None,
        latency_ms: float,
    ) -> TransitionRecord:
        trace_id = str(uuid.uuid4())
        record = TransitionRecord(
            trace_id=trace_id,
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            kind=transition.kind.value,
            document_version=document_version,
            section_ids=[section.section_id for section in transition.changes],
            navigated_to=transition.navigated_to,
            navigation_succeeded=transition.navigation_succeeded,
            warnings=[event.kind.value for event in transition.warnings],
            error_type=transition.error.type if transition.error else None,
            latency_ms=latency_ms,
        )
        self._records[trace_id] = record
        while len(self._records) > self._max_records:
            del self._records[next(iter(self._records))]
        return record

    def get(self, trace_id: str) -> TransitionRecord:
        record = self._records.get(trace_id)
        if record is None:
            raise KeyError(f"Transition not found: {trace_id}")
        return record

    def list_recent(self, limit: int = 20) -> list[TransitionRecord]:
        if limit <= 0:
            return []
        return list(self._records.values())[-limit:]

    def summary(self) -> dict[str, float | int]:
        """Aggregate transition metrics for dashboard display."""
        records = list(self._records.values())
        total = len(records)
        counts = {f"{kind.value}_count": 0 for kind in TransitionKind}
        if total == 0:
            return {
                "total_transitions": 0,
                **counts,
                "total_warnings": 0,
                "navigation_attempts": 0,
                "navigation_hit_rate": 0.0,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
            }

        for record in records:
            counts[f"{record.kind}_count"] += 1
        attempts = [record for record in records if record.navigated_to is not None]
        hits = sum(1 for record in attempts if record.navigation_succeeded)
        latencies = sorted(record.latency_ms for record in records)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))

        return {
            "total_transitions": total,
            **counts,
            "total_warnings": sum(len(record.warnings) for record in records),
            "navigation_attempts": len(attempts),
            "navigation_hit_rate": hits / len(attempts) if attempts else 0.0,
            "avg_latency_ms": sum(latencies) / total,
            "p95_latency_ms": latencies[p95_index],
        }


class Timer:
    """Simple context timer used around transitions."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
