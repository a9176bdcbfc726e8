"""Computes the changed sections between two document revisions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from apidoc_viewer.diff.aggregator import ChangeAggregator
from apidoc_viewer.diff.engine import DiffEngine, DiffOutput, StructuralDiffEngine
from apidoc_viewer.diff.enumerator import enumerate_all
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.errors import DiffEngineError, DiffPreconditionError
from apidoc_viewer.types import ChangedSection

logger = structlog.get_logger()


class ChangeCalculator:
    """Coordinates the diff engine and the aggregator for one transition.

    Missing documents are handled without the engine: a document appearing
    from nothing reports every section, a document disappearing reports
    nothing. Failures are raised as `DiffPreconditionError` (snapshots not
    comparable) or `DiffEngineError` (engine raised); callers decide how to
    recover.
    """

    def __init__(
        self,
        engine: DiffEngine | None = None,
        aggregator: ChangeAggregator | None = None,
    ) -> None:
        self.engine = engine or StructuralDiffEngine()
        self.aggregator = aggregator or ChangeAggregator()

    def calculate(
        self,
        old: DocumentSnapshot | None,
        new: DocumentSnapshot | None,
    ) -> list[ChangedSection]:
        if new is None:
            return []
        if old is None:
            return enumerate_all(new)

        old_plain = _plain(old, "previous")
        new_plain = _plain(new, "current")

        try:
            output = self.engine.diff(old_plain, new_plain)
        except Exception as exc:
            raise DiffEngineError(f"{type(exc).__name__}: {exc}") from exc
        if not isinstance(output, DiffOutput):
            raise DiffEngineError(f"diff engine returned {type(output).__name__}, expected DiffOutput")

        records = output.pool()
        logger.debug("Diff computed", record_count=len(records))
        return self.aggregator.aggregate(records, new)


def _plain(snapshot: DocumentSnapshot, label: str) -> dict[str, Any]:
    try:
        plain = snapshot.json()
    except Exception as exc:
        raise DiffPreconditionError(f"{label} document cannot be serialized: {exc}") from exc
    if not isinstance(plain, Mapping) or not plain:
        raise DiffPreconditionError(f"{label} document has no plain structural form")
    marker = plain.get("asyncapi")
    if not isinstance(marker, str) or not marker:
        raise DiffPreconditionError(f"{label} document is missing the asyncapi version marker")
    return dict(plain)
