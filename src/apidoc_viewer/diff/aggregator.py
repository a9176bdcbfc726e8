"""Turns raw change records into an ordered, deduplicated section list."""

from __future__ import annotations

from collections.abc import Iterable

from apidoc_viewer.diff.classifier import PointerClassifier
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.types import ChangedSection, ChangeRecord


class ChangeAggregator:
    """Classifies records in input order and keeps the first hit per section.

    Output order is the order in which sections first appear among the raw
    records, which decides where the viewer navigates.
    """

    def __init__(self, classifier: PointerClassifier | None = None) -> None:
        self.classifier = classifier or PointerClassifier()

    def aggregate(
        self,
        records: Iterable[ChangeRecord],
        document: DocumentSnapshot,
    ) -> list[ChangedSection]:
        seen: set[str] = set()
        sections: list[ChangedSection] = []
        for record in records:
            section = self.classifier.classify(record.path, document)
            if section is None or section.section_id in seen:
                continue
            seen.add(section.section_id)
            sections.append(section)
        return sections
