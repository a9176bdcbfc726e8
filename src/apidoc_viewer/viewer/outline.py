"""Renders a document into the ordered list of addressable page elements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from apidoc_viewer.config import ViewerConfig
from apidoc_viewer.diff.enumerator import enumerate_all
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.types import ChangedSection, ErrorObject, SectionType


@dataclass(slots=True)
class OutlineEntry:
    element_id: str
    section_type: SectionType
    title: str


@dataclass(slots=True)
class Outline:
    """What the page shows: section elements, or an error panel."""

    entries: list[OutlineEntry] = field(default_factory=list)
    error: ErrorObject | None = None

    def element_ids(self) -> list[str]:
        return [entry.element_id for entry in self.entries]


def render_outline(
    document: DocumentSnapshot | None,
    config: ViewerConfig | None = None,
    *,
    error: ErrorObject | None = None,
) -> Outline:
    config = config or ViewerConfig()
    if document is None:
        return Outline(error=error if config.show.errors else None)

    visible = {
        SectionType.INFO: config.show.info,
        SectionType.SERVERS: config.show.servers,
        SectionType.OPERATIONS: config.show.operations,
        SectionType.MESSAGES: config.show.messages,
        SectionType.SCHEMAS: config.show.schemas,
    }
    entries = [
        OutlineEntry(
            element_id=section.section_id,
            section_type=section.section_type,
            title=_title(section, document),
        )
        for section in enumerate_all(document)
        if visible[section.section_type]
    ]
    return Outline(entries=entries)


def _title(section: ChangedSection, document: DocumentSnapshot) -> str:
    if section.section_type is SectionType.INFO:
        info: Any = document.info() or {}
        title = info.get("title")
        version = info.get("version")
        if title and version:
            return f"{title} {version}"
        return str(title or "Introduction")
    return str(section.subsection_id)
