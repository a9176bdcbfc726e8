"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SectionType(str, Enum):
    INFO = "info"
    SERVERS = "servers"
    OPERATIONS = "operations"
    MESSAGES = "messages"
    SCHEMAS = "schemas"


class ChangeKind(str, Enum):
    BREAKING = "breaking"
    NON_BREAKING = "non_breaking"
    UNCLASSIFIED = "unclassified"


INTRODUCTION_ID = "introduction"

_SECTION_PREFIXES = {
    SectionType.SERVERS: "server",
    SectionType.OPERATIONS: "operation",
    SectionType.MESSAGES: "message",
    SectionType.SCHEMAS: "schema",
}


def section_id_for(section_type: SectionType, subsection_id: str | None = None) -> str:
    """Build the element id a rendered section is addressed by."""
    if section_type is SectionType.INFO:
        return INTRODUCTION_ID
    if not subsection_id:
        raise ValueError(f"{section_type.value} sections need a subsection id")
    return f"{_SECTION_PREFIXES[section_type]}-{subsection_id}"


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One raw structural change reported by a diff engine."""

    path: str | None
    kind: ChangeKind = ChangeKind.UNCLASSIFIED
    action: str | None = None
    before: Any = None
    after: Any = None

    @classmethod
    def from_raw(cls, raw: Any, kind: ChangeKind) -> "ChangeRecord":
        if isinstance(raw, ChangeRecord):
            return raw
        if not isinstance(raw, dict):
            return cls(path=None, kind=kind)
        path = raw.get("path")
        return cls(
            path=path if isinstance(path, str) else None,
            kind=kind,
            action=raw.get("action"),
            before=raw.get("before"),
            after=raw.get("after"),
        )


@dataclass(frozen=True, slots=True)
class ChangedSection:
    """A navigable section of the rendered document that changed."""

    section_id: str
    section_type: SectionType
    subsection_id: str | None = None
    json_pointer: str | None = None

    @classmethod
    def build(
        cls,
        section_type: SectionType,
        subsection_id: str | None = None,
        *,
        json_pointer: str | None = None,
    ) -> "ChangedSection":
        return cls(
            section_id=section_id_for(section_type, subsection_id),
            section_type=section_type,
            subsection_id=subsection_id,
            json_pointer=json_pointer,
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "section_id": self.section_id,
            "section_type": self.section_type.value,
        }
        if self.subsection_id is not None:
            payload["subsection_id"] = self.subsection_id
        if self.json_pointer is not None:
            payload["json_pointer"] = self.json_pointer
        return payload


@dataclass(slots=True)
class ValidationError:
    title: str
    json_pointer: str | None = None


@dataclass(slots=True)
class ErrorObject:
    """Describes why a document could not be produced from an input."""

    type: str
    title: str
    detail: str | None = None
    validation_errors: list[ValidationError] = field(default_factory=list)
