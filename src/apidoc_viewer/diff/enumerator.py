"""Lists every navigable section of a document."""

from __future__ import annotations

from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.document.pointer import join_pointer
from apidoc_viewer.types import ChangedSection, SectionType


def enumerate_all(document: DocumentSnapshot) -> list[ChangedSection]:
    """Report every section as changed: info, servers, operations, messages, schemas."""

    sections: list[ChangedSection] = []
    if document.info() is not None:
        sections.append(ChangedSection.build(SectionType.INFO, json_pointer="/info"))

    for server in document.servers():
        sections.append(
            ChangedSection.build(SectionType.SERVERS, server.id, json_pointer=join_pointer(["servers", server.id]))
        )

    for operation in document.operations():
        sections.append(
            ChangedSection.build(
                SectionType.OPERATIONS,
                operation.id,
                json_pointer=join_pointer(["operations", operation.id]),
            )
        )

    if document.has_components():
        for message in document.messages():
            sections.append(
                ChangedSection.build(
                    SectionType.MESSAGES,
                    message.id,
                    json_pointer=join_pointer(["components", "messages", message.id]),
                )
            )
        for schema in document.schemas():
            sections.append(
                ChangedSection.build(
                    SectionType.SCHEMAS,
                    schema.id,
                    json_pointer=join_pointer(["components", "schemas", schema.id]),
                )
            )

    return sections
