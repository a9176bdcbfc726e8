"""Maps raw change paths to the navigable section they belong to."""

from __future__ import annotations

from collections.abc import Callable

from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.document.pointer import split_pointer
from apidoc_viewer.types import ChangedSection, SectionType

_Rule = Callable[[str, list[str], DocumentSnapshot], "ChangedSection | None"]


class PointerClassifier:
    """Classifies change paths by prefix, first matching rule wins.

    Rule order:
    1. `/info...` -> the introduction section.
    2. `/servers/{id}...` -> `server-{id}`.
    3. `/channels/{id}...` -> the first operation (document order) bound to a
       channel with the same address, or nothing when none is found.
    4. `/components/messages/{id}...` -> `message-{id}`.
    5. `/components/schemas/{id}...` -> `schema-{id}`.

    Paths matching no rule are not navigable and classify to `None`.
    """

    def __init__(self) -> None:
        self._rules: list[_Rule] = [
            self._info,
            self._server,
            self._channel,
            self._message,
            self._schema,
        ]

    def classify(self, path: str | None, document: DocumentSnapshot) -> ChangedSection | None:
        if not isinstance(path, str) or not path.startswith("/"):
            return None
        try:
            tokens = split_pointer(path)
        except ValueError:
            return None

        for rule in self._rules:
            section = rule(path, tokens, document)
            if section is not None:
                return section
        return None

    @staticmethod
    def _info(path: str, tokens: list[str], document: DocumentSnapshot) -> ChangedSection | None:
        if not path.startswith("/info"):
            return None
        return ChangedSection.build(SectionType.INFO, json_pointer=path)

    @staticmethod
    def _server(path: str, tokens: list[str], document: DocumentSnapshot) -> ChangedSection | None:
        server_id = _segment(tokens, ("servers",))
        if server_id is None:
            return None
        return ChangedSection.build(SectionType.SERVERS, server_id, json_pointer=path)

    @staticmethod
    def _channel(path: str, tokens: list[str], document: DocumentSnapshot) -> ChangedSection | None:
        channel_id = _segment(tokens, ("channels",))
        if channel_id is None:
            return None
        try:
            channel = document.channel(channel_id)
            if channel is None:
                return None
            for operation in document.operations():
                if any(
                    candidate.address == channel.address
                    for candidate in document.operation_channels(operation)
                ):
                    return ChangedSection.build(SectionType.OPERATIONS, operation.id, json_pointer=path)
        except (AttributeError, KeyError, TypeError, ValueError):
            # Malformed channel data is treated like an unresolvable channel.
            return None
        return None

    @staticmethod
    def _message(path: str, tokens: list[str], document: DocumentSnapshot) -> ChangedSection | None:
        message_id = _segment(tokens, ("components", "messages"))
        if message_id is None:
            return None
        return ChangedSection.build(SectionType.MESSAGES, message_id, json_pointer=path)

    @staticmethod
    def _schema(path: str, tokens: list[str], document: DocumentSnapshot) -> ChangedSection | None:
        schema_id = _segment(tokens, ("components", "schemas"))
        if schema_id is None:
            return None
        return ChangedSection.build(SectionType.SCHEMAS, schema_id, json_pointer=path)


def _segment(tokens: list[str], prefix: tuple[str, ...]) -> str | None:
    """Return the id token right after `prefix`, if the path has one."""
    if len(tokens) <= len(prefix) or tuple(tokens[: len(prefix)]) != prefix:
        return None
    identifier = tokens[len(prefix)]
    return identifier or None


_default_classifier = PointerClassifier()


def classify(path: str | None, document: DocumentSnapshot) -> ChangedSection | None:
    return _default_classifier.classify(path, document)
