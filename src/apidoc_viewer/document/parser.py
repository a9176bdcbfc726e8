"""Parsing interfaces and concrete parsers for heterogeneous document inputs."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog
import yaml

from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.errors import ParseError
from apidoc_viewer.types import ErrorObject, ValidationError

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class FetchingSchema:
    """A document that has to be downloaded before it can be parsed."""

    url: str
    request_options: Mapping[str, Any] = field(default_factory=dict)


class Parser(ABC):
    """Base parser interface used by `DocumentParser`."""

    @abstractmethod
    def accepts(self, source: Any) -> bool:
        """Return whether this parser understands the given input."""

    @abstractmethod
    def parse(self, source: Any) -> DocumentSnapshot:
        """Turn the input into a validated snapshot or raise `ParseError`."""


class SnapshotParser(Parser):
    """Passes already-parsed snapshots through untouched."""

    def accepts(self, source: Any) -> bool:
        return isinstance(source, DocumentSnapshot)

    def parse(self, source: Any) -> DocumentSnapshot:
        if source.version() is None:
            raise ParseError(
                ErrorObject(
                    type="validation-errors",
                    title="There were errors validating the API document.",
                    validation_errors=[
                        ValidationError(
                            title="Missing or invalid 'asyncapi' version marker.",
                            json_pointer="/asyncapi",
                        )
                    ],
                )
            )
        return source


class MappingParser(Parser):
    """Validates structured (already decoded) documents."""

    def accepts(self, source: Any) -> bool:
        return isinstance(source, Mapping)

    def parse(self, source: Any) -> DocumentSnapshot:
        errors = validate_document(source)
        if errors:
            raise ParseError(
                ErrorObject(
                    type="validation-errors",
                    title="There were errors validating the API document.",
                    validation_errors=errors,
                )
            )
        try:
            return DocumentSnapshot(source)
        except (TypeError, ValueError, RecursionError, copy.Error) as exc:
            raise ParseError(
                ErrorObject(
                    type="invalid-document",
                    title="Document contains values that cannot be copied.",
                    detail=str(exc),
                )
            ) from exc


class TextParser(Parser):
    """Parser for raw JSON or YAML text."""

    def __init__(self, mapping_parser: MappingParser | None = None) -> None:
        self._mapping_parser = mapping_parser or MappingParser()

    def accepts(self, source: Any) -> bool:
        return isinstance(source, (str, bytes))

    def parse(self, source: Any) -> DocumentSnapshot:
        try:
            text = source.decode("utf-8") if isinstance(source, bytes) else source
        except UnicodeDecodeError as exc:
            raise ParseError(
                ErrorObject(type="invalid-syntax", title="Document is not valid UTF-8.", detail=str(exc))
            ) from exc
        if not text.strip():
            raise ParseError(ErrorObject(type="empty-document", title="Document is empty."))

        try:
            payload: Any = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ParseError(
                ErrorObject(type="invalid-syntax", title="Document is not valid JSON or YAML.", detail=str(exc))
            ) from exc

        if not isinstance(payload, Mapping):
            raise ParseError(
                ErrorObject(
                    type="invalid-document",
                    title="Document root must be an object.",
                    detail=f"got {type(payload).__name__}",
                )
            )
        return self._mapping_parser.parse(payload)


class UrlParser(Parser):
    """Downloads a document with httpx, then parses it as text."""

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        text_parser: TextParser | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._text_parser = text_parser or TextParser()
        self._timeout = timeout

    def accepts(self, source: Any) -> bool:
        return isinstance(source, FetchingSchema)

    def parse(self, source: Any) -> DocumentSnapshot:
        options = dict(source.request_options)
        try:
            if self._client is not None:
                response = self._client.get(source.url, **options)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(source.url, **options)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ParseError(
                ErrorObject(type="fetch-error", title=f"Could not fetch {source.url}", detail=str(exc))
            ) from exc
        return self._text_parser.parse(response.text)


class DocumentParser:
    """Dispatches an input to the first parser that accepts it."""

    def __init__(self, parsers: list[Parser] | None = None) -> None:
        self._parsers: list[Parser] = []
        if parsers is None:
            text_parser = TextParser()
            parsers = [SnapshotParser(), MappingParser(), text_parser, UrlParser(text_parser=text_parser)]
        for parser in parsers:
            self.register(parser)

    def register(self, parser: Parser) -> None:
        self._parsers.append(parser)

    def parse(self, source: Any) -> DocumentSnapshot:
        if source is None:
            raise ParseError(ErrorObject(type="missing-document", title="No document was provided."))
        for parser in self._parsers:
            if parser.accepts(source):
                return parser.parse(source)
        raise ParseError(
            ErrorObject(
                type="unsupported-input",
                title="No parser registered for input.",
                detail=type(source).__name__,
            )
        )

    def retrieve_parsed_spec(self, source: Any) -> DocumentSnapshot | None:
        """Parse an input, returning `None` instead of raising."""
        try:
            return self.parse(source)
        except ParseError as exc:
            logger.info("Document could not be parsed", error_type=exc.error.type, error=str(exc))
            return None


def validate_document(document: Mapping[str, Any]) -> list[ValidationError]:
    """Check the minimal structure every navigable document needs."""

    errors: list[ValidationError] = []
    version = document.get("asyncapi")
    if not isinstance(version, str) or not version:
        errors.append(ValidationError(title="Missing or invalid 'asyncapi' version marker.", json_pointer="/asyncapi"))
    if not isinstance(document.get("info"), Mapping):
        errors.append(ValidationError(title="Missing 'info' object.", json_pointer="/info"))
    for key in ("servers", "channels", "operations", "components"):
        if key in document and not isinstance(document[key], Mapping):
            errors.append(ValidationError(title=f"'{key}' must be an object.", json_pointer=f"/{key}"))
    return errors
