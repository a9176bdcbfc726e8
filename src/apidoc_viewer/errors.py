"""Error taxonomy for document loading and diffing."""

from __future__ import annotations

from apidoc_viewer.types import ErrorObject


class ViewerError(Exception):
    """Base class for recoverable viewer failures."""


class ParseError(ViewerError):
    """The parsing collaborator could not produce a document."""

    def __init__(self, error: ErrorObject) -> None:
        super().__init__(error.title if not error.detail else f"{error.title}: {error.detail}")
        self.error = error


class DiffPreconditionError(ViewerError):
    """Snapshots cannot be handed to the diff engine."""


class DiffEngineError(ViewerError):
    """The diff engine raised while comparing two snapshots."""
