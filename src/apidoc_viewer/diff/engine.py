"""Diff engine interface and a structural default implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from apidoc_viewer.document.pointer import join_pointer
from apidoc_viewer.types import ChangeKind, ChangeRecord

# Changes under these pointers always break consumers, whatever the action.
_BREAKING_POINTERS = ("/asyncapi",)


@dataclass(slots=True)
class DiffOutput:
    """Raw diff engine output, grouped by the engine's own classification.

    Entries are kept untyped because engines may hand back arbitrary objects;
    they only become `ChangeRecord`s when pooled.
    """

    breaking: list[Any] = field(default_factory=list)
    non_breaking: list[Any] = field(default_factory=list)
    unclassified: list[Any] = field(default_factory=list)

    def pool(self) -> list[ChangeRecord]:
        """Merge all groups: breaking, then non-breaking, then unclassified."""
        pooled: list[ChangeRecord] = []
        for kind, entries in (
            (ChangeKind.BREAKING, self.breaking),
            (ChangeKind.NON_BREAKING, self.non_breaking),
            (ChangeKind.UNCLASSIFIED, self.unclassified),
        ):
            if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
                continue
            pooled.extend(ChangeRecord.from_raw(entry, kind) for entry in entries)
        return pooled

    def __len__(self) -> int:
        return len(self.breaking) + len(self.non_breaking) + len(self.unclassified)


class DiffEngine(ABC):
    """Computes structural differences between two plain documents."""

    @abstractmethod
    def diff(self, old: Mapping[str, Any], new: Mapping[str, Any]) -> DiffOutput:
        """Return the changes that turn `old` into `new`."""


class StructuralDiffEngine(DiffEngine):
    """Recursive mapping/list comparison addressed by JSON pointers.

    Removals are breaking, additions non-breaking and in-place edits
    unclassified; anything touching the version marker is breaking.
    Mapping keys are visited in the new document's order, removed keys last,
    so the output order follows the document a reader is looking at.
    """

    def diff(self, old: Mapping[str, Any], new: Mapping[str, Any]) -> DiffOutput:
        if not isinstance(old, Mapping) or not isinstance(new, Mapping):
            raise TypeError("StructuralDiffEngine compares mappings only")

        output = DiffOutput()
        self._walk(old, new, [], output)
        return output

    def _walk(self, old: Any, new: Any, tokens: list[str], output: DiffOutput) -> None:
        if isinstance(old, Mapping) and isinstance(new, Mapping):
            for key, value in new.items():
                if key not in old:
                    self._emit(output, "add", [*tokens, str(key)], None, value)
                else:
                    self._walk(old[key], value, [*tokens, str(key)], output)
            for key, value in old.items():
                if key not in new:
                    self._emit(output, "remove", [*tokens, str(key)], value, None)
            return

        if isinstance(old, list) and isinstance(new, list):
            common = min(len(old), len(new))
            for index in range(common):
                self._walk(old[index], new[index], [*tokens, str(index)], output)
            for index in range(common, len(new)):
                self._emit(output, "add", [*tokens, str(index)], None, new[index])
            for index in range(common, len(old)):
                self._emit(output, "remove", [*tokens, str(index)], old[index], None)
            return

        if type(old) is not type(new) or old != new:
            self._emit(output, "edit", tokens, old, new)

    @staticmethod
    def _emit(output: DiffOutput, action: str, tokens: list[str], before: Any, after: Any) -> None:
        path = join_pointer(tokens)
        entry = {"action": action, "path": path, "before": before, "after": after}
        if action == "remove" or any(path == p or path.startswith(p + "/") for p in _BREAKING_POINTERS):
            output.breaking.append(entry)
        elif action == "add":
            output.non_breaking.append(entry)
        else:
            output.unclassified.append(entry)
