import pytest

from apidoc_viewer.diff.calculator import ChangeCalculator
from apidoc_viewer.diff.engine import StructuralDiffEngine
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.errors import DiffEngineError, DiffPreconditionError


def _base() -> dict:
    return {"asyncapi": "3.0.0", "info": {"title": "Svc", "version": "1.0.0"}}


def test_added_server_is_reported_at_server_pointer() -> None:
    old = _base()
    new = {**_base(), "servers": {"s1": {"host": "broker", "protocol": "mqtt"}}}

    output = StructuralDiffEngine().diff(old, new)

    assert [entry["path"] for entry in output.non_breaking] == ["/servers"]

    old["servers"] = {}
    output = StructuralDiffEngine().diff(old, new)

    assert output.non_breaking == [
        {"action": "add", "path": "/servers/s1", "before": None, "after": new["servers"]["s1"]}
    ]
    assert output.breaking == []


def test_removals_are_breaking_and_edits_unclassified() -> None:
    old = {**_base(), "servers": {"a": {"host": "x"}, "b": {"host": "y"}}}
    new = {**_base(), "servers": {"a": {"host": "z"}}}
    new["info"] = {"title": "Svc", "version": "1.1.0"}

    output = StructuralDiffEngine().diff(old, new)

    assert [entry["path"] for entry in output.breaking] == ["/servers/b"]
    assert [entry["path"] for entry in output.unclassified] == ["/info/version", "/servers/a/host"]


def test_version_marker_change_is_breaking() -> None:
    new = {**_base(), "asyncapi": "3.1.0"}

    output = StructuralDiffEngine().diff(_base(), new)

    assert [entry["path"] for entry in output.breaking] == ["/asyncapi"]


def test_list_items_are_compared_by_index() -> None:
    old = {**_base(), "tags": [{"name": "a"}]}
    new = {**_base(), "tags": [{"name": "b"}, {"name": "c"}]}

    output = StructuralDiffEngine().diff(old, new)

    assert [entry["path"] for entry in output.unclassified] == ["/tags/0/name"]
    assert [entry["path"] for entry in output.non_breaking] == ["/tags/1"]


def test_keys_with_slashes_are_escaped() -> None:
    old = {**_base(), "channels": {}}
    new = {**_base(), "channels": {"user/signedup": {}}}

    output = StructuralDiffEngine().diff(old, new)

    assert output.non_breaking[0]["path"] == "/channels/user~1signedup"


def test_engine_failure_is_wrapped() -> None:
    class _Exploding(StructuralDiffEngine):
        def diff(self, old, new):
            raise RuntimeError("boom")

    calculator = ChangeCalculator(engine=_Exploding())
    doc = DocumentSnapshot(_base())

    with pytest.raises(DiffEngineError, match="boom"):
        calculator.calculate(doc, DocumentSnapshot(_base()))


def test_missing_version_marker_fails_precondition() -> None:
    calculator = ChangeCalculator()
    old = DocumentSnapshot({"info": {"title": "Svc", "version": "1.0.0"}})

    with pytest.raises(DiffPreconditionError, match="version marker"):
        calculator.calculate(old, DocumentSnapshot(_base()))
