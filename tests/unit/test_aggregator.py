from apidoc_viewer.diff.aggregator import ChangeAggregator
from apidoc_viewer.diff.engine import DiffOutput
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.types import ChangeKind, ChangeRecord


def _records(*paths: str | None) -> list[ChangeRecord]:
    return [ChangeRecord(path=path) for path in paths]


def test_duplicate_sections_collapse_to_first_occurrence(account_service) -> None:
    document = DocumentSnapshot(account_service)
    records = _records(
        "/components/schemas/User/properties/name",
        "/servers/production/host",
        "/components/schemas/User/type",
        "/info/title",
    )

    sections = ChangeAggregator().aggregate(records, document)

    assert [s.section_id for s in sections] == ["schema-User", "server-production", "introduction"]
    assert sections[0].json_pointer == "/components/schemas/User/properties/name"


def test_consecutive_schema_changes_yield_one_section(account_service) -> None:
    document = DocumentSnapshot(account_service)

    sections = ChangeAggregator().aggregate(
        _records("/components/schemas/User", "/components/schemas/User"), document
    )

    assert len(sections) == 1
    assert sections[0].section_id == "schema-User"


def test_unclassifiable_and_pathless_records_are_skipped(account_service) -> None:
    document = DocumentSnapshot(account_service)
    records = [
        ChangeRecord.from_raw({"action": "edit"}, ChangeKind.BREAKING),
        ChangeRecord.from_raw("not a record", ChangeKind.UNCLASSIFIED),
        *_records("/asyncapi", "/channels/userDeleted", "/servers/production"),
    ]

    sections = ChangeAggregator().aggregate(records, document)

    assert [s.section_id for s in sections] == ["server-production"]


def test_aggregation_is_idempotent(account_service) -> None:
    document = DocumentSnapshot(account_service)
    records = _records("/info", "/channels/userSignedup", "/components/messages/UserSignedUp")
    aggregator = ChangeAggregator()

    assert aggregator.aggregate(records, document) == aggregator.aggregate(records, document)


def test_pool_orders_breaking_before_non_breaking_before_unclassified(account_service) -> None:
    document = DocumentSnapshot(account_service)
    output = DiffOutput(
        breaking=[{"action": "remove", "path": "/components/schemas/User/required"}],
        non_breaking=[{"action": "add", "path": "/servers/production/description"}],
        unclassified=[{"action": "edit", "path": "/info/title"}],
    )

    records = output.pool()
    sections = ChangeAggregator().aggregate(records, document)

    assert [r.kind for r in records] == [
        ChangeKind.BREAKING,
        ChangeKind.NON_BREAKING,
        ChangeKind.UNCLASSIFIED,
    ]
    assert [s.section_id for s in sections] == ["schema-User", "server-production", "introduction"]


def test_pool_accepts_tuple_groups() -> None:
    output = DiffOutput(
        breaking=({"action": "remove", "path": "/servers/production"},),
        unclassified=({"action": "edit", "path": "/info/title"},),
    )

    records = output.pool()

    assert [r.path for r in records] == ["/servers/production", "/info/title"]
    assert [r.kind for r in records] == [ChangeKind.BREAKING, ChangeKind.UNCLASSIFIED]


def test_pool_ignores_string_groups() -> None:
    assert DiffOutput(breaking="/servers/production").pool() == []
