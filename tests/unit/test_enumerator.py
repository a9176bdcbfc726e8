from apidoc_viewer.diff.calculator import ChangeCalculator
from apidoc_viewer.diff.enumerator import enumerate_all
from apidoc_viewer.document.model import DocumentSnapshot
from apidoc_viewer.types import SectionType


def test_enumerates_sections_in_document_order(account_service) -> None:
    account_service["servers"]["staging"] = {"host": "staging.example.com", "protocol": "amqp"}
    document = DocumentSnapshot(account_service)

    sections = enumerate_all(document)

    assert [s.section_id for s in sections] == [
        "introduction",
        "server-production",
        "server-staging",
        "operation-sendUserSignedup",
        "operation-receiveUserSignedup",
        "message-UserSignedUp",
        "schema-User",
    ]
    assert [s.section_type for s in sections][:2] == [SectionType.INFO, SectionType.SERVERS]
    assert sections[1].json_pointer == "/servers/production"


def test_document_without_components_lists_only_top_level_sections() -> None:
    document = DocumentSnapshot(
        {
            "asyncapi": "3.0.0",
            "info": {"title": "Tiny", "version": "1.0.0"},
            "servers": {"local": {"host": "localhost"}},
        }
    )

    assert [s.section_id for s in enumerate_all(document)] == ["introduction", "server-local"]


def test_calculator_reports_everything_when_nothing_came_before(account_service) -> None:
    document = DocumentSnapshot(account_service)
    calculator = ChangeCalculator()

    assert calculator.calculate(None, document) == enumerate_all(document)
    assert calculator.calculate(document, None) == []
    assert calculator.calculate(None, None) == []
