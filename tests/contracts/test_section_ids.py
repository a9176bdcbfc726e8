import pytest

from apidoc_viewer.types import ChangedSection, SectionType, section_id_for


@pytest.mark.parametrize(
    ("section_type", "subsection_id", "expected"),
    [
        (SectionType.INFO, None, "introduction"),
        (SectionType.SERVERS, "production", "server-production"),
        (SectionType.OPERATIONS, "sendUserSignedup", "operation-sendUserSignedup"),
        (SectionType.MESSAGES, "UserSignedUp", "message-UserSignedUp"),
        (SectionType.SCHEMAS, "User", "schema-User"),
    ],
)
def test_section_ids_are_stable(section_type, subsection_id, expected) -> None:
    assert section_id_for(section_type, subsection_id) == expected
    assert ChangedSection.build(section_type, subsection_id).section_id == expected


def test_non_info_sections_require_subsection_id() -> None:
    with pytest.raises(ValueError):
        section_id_for(SectionType.SERVERS)
