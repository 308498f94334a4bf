import pytest

from portfolio_cms.core.exceptions import OperationNotSupported
from portfolio_cms.schemas.section import SectionType
from portfolio_cms.services.section_store import DEFAULT_SECTIONS, section_id


def test_upsert_keeps_one_record_per_type(section_store):
    first = section_store.update_section("hero", {"title": "Hello"})
    second = section_store.update_section("hero", {"title": "Hello again"})

    sections = section_store.get_all_sections()
    assert list(sections) == ["hero"]
    assert sections["hero"].id == section_id("hero") == "section_hero"
    assert sections["hero"].content == {"title": "Hello again"}
    assert second.updated_at >= first.updated_at


def test_content_is_replaced_not_merged(section_store):
    section_store.update_section("about", {"title": "About", "skills": ["Python"]})
    section_store.update_section("about", {"title": "About us"})

    assert section_store.get_section("about").content == {"title": "About us"}


def test_get_missing_section(section_store):
    assert section_store.get_section("footer") is None
    assert section_store.get_all_sections() == {}


def test_defaults_cover_every_type(section_store):
    section_store.initialize_default_sections()
    sections = section_store.get_all_sections()

    assert list(sections) == [t.value for t in SectionType]
    for key, section in sections.items():
        assert section.type == key
        assert section.content == DEFAULT_SECTIONS[key]


def test_defaults_do_not_overwrite_edits(section_store):
    section_store.update_section("hero", {"title": "Custom hero"})
    section_store.initialize_default_sections()
    section_store.initialize_default_sections()

    sections = section_store.get_all_sections()
    assert sections["hero"].content == {"title": "Custom hero"}
    assert sections["footer"].content == DEFAULT_SECTIONS["footer"]
    assert len(sections) == len(SectionType)


def test_invalid_type_rejected(section_store):
    with pytest.raises(ValueError):
        section_store.update_section("sidebar", {"title": "Nope"})
    with pytest.raises(ValueError):
        section_store.get_section("sidebar")


def test_non_object_content_rejected(section_store):
    with pytest.raises(ValueError):
        section_store.update_section("hero", ["not", "an", "object"])
    assert section_store.get_section("hero") is None


def test_sections_cannot_be_created_or_deleted(section_store):
    section_store.update_section("hero", {})

    with pytest.raises(OperationNotSupported) as exc_info:
        section_store.delete("section_hero")
    assert exc_info.value.code == "NOT_SUPPORTED"

    with pytest.raises(OperationNotSupported):
        section_store.create({"type": "hero", "content": {}})
    assert section_store.get_section("hero").content == {}
