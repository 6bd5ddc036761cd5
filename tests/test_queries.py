"""Unit tests for read-only document queries."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest

from pagecraft.document import (
    ContentDocument,
    DocumentStructureError,
    SectionEntry,
    base_type,
    display_name,
    is_required,
    missing_sections,
    section_stats,
    section_status,
    sorted_keys,
    visible_sections,
)

if typ.TYPE_CHECKING:
    from pagecraft.registry import SectionRegistry


def test_sorted_sections_orders_by_order_and_keeps_ties_stable() -> None:
    doc = ContentDocument(
        {
            "cta": SectionEntry(type="cta", order=3),
            "hero": SectionEntry(type="hero", order=1),
            "faq": SectionEntry(type="faq", order=3),
            "draft": SectionEntry(type="text"),
        }
    )
    assert sorted_keys(doc) == ["draft", "hero", "cta", "faq"]
    assert sorted_keys(doc) == sorted_keys(dc.replace(doc))


def test_visible_sections_skips_hidden_entries() -> None:
    doc = ContentDocument(
        {
            "hero": SectionEntry(type="hero", order=1),
            "cta": SectionEntry(type="cta", order=2, visible=False),
        }
    )
    assert [key for key, _ in visible_sections(doc)] == ["hero"]


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("richText", "richText"),
        ("richText_1", "richText"),
        ("richText_copy", "richText_copy"),
        ("plant_hero", "plant_hero"),
        ("hero_2", "hero_2"),
    ],
)
def test_base_type_strips_only_multi_instance_suffixes(key: str, expected: str) -> None:
    assert base_type(key) == expected


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("richText", "Rich Text"),
        ("richText_1", "Rich Text 02"),
        ("richText_9", "Rich Text 10"),
        ("businessInfo", "Business Info"),
        ("faq", "Faq"),
    ],
)
def test_display_name(key: str, expected: str) -> None:
    assert display_name(key) == expected


def test_missing_sections_always_offers_multi_instance_types(
    registry: SectionRegistry,
) -> None:
    layout = registry.layout("landing")
    doc = ContentDocument(
        {
            "hero": SectionEntry(type="hero", order=1),
            "cta": SectionEntry(type="cta", order=2),
            "richText": SectionEntry(type="richText", order=3),
        },
        layout="landing",
    )
    assert missing_sections(doc, layout) == ["featured", "categories", "features", "richText"]


def test_section_status_and_stats(registry: SectionRegistry) -> None:
    layout = registry.layout("landing")
    doc = ContentDocument(
        {
            "hero": SectionEntry(type="hero", order=1),
            "cta": SectionEntry(type="cta", order=2, visible=False),
            "richText_1": SectionEntry(type="richText", order=3),
        },
        layout="landing",
    )
    assert section_status(doc, layout, "hero") == "required"
    assert section_status(doc, layout, "cta") == "hidden"
    assert section_status(doc, layout, "richText_1") == "visible"
    assert section_status(doc, layout, "faq") is None
    assert is_required(layout, "hero")
    assert not is_required(layout, "richText_1")

    stats = section_stats(doc, layout)
    assert (stats.available, stats.added, stats.visible) == (6, 3, 2)


def test_document_round_trips_through_mappings() -> None:
    payload = {
        "version": "1.0",
        "layout": "landing",
        "sections": {
            "hero": {
                "type": "hero",
                "visible": True,
                "order": 1,
                "settings": {"backgroundColor": "gradient"},
                "data": {"headline": "Hi", "items": [{"title": "a"}]},
            }
        },
        "settings": {},
    }
    doc = ContentDocument.from_mapping(payload)
    assert doc.to_mapping() == payload
    payload["sections"]["hero"]["data"]["items"][0]["title"] = "changed"
    assert doc.sections["hero"].data["items"][0]["title"] == "a"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"sections": []},
        {"sections": {"": {"type": "hero"}}},
        {"sections": {"hero": {"visible": True}}},
        {"sections": {"hero": {"type": "hero", "data": ["text"]}}},
    ],
)
def test_malformed_documents_are_rejected(payload: object) -> None:
    with pytest.raises(DocumentStructureError):
        ContentDocument.from_mapping(payload)
