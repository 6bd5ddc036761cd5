"""Unit tests for document consistency checks."""

from __future__ import annotations

import typing as typ

import pytest

from pagecraft.document import ContentDocument, SectionEntry
from pagecraft.invariants import InvariantViolation, validate_document

if typ.TYPE_CHECKING:
    from pagecraft.registry import SectionRegistry

    from .conftest import DocumentFactory


def test_valid_document_passes(make_document: DocumentFactory, registry: SectionRegistry) -> None:
    validate_document(make_document(["hero", "richText", "richText_1", "cta"]), registry)


@pytest.mark.parametrize(
    ("sections", "message"),
    [
        (
            {"hero": SectionEntry(type="hero", order=1), "cta": SectionEntry(type="cta", order=3)},
            "not consecutive",
        ),
        (
            {"hero": SectionEntry(type="hero", order=1), "cta": SectionEntry(type="cta", order=1)},
            "not consecutive",
        ),
        ({"hero": SectionEntry(type="carousel", order=1)}, "Unknown section types: carousel"),
        ({"hero": SectionEntry(type="hero", order=1, visible=False)}, "is hidden"),
        ({" ": SectionEntry(type="hero", order=1)}, "non-empty"),
    ],
)
def test_violations_are_reported(
    sections: dict[str, SectionEntry], message: str, registry: SectionRegistry
) -> None:
    doc = ContentDocument(sections=sections, layout="landing")
    with pytest.raises(InvariantViolation, match=message):
        validate_document(doc, registry)


def test_registry_checks_are_optional() -> None:
    doc = ContentDocument({"x": SectionEntry(type="carousel", order=1)}, layout="landing")
    validate_document(doc)
