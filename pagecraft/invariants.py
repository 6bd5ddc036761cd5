"""Consistency checks for a content document."""

from __future__ import annotations

import typing as typ

from .document.queries import is_required

if typ.TYPE_CHECKING:
    from .document import ContentDocument
    from .registry import SectionRegistry


class InvariantViolation(ValueError):
    """Raised when a document breaks one of its structural rules."""


def assert_section_order(doc: ContentDocument) -> None:
    orders = [entry.order for entry in doc.sections.values()]
    if not orders:
        return

    expected = list(range(1, len(orders) + 1))
    if sorted(orders) != expected:
        msg = f"Section orders are not consecutive starting from 1: {orders}"
        raise InvariantViolation(msg)


def assert_required_sections(doc: ContentDocument, registry: SectionRegistry) -> None:
    layout = registry.find_layout(doc.layout)
    if layout is None:
        msg = f"Unknown layout '{doc.layout}'."
        raise InvariantViolation(msg)
    for key, entry in doc.sections.items():
        if not entry.visible and is_required(layout, key, registry.multi_instance_types):
            msg = f"Required section '{key}' is hidden."
            raise InvariantViolation(msg)


def assert_section_types(doc: ContentDocument, registry: SectionRegistry) -> None:
    unknown = sorted(
        {entry.type for entry in doc.sections.values() if registry.section_type(entry.type) is None}
    )
    if unknown:
        msg = f"Unknown section types: {', '.join(unknown)}"
        raise InvariantViolation(msg)


def validate_document(doc: ContentDocument, registry: SectionRegistry | None = None) -> None:
    """Raise :class:`InvariantViolation` when ``doc`` is inconsistent.

    Keys must be non-empty and orders consecutive from 1. With a registry,
    every section type must be known and required sections must be visible.
    """
    for key in doc.sections:
        if not key.strip():
            msg = "Section keys must be non-empty."
            raise InvariantViolation(msg)

    assert_section_order(doc)

    if registry is not None:
        assert_section_types(doc, registry)
        assert_required_sections(doc, registry)


__all__ = [
    "InvariantViolation",
    "assert_required_sections",
    "assert_section_order",
    "assert_section_types",
    "validate_document",
]
