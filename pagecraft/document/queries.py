"""Pure queries over a content document and its layout."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

from ..config.builtin import MULTI_INSTANCE_TYPES

if typ.TYPE_CHECKING:
    from ..config import LayoutConfig
    from .models import ContentDocument, SectionEntry

SectionStatus = typ.Literal["hidden", "required", "visible"]

_INSTANCE_SUFFIX = re.compile(r"^(?P<base>.+)_(?P<number>\d+)$")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


@dc.dataclass(slots=True, frozen=True)
class SectionStats:
    """Counts shown in the section list header."""

    available: int
    added: int
    visible: int


def sorted_sections(doc: ContentDocument) -> list[tuple[str, SectionEntry]]:
    """Return ``(key, entry)`` pairs ordered by ``order``, then insertion order.

    Entries whose order is unassigned sort as ``0``. The sort is stable so
    equal orders keep their relative position in the document.
    """
    return sorted(doc.sections.items(), key=lambda item: item[1].order or 0)


def sorted_keys(doc: ContentDocument) -> list[str]:
    return [key for key, _ in sorted_sections(doc)]


def visible_sections(doc: ContentDocument) -> list[tuple[str, SectionEntry]]:
    return [(key, entry) for key, entry in sorted_sections(doc) if entry.visible]


def base_type(
    key: str, multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES
) -> str:
    """Return the section type implied by ``key``.

    Only multi-instance types carry a numeric suffix (``richText_2``); for
    every other key the key itself is returned.
    """
    match = _INSTANCE_SUFFIX.match(key)
    if match and match.group("base") in multi_instance:
        return match.group("base")
    return key


def instance_number(
    key: str, multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES
) -> int:
    """Return the 1-based display number of a multi-instance key."""
    match = _INSTANCE_SUFFIX.match(key)
    if match and match.group("base") in multi_instance:
        return int(match.group("number")) + 1
    return 1


def is_required(
    layout: LayoutConfig,
    key: str,
    multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES,
) -> bool:
    return base_type(key, multi_instance) in layout.required


def missing_sections(
    doc: ContentDocument,
    layout: LayoutConfig,
    multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES,
) -> list[str]:
    """Return optional layout slots that can still be added.

    Multi-instance types are always offered, however many already exist.
    """
    return [
        slot
        for slot in layout.optional
        if slot in multi_instance or slot not in doc.sections
    ]


def display_name(
    key: str, multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES
) -> str:
    """Format a section key for display.

    Examples
    --------
    >>> display_name("richText")
    'Rich Text'
    >>> display_name("richText_1")
    'Rich Text 02'
    >>> display_name("businessInfo")
    'Business Info'
    """
    base = base_type(key, multi_instance)
    label = _title_words(base)
    if base != key:
        return f"{label} {instance_number(key, multi_instance):02d}"
    return label


def section_status(
    doc: ContentDocument,
    layout: LayoutConfig,
    key: str,
    multi_instance: cabc.Collection[str] = MULTI_INSTANCE_TYPES,
) -> SectionStatus | None:
    entry = doc.get(key)
    if entry is None:
        return None
    if not entry.visible:
        return "hidden"
    if is_required(layout, key, multi_instance):
        return "required"
    return "visible"


def section_stats(doc: ContentDocument, layout: LayoutConfig) -> SectionStats:
    return SectionStats(
        available=len(layout.available),
        added=len(doc.sections),
        visible=sum(1 for entry in doc.sections.values() if entry.visible),
    )


def _title_words(key: str) -> str:
    spaced = _CAMEL_BOUNDARY.sub(r" \1", key).strip()
    return " ".join(word[:1].upper() + word[1:] for word in spaced.split(" ") if word)


__all__ = [
    "SectionStats",
    "SectionStatus",
    "base_type",
    "display_name",
    "instance_number",
    "is_required",
    "missing_sections",
    "section_stats",
    "section_status",
    "sorted_keys",
    "sorted_sections",
    "visible_sections",
]
