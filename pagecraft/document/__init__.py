"""Content document value types, path helpers and read-only queries."""

from .models import DOCUMENT_VERSION, ContentDocument, DocumentStructureError, SectionEntry
from .paths import PathError, get_in, parse_path, update_in
from .queries import (
    SectionStats,
    base_type,
    display_name,
    is_required,
    missing_sections,
    section_stats,
    section_status,
    sorted_keys,
    sorted_sections,
    visible_sections,
)

__all__ = [
    "DOCUMENT_VERSION",
    "ContentDocument",
    "DocumentStructureError",
    "PathError",
    "SectionEntry",
    "SectionStats",
    "base_type",
    "display_name",
    "get_in",
    "is_required",
    "missing_sections",
    "parse_path",
    "section_stats",
    "section_status",
    "sorted_keys",
    "sorted_sections",
    "update_in",
    "visible_sections",
]
