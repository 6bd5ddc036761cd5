"""Immutable value types for a page's content document."""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import typing as typ

DOCUMENT_VERSION = "1.0"


class DocumentStructureError(TypeError):
    """Raised when a document payload is structurally malformed.

    This signals a caller bug (for example ``sections`` not being a mapping)
    rather than a user-driven edge case, so it is never swallowed.
    """


@dc.dataclass(slots=True, frozen=True)
class SectionEntry:
    """One section instance on a page.

    Attributes
    ----------
    type : str
        Section type identifier; fixed when the section is created.
    visible : bool
        Hidden sections stay in the document but are not rendered.
    order : int
        1-based position on the page; ``0`` marks an entry whose position has
        not been assigned yet.
    settings : dict[str, Any]
        Presentation options such as background or padding.
    data : dict[str, Any]
        Free-form payload whose shape depends on ``type``.
    """

    type: str
    visible: bool = True
    order: int = 0
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)
    data: dict[str, typ.Any] = dc.field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: object, *, key: str) -> SectionEntry:
        if not isinstance(payload, cabc.Mapping):
            msg = f"Section '{key}' must be a mapping, got {type(payload).__name__}."
            raise DocumentStructureError(msg)
        section_type = payload.get("type")
        if not isinstance(section_type, str) or not section_type:
            msg = f"Section '{key}' is missing its 'type'."
            raise DocumentStructureError(msg)
        visible = payload.get("visible", True)
        if not isinstance(visible, bool):
            msg = f"Section '{key}' has a non-boolean 'visible': {visible!r}."
            raise DocumentStructureError(msg)
        order = payload.get("order")
        if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
            msg = f"Section '{key}' has a non-integer 'order': {order!r}."
            raise DocumentStructureError(msg)
        settings = payload.get("settings") or {}
        data = payload.get("data") or {}
        if not isinstance(settings, cabc.Mapping) or not isinstance(data, cabc.Mapping):
            msg = f"Section '{key}' has non-mapping 'settings' or 'data'."
            raise DocumentStructureError(msg)
        return cls(
            type=section_type,
            visible=visible,
            order=order if order is not None else 0,
            settings=copy.deepcopy(dict(settings)),
            data=copy.deepcopy(dict(data)),
        )

    def to_mapping(self) -> dict[str, typ.Any]:
        return {
            "type": self.type,
            "visible": self.visible,
            "order": self.order,
            "settings": copy.deepcopy(self.settings),
            "data": copy.deepcopy(self.data),
        }


@dc.dataclass(slots=True, frozen=True)
class ContentDocument:
    """The content of one page: sections keyed by a unique string.

    Instances are never modified; every editing operation returns a new
    document that shares untouched sections with the previous one.
    """

    sections: dict[str, SectionEntry] = dc.field(default_factory=dict)
    layout: str = "other"
    version: str = DOCUMENT_VERSION
    settings: dict[str, typ.Any] = dc.field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        return key in self.sections

    def __len__(self) -> int:
        return len(self.sections)

    def get(self, key: str) -> SectionEntry | None:
        return self.sections.get(key)

    def keys(self) -> list[str]:
        return list(self.sections)

    def with_sections(self, sections: dict[str, SectionEntry]) -> ContentDocument:
        return dc.replace(self, sections=sections)

    def with_entry(self, key: str, entry: SectionEntry) -> ContentDocument:
        """Return a copy with ``key`` replaced (or appended) by ``entry``."""
        sections = dict(self.sections)
        sections[key] = entry
        return self.with_sections(sections)

    @classmethod
    def from_mapping(cls, payload: object) -> ContentDocument:
        """Build a document from its JSON-compatible representation.

        Raises
        ------
        DocumentStructureError
            If ``payload`` or its ``sections`` is not a mapping, or a section
            key is empty.
        """
        if not isinstance(payload, cabc.Mapping):
            msg = "Content document must be a mapping."
            raise DocumentStructureError(msg)
        raw_sections = payload.get("sections") or {}
        if not isinstance(raw_sections, cabc.Mapping):
            msg = "Content document 'sections' must be a mapping."
            raise DocumentStructureError(msg)
        sections: dict[str, SectionEntry] = {}
        for key, entry in raw_sections.items():
            if not isinstance(key, str) or not key.strip():
                msg = f"Section keys must be non-empty strings, got {key!r}."
                raise DocumentStructureError(msg)
            sections[key] = SectionEntry.from_mapping(entry, key=key)
        settings = payload.get("settings") or {}
        if not isinstance(settings, cabc.Mapping):
            msg = "Content document 'settings' must be a mapping."
            raise DocumentStructureError(msg)
        return cls(
            sections=sections,
            layout=str(payload.get("layout") or "other"),
            version=str(payload.get("version") or DOCUMENT_VERSION),
            settings=copy.deepcopy(dict(settings)),
        )

    def to_mapping(self) -> dict[str, typ.Any]:
        return {
            "version": self.version,
            "layout": self.layout,
            "sections": {key: entry.to_mapping() for key, entry in self.sections.items()},
            "settings": copy.deepcopy(self.settings),
        }


__all__ = [
    "DOCUMENT_VERSION",
    "ContentDocument",
    "DocumentStructureError",
    "SectionEntry",
]
