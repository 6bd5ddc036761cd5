"""Typed dataclasses describing the section registry and editor configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


class EditorConfigError(ValueError):
    """Raised when the editor configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SectionTypeConfig:
    """Lifecycle metadata for one section type.

    Attributes
    ----------
    name : str
        Section type identifier (``"hero"``, ``"richText"``...).
    label : str
        Human-readable name shown in section pickers.
    icon : str
        Icon shown next to the section in the editor list.
    multi_instance : bool
        Whether a page may hold more than one section of this type.
    default_data : dict[str, Any]
        Data payload seeded into freshly added sections.
    """

    name: str
    label: str
    icon: str = "📄"
    multi_instance: bool = False
    default_data: dict[str, typ.Any] = dc.field(default_factory=dict)


@dc.dataclass(slots=True)
class LayoutConfig:
    """Required and optional section types for one page layout."""

    name: str
    required: list[str] = dc.field(default_factory=list)
    optional: list[str] = dc.field(default_factory=list)
    default_sections: dict[str, dict[str, typ.Any]] = dc.field(default_factory=dict)

    @property
    def available(self) -> list[str]:
        """Return required types followed by optional types."""
        return [*self.required, *self.optional]


@dc.dataclass(slots=True)
class EditorConfig:
    """Aggregate configuration loaded from ``pagecraft.yaml``."""

    section_types: dict[str, SectionTypeConfig]
    layouts: dict[str, LayoutConfig]
    seeds: dict[str, list[dict[str, typ.Any]]]
    default_layout: str = "other"
    save_timeout: float | None = None
    preferences_path: Path | None = None

    def get_layout(self, name: str | None) -> LayoutConfig:
        """Return the requested layout or fall back to the default layout."""
        key = name or self.default_layout
        try:
            return self.layouts[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.layouts))
            msg = f"Unknown layout '{key}'. Known layouts: {available}"
            raise EditorConfigError(msg) from exc


__all__ = [
    "EditorConfig",
    "EditorConfigError",
    "LayoutConfig",
    "SectionTypeConfig",
]
