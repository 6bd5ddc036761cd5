"""Read-only lookups over section types, layouts and seed collections.

:class:`SectionRegistry` wraps an :class:`~pagecraft.config.EditorConfig` and
answers the questions the editor asks while mutating a page: which type a
layout slot creates, whether a type may appear more than once, and which
default items should be copied into a collection on first edit.

Examples
--------
>>> from pagecraft.registry import SectionRegistry
>>> registry = SectionRegistry.builtin()
>>> registry.is_multi_instance("richText")
True
>>> registry.resolve_slot("blog", "header")[0]
'hero'
"""

from __future__ import annotations

import copy
import typing as typ

from .config import EditorConfig, LayoutConfig, SectionTypeConfig, load_editor_config

if typ.TYPE_CHECKING:
    from pathlib import Path


class SectionRegistry:
    """Static mapping from section types and layouts to lifecycle metadata."""

    def __init__(self, config: EditorConfig) -> None:
        self._config = config
        self._multi_instance = frozenset(
            name for name, info in config.section_types.items() if info.multi_instance
        )

    @classmethod
    def builtin(cls) -> SectionRegistry:
        """Return a registry backed by the built-in table only."""
        return cls(load_editor_config())

    @classmethod
    def from_path(cls, path: Path | None) -> SectionRegistry:
        """Return a registry built from ``path`` merged over the built-in table."""
        return cls(load_editor_config(path))

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def multi_instance_types(self) -> frozenset[str]:
        return self._multi_instance

    def section_type(self, name: str) -> SectionTypeConfig | None:
        return self._config.section_types.get(name)

    def layout(self, name: str | None) -> LayoutConfig:
        return self._config.get_layout(name)

    def find_layout(self, name: str | None) -> LayoutConfig | None:
        """Return the layout called ``name``, or ``None`` when it is unknown."""
        return self._config.layouts.get(name or self._config.default_layout)

    def is_multi_instance(self, name: str) -> bool:
        return name in self._multi_instance

    def default_items(self, collection: str) -> list[dict[str, typ.Any]] | None:
        """Return a fresh copy of the seed items for ``collection``, if any."""
        items = self._config.seeds.get(collection)
        return copy.deepcopy(items) if items is not None else None

    def resolve_slot(
        self, layout: str | None, slot: str
    ) -> tuple[str, dict[str, typ.Any]] | None:
        """Return the section type and seed entry created for a layout slot.

        Layout slots are usually named after their type (``"faq"``) but may
        alias another one (the blog layout's ``"header"`` slot is a hero).
        Returns ``None`` when the slot names neither a seeded section nor a
        known type.
        """
        layout_config = self.find_layout(layout)
        defaults = layout_config.default_sections if layout_config else {}
        seed = defaults.get(slot)
        if seed is not None:
            section_type = str(seed.get("type") or slot)
        elif slot in self._config.section_types:
            section_type = slot
            seed = {}
        else:
            return None
        info = self.section_type(section_type)
        data = copy.deepcopy(seed.get("data"))
        if data is None:
            data = copy.deepcopy(info.default_data) if info else {}
        return section_type, {
            "settings": copy.deepcopy(seed.get("settings") or {}),
            "data": data,
        }


__all__ = ["SectionRegistry"]
