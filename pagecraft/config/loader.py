"""Load editor configuration YAML into typed dataclasses."""

from __future__ import annotations

import copy
import logging
import typing as typ

from ruamel.yaml import YAML

from . import builtin
from .helpers import (
    _build_layout,
    _build_section_type,
    _merge_layout,
    _merge_section_type,
    _optional_float,
    _optional_path,
)
from .models import EditorConfig, EditorConfigError, LayoutConfig, SectionTypeConfig

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_editor_config(path: Path | None = None) -> EditorConfig:
    """Load the section registry, layouts and editor defaults.

    The built-in registry is always the starting point; a YAML file, when
    given, adds section types and layouts or overrides individual fields of
    the built-in ones.

    Parameters
    ----------
    path : Path or None, optional
        Filesystem path to a ``pagecraft.yaml`` configuration file. When
        ``None`` the built-in registry is returned unchanged.

    Returns
    -------
    EditorConfig
        Section types, layouts, seed collections and session defaults.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    EditorConfigError
        If a section type, layout or default is malformed, or the default
        layout is not defined.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pagecraft.config import load_editor_config
    >>> config = load_editor_config()
    >>> config.get_layout("landing").required
    ['hero']
    """
    raw: dict[str, typ.Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Configuration file '{path}' not found."
            raise FileNotFoundError(msg)
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict):  # pragma: no cover - config error guard
            msg = "Top-level YAML structure must be a mapping."
            raise TypeError(msg)
        raw = dict(loaded)
        logger.debug("Loaded editor configuration from %s", path)

    defaults = raw.get("defaults", {}) or {}
    section_types = _build_section_types(raw.get("section_types") or {})
    layouts = _build_layouts(raw.get("layouts") or {})
    seeds = _build_seeds(raw.get("seeds") or {})

    config = EditorConfig(
        section_types=section_types,
        layouts=layouts,
        seeds=seeds,
        default_layout=str(defaults.get("layout", "other")),
        save_timeout=_optional_float(defaults.get("save_timeout"), field="save_timeout"),
        preferences_path=_optional_path(defaults.get("preferences_path")),
    )
    if config.default_layout not in config.layouts:
        msg = f"Default layout '{config.default_layout}' is not defined."
        raise EditorConfigError(msg)
    return config


def _build_section_types(
    overrides: typ.Mapping[str, typ.Any],
) -> dict[str, SectionTypeConfig]:
    """Build the built-in section types and apply per-type overrides."""
    result = {
        name: _build_section_type(
            name, payload, multi_instance_types=builtin.MULTI_INSTANCE_TYPES
        )
        for name, payload in builtin.SECTION_TYPES.items()
    }
    for name, payload in overrides.items():
        match payload:
            case dict() if name in result:
                result[name] = _merge_section_type(result[name], payload)
            case dict():
                result[name] = _build_section_type(
                    name, payload, multi_instance_types=builtin.MULTI_INSTANCE_TYPES
                )
            case _:
                msg = f"Section type '{name}' must be a mapping."
                raise EditorConfigError(msg)
    return result


def _build_layouts(overrides: typ.Mapping[str, typ.Any]) -> dict[str, LayoutConfig]:
    """Build the built-in layouts and apply per-layout overrides."""
    result = {
        name: _build_layout(name, payload) for name, payload in builtin.LAYOUTS.items()
    }
    for name, payload in overrides.items():
        if not isinstance(payload, dict):
            msg = f"Layout '{name}' must be a mapping."
            raise EditorConfigError(msg)
        result[name] = _merge_layout(result.get(name), name, payload)
    return result


def _build_seeds(
    overrides: typ.Mapping[str, typ.Any],
) -> dict[str, list[dict[str, typ.Any]]]:
    """Return seed collections; a configured collection replaces the built-in one."""
    seeds = copy.deepcopy(builtin.SEEDS)
    for collection, items in overrides.items():
        if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
            msg = f"Seed collection '{collection}' must be a list of mappings."
            raise EditorConfigError(msg)
        seeds[str(collection)] = copy.deepcopy(items)
    return seeds


__all__ = ["load_editor_config"]
