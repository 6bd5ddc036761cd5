"""Utility helpers shared by the editor configuration loader."""

from __future__ import annotations

import copy
import typing as typ
from pathlib import Path

from .models import EditorConfigError, LayoutConfig, SectionTypeConfig


def _normalize_names(value: str | list[object] | None) -> list[str]:
    """Normalize a section type list into non-empty, de-duplicated strings."""
    if isinstance(value, str):
        value = list(value.split(","))
    if not isinstance(value, list):
        return []
    normalized: list[str] = []
    for segment in value:
        text = str(segment).strip()
        if text and text not in normalized:
            normalized.append(text)
    return normalized


def _optional_float(value: object | None, *, field: str) -> float | None:
    """Return ``value`` as a positive float, or None when unset."""
    if value is None or value == "":
        return None
    try:
        parsed = float(typ.cast("float", value))
    except (TypeError, ValueError) as exc:
        msg = f"'{field}' must be a number, got {value!r}."
        raise EditorConfigError(msg) from exc
    if parsed <= 0:
        msg = f"'{field}' must be positive, got {parsed}."
        raise EditorConfigError(msg)
    return parsed


def _optional_path(value: object | None) -> Path | None:
    """Return an expanded Path or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return Path(text).expanduser() if text else None


def _build_section_type(
    name: str,
    payload: typ.Mapping[str, typ.Any],
    *,
    multi_instance_types: typ.Collection[str],
) -> SectionTypeConfig:
    """Build a SectionTypeConfig from a mapping payload."""
    default_data = payload.get("default_data") or {}
    if not isinstance(default_data, dict):
        msg = f"Section type '{name}' has a non-mapping 'default_data'."
        raise EditorConfigError(msg)
    return SectionTypeConfig(
        name=name,
        label=str(payload.get("label") or name),
        icon=str(payload.get("icon") or "📄"),
        multi_instance=bool(payload.get("multi_instance", name in multi_instance_types)),
        default_data=copy.deepcopy(default_data),
    )


def _merge_section_type(
    base: SectionTypeConfig, override: typ.Mapping[str, typ.Any] | None
) -> SectionTypeConfig:
    """Merge an override mapping into the base SectionTypeConfig."""
    if not override:
        return base
    default_data = dict(base.default_data)
    default_data.update(override.get("default_data") or {})
    return SectionTypeConfig(
        name=base.name,
        label=str(override.get("label", base.label)),
        icon=str(override.get("icon", base.icon)),
        multi_instance=bool(override.get("multi_instance", base.multi_instance)),
        default_data=copy.deepcopy(default_data),
    )


def _build_layout(name: str, payload: typ.Mapping[str, typ.Any]) -> LayoutConfig:
    """Build a LayoutConfig, rejecting types listed as both required and optional."""
    required = _normalize_names(payload.get("required"))
    optional = _normalize_names(payload.get("optional"))
    overlap = sorted(set(required) & set(optional))
    if overlap:
        msg = f"Layout '{name}' lists {', '.join(overlap)} as both required and optional."
        raise EditorConfigError(msg)
    default_sections: dict[str, dict[str, typ.Any]] = {}
    for slot, seed in (payload.get("default_sections") or {}).items():
        if not isinstance(seed, dict):
            continue
        default_sections[str(slot)] = copy.deepcopy(seed)
    return LayoutConfig(
        name=name,
        required=required,
        optional=optional,
        default_sections=default_sections,
    )


def _merge_layout(
    base: LayoutConfig | None, name: str, override: typ.Mapping[str, typ.Any]
) -> LayoutConfig:
    """Merge a layout override; list fields replace, default sections merge."""
    if base is None:
        return _build_layout(name, override)
    default_sections = dict(base.default_sections)
    default_sections.update(override.get("default_sections") or {})
    return _build_layout(
        name,
        {
            "required": override.get("required", base.required),
            "optional": override.get("optional", base.optional),
            "default_sections": default_sections,
        },
    )


__all__ = [
    "_build_layout",
    "_build_section_type",
    "_merge_layout",
    "_merge_section_type",
    "_normalize_names",
    "_optional_float",
    "_optional_path",
]
