"""Persisted editor preferences (currently the edit/navigate mode).

The mode is read once when a session starts and written whenever it changes.
:class:`TomlPreferenceStore` keeps it in ``~/.config/pagecraft/preferences.toml``
and preserves any other tables a user has added to that file.
"""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

import tomlkit

EditorMode = typ.Literal["edit", "navigate"]
EDITOR_MODES: tuple[EditorMode, ...] = ("edit", "navigate")
DEFAULT_EDITOR_MODE: EditorMode = "edit"

DEFAULT_PREFERENCES_PATH = Path(
    os.getenv(
        "PAGECRAFT_PREFERENCES_FILE",
        Path.home() / ".config" / "pagecraft" / "preferences.toml",
    )
)


class PreferenceStore(typ.Protocol):
    def get_editor_mode(self) -> EditorMode: ...

    def set_editor_mode(self, mode: EditorMode) -> None: ...


class MemoryPreferenceStore:
    """Preference store that lives only as long as the process."""

    def __init__(self, mode: EditorMode = DEFAULT_EDITOR_MODE) -> None:
        self._mode: EditorMode = mode

    def get_editor_mode(self) -> EditorMode:
        return self._mode

    def set_editor_mode(self, mode: EditorMode) -> None:
        self._mode = _validate_mode(mode)


class TomlPreferenceStore:
    """Preference store backed by a TOML file under ``[editor]``."""

    def __init__(self, path: Path = DEFAULT_PREFERENCES_PATH) -> None:
        self.path = path

    def get_editor_mode(self) -> EditorMode:
        doc = self._read()
        table = doc.get("editor")
        mode = table.get("mode") if isinstance(table, tomlkit.items.Table) else None
        if mode in EDITOR_MODES:
            return typ.cast("EditorMode", str(mode))
        return DEFAULT_EDITOR_MODE

    def set_editor_mode(self, mode: EditorMode) -> None:
        mode = _validate_mode(mode)
        doc = self._read()
        table = doc.get("editor")
        if not isinstance(table, tomlkit.items.Table):
            table = tomlkit.table()
        table["mode"] = mode
        doc["editor"] = table
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(tomlkit.dumps(doc), encoding="utf-8")

    def _read(self) -> tomlkit.TOMLDocument:
        try:
            return tomlkit.parse(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return tomlkit.document()
        except tomlkit.exceptions.ParseError as exc:
            msg = f"Unable to parse preferences TOML at {self.path}"
            raise ValueError(msg) from exc


def _validate_mode(mode: str) -> EditorMode:
    if mode not in EDITOR_MODES:
        msg = f"Unknown editor mode {mode!r}; expected one of {', '.join(EDITOR_MODES)}."
        raise ValueError(msg)
    return typ.cast("EditorMode", mode)


__all__ = [
    "DEFAULT_EDITOR_MODE",
    "DEFAULT_PREFERENCES_PATH",
    "EDITOR_MODES",
    "EditorMode",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "TomlPreferenceStore",
]
