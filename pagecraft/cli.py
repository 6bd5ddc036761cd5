"""Cyclopts CLI entrypoint for editing page content files.

The ``pagecraft`` console script opens a page file in an
:class:`~pagecraft.session.EditorSession`, applies one edit and saves the
result back to the same file. Refused edits (unknown sections, moving past the
last position, hiding a required section) print a warning and leave the file
untouched.

Examples
--------
List the sections of a page in display order:

>>> from pagecraft.cli import app
>>> app(["sections", "pages/home.yaml"])  # doctest: +SKIP

Add a second rich-text block and move it to the top:

>>> app(["add", "pages/home.yaml", "richText"])  # doctest: +SKIP
>>> app(["drag", "pages/home.yaml", "richText_1", "hero"])  # doctest: +SKIP
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import EditorConfigError
from .document import (
    DocumentStructureError,
    display_name,
    missing_sections,
    section_stats,
    section_status,
    sorted_sections,
)
from .drag import DragEvent
from .invariants import InvariantViolation, validate_document
from .mutations import Direction
from .notices import ConsoleNotifier
from .preferences import DEFAULT_PREFERENCES_PATH, EditorMode, TomlPreferenceStore
from .registry import SectionRegistry
from .session import EditorSession
from .storage import FilePersister, PageFileError, load_page

logger = logging.getLogger(__name__)

app = App(name="pagecraft", config=cyclopts.config.Env("PAGECRAFT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path | None,
    Parameter(help="YAML file overriding section types and layouts", env_var="PAGECRAFT_CONFIG"),
]


class CommandError(RuntimeError):
    """Raised when a command cannot complete (for example a failed save)."""


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _open_session(document: Path, config: Path | None) -> EditorSession:
    content, metadata = load_page(document)
    registry = SectionRegistry.from_path(config)
    preferences_path = registry.config.preferences_path or DEFAULT_PREFERENCES_PATH
    return EditorSession(
        content,
        persist=FilePersister(document),
        registry=registry,
        metadata=metadata,
        notifier=ConsoleNotifier(),
        preferences=TomlPreferenceStore(preferences_path),
        save_timeout=registry.config.save_timeout,
    )


def _edit(
    document: Path, config: Path | None, edit: cabc.Callable[[EditorSession], bool]
) -> bool:
    """Apply ``edit`` to the page at ``document`` and save it when it changed."""
    session = _open_session(document, config)
    try:
        if not edit(session):
            return False
        result = asyncio.run(session.save())
        if not result.ok:
            msg = f"Failed to save {_format_path(document)}: {result.reason}"
            raise CommandError(msg)
        print(f"wrote {_format_path(document)}")
        return True
    finally:
        session.close()


def _parse_value(raw: str) -> typ.Any:
    """Interpret ``raw`` as JSON, falling back to the literal string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command(help="List the sections of a page in display order.")
def sections(
    document: typ.Annotated[Path, Parameter(help="Page file to read")],
    *,
    config: ConfigOption = None,
) -> None:
    content, _ = load_page(document)
    registry = SectionRegistry.from_path(config)
    layout = registry.layout(content.layout)
    multi = registry.multi_instance_types
    for key, entry in sorted_sections(content):
        status = section_status(content, layout, key, multi)
        icon = getattr(registry.section_type(entry.type), "icon", "")
        print(f"{entry.order:>3}  {icon} {display_name(key, multi)} [{key}] ({status})")
    stats = section_stats(content, layout)
    print(f"{stats.added} added, {stats.visible} visible, {stats.available} available")


@app.command(help="List optional sections that can still be added to a page.")
def missing(
    document: typ.Annotated[Path, Parameter(help="Page file to read")],
    *,
    config: ConfigOption = None,
) -> None:
    content, _ = load_page(document)
    registry = SectionRegistry.from_path(config)
    layout = registry.layout(content.layout)
    for slot in missing_sections(content, layout, registry.multi_instance_types):
        print(slot)


@app.command(help="Add an optional section to a page.")
def add(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    section: typ.Annotated[str, Parameter(help="Layout slot or section type to add")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.add_section(section))


@app.command(help="Remove a section from a page (required sections are kept).")
def remove(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.delete_section(key))


@app.command(help="Hide a section without removing it.")
def hide(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.hide_section(key))


@app.command(help="Show a hidden section.")
def show(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.show_section(key))


@app.command(help="Duplicate a section directly below itself.")
def duplicate(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.duplicate_section(key))


@app.command(help="Move a section one position up or down.")
def move(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    direction: typ.Annotated[Direction, Parameter(help="up or down")],
    *,
    config: ConfigOption = None,
) -> None:
    _edit(document, config, lambda session: session.move_section(key, direction))


@app.command(help="Drop one section onto another's position.")
def drag(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    source: typ.Annotated[str, Parameter(help="Key of the dragged section")],
    destination: typ.Annotated[str, Parameter(help="Key of the section dropped onto")],
    *,
    stepwise: typ.Annotated[
        bool, Parameter(help="Apply the drop as single-step moves")
    ] = False,
    config: ConfigOption = None,
) -> None:
    def _drop(session: EditorSession) -> bool:
        controller = session.drag_controller(bulk=not stepwise)
        if not controller.start(source):
            print(f"[warning] Section {source!r} not found", file=sys.stderr)
            return False
        controller.drop(DragEvent(source, destination))
        return session.is_dirty

    _edit(document, config, _drop)


@app.command(name="set", help="Set one field of a section's data (value parsed as JSON).")
def set_field(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    path: typ.Annotated[str, Parameter(help="Dotted path such as cta.label or items.0.title")],
    value: typ.Annotated[str, Parameter(help="New value; JSON, or a plain string")],
    *,
    config: ConfigOption = None,
) -> None:
    parsed = _parse_value(value)
    _edit(document, config, lambda session: session.update_field(key, path, parsed))


@app.command(help="Merge NAME=VALUE pairs into a section's settings.")
def settings(
    document: typ.Annotated[Path, Parameter(help="Page file to edit")],
    key: typ.Annotated[str, Parameter(help="Section key")],
    pairs: typ.Annotated[list[str], Parameter(help="NAME=VALUE settings to merge")],
    *,
    silent: typ.Annotated[bool, Parameter(help="Suppress the success notice")] = False,
    config: ConfigOption = None,
) -> None:
    patch: dict[str, typ.Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            msg = f"Expected NAME=VALUE, got {pair!r}."
            raise CommandError(msg)
        patch[name] = _parse_value(raw)
    _edit(
        document,
        config,
        lambda session: session.update_section_settings(key, patch, silent=silent),
    )


@app.command(help="Check a page file for structural problems, including stored section orders.")
def validate(
    document: typ.Annotated[Path, Parameter(help="Page file to check")],
    *,
    config: ConfigOption = None,
) -> None:
    content, _ = load_page(document, normalize=False)
    validate_document(content, SectionRegistry.from_path(config))
    print(f"{_format_path(document)}: ok ({len(content)} sections)")


@app.command(help="Show or change the editor mode preference.")
def mode(
    value: typ.Annotated[
        EditorMode | None, Parameter(help="edit or navigate; omit to print the current mode")
    ] = None,
    *,
    preferences: typ.Annotated[
        Path,
        Parameter(help="Preferences file (TOML)", env_var="PAGECRAFT_PREFERENCES_FILE"),
    ] = DEFAULT_PREFERENCES_PATH,
) -> None:
    store = TomlPreferenceStore(preferences)
    if value is not None:
        store.set_editor_mode(value)
    print(store.get_editor_mode())


@app.meta.default
def launcher(
    *tokens: typ.Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    verbose: typ.Annotated[bool, Parameter(help="Log engine decisions to stderr")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    app(tokens)


def main() -> None:
    """Invoke the Cyclopts application behind the ``pagecraft`` console command.

    Hard failures (malformed page or configuration files, invariant
    violations, failed saves) are printed to stderr and exit with status 1.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    try:
        app.meta()
    except (
        CommandError,
        DocumentStructureError,
        EditorConfigError,
        FileNotFoundError,
        InvariantViolation,
        PageFileError,
    ) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
