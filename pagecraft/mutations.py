"""Pure editing operations on a :class:`~pagecraft.document.ContentDocument`.

Every function takes the current document and returns the next one without
touching its input. Only the path down to the edited value is copied: the
document, its sections mapping, the edited entry and (through
:func:`~pagecraft.document.paths.update_in`) that entry's data. Operations
that refuse to act (unknown key, index out of range, moving past the first or
last position, removing a required section) log a warning and return the
document they were given, so callers can detect a no-op with ``is``.

Examples
--------
>>> from pagecraft.document import ContentDocument, SectionEntry
>>> from pagecraft import mutations
>>> doc = ContentDocument({"hero": SectionEntry(type="hero", order=1)})
>>> doc = mutations.update_field_by_path(doc, "hero", "data.headline", "Hi")
>>> doc.sections["hero"].data
{'headline': 'Hi'}
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ

from .config import builtin
from .document.models import ContentDocument, DocumentStructureError, SectionEntry
from .document.paths import PathError, get_in, parse_path, update_in
from .document.queries import is_required, sorted_keys

if typ.TYPE_CHECKING:
    from .config import LayoutConfig
    from .registry import SectionRegistry

logger = logging.getLogger(__name__)

Direction = typ.Literal["up", "down"]
Seeds = cabc.Mapping[str, cabc.Sequence[cabc.Mapping[str, typ.Any]]]

LEGACY_ITEM_ICON = "Check"


def update_section_data(
    doc: ContentDocument, key: str, partial: cabc.Mapping[str, typ.Any]
) -> ContentDocument:
    """Shallow-merge ``partial`` into the section's data."""
    entry = _require_entry(doc, key, "update data")
    if entry is None:
        return doc
    data = {**entry.data, **copy.deepcopy(dict(partial))}
    return doc.with_entry(key, dc.replace(entry, data=data))


def update_field_by_path(
    doc: ContentDocument, key: str, path: str, value: typ.Any
) -> ContentDocument:
    """Set one field inside the section's data.

    ``path`` is dotted (``"headline"``, ``"data.cta.label"``,
    ``"items.0.title"``); a leading ``data.`` is ignored because the walk
    already starts at the section data. Missing intermediate mappings are
    created.
    """
    entry = _require_entry(doc, key, "update field")
    if entry is None:
        return doc
    try:
        segments = parse_path(path)
        data = update_in(entry.data, segments, lambda _: copy.deepcopy(value))
    except PathError as exc:
        logger.warning("Cannot update field %r on section %r: %s", path, key, exc)
        return doc
    return doc.with_entry(key, dc.replace(entry, data=data))


def update_repeating_item(
    doc: ContentDocument,
    key: str,
    collection: str,
    index: int,
    patch: cabc.Mapping[str, typ.Any],
    *,
    seeds: Seeds | None = None,
) -> ContentDocument:
    """Shallow-merge ``patch`` into one element of a repeating collection.

    The collection is created (or filled from its seed) when missing, and a
    legacy bare-string element is upgraded to an object before merging.
    An index outside the collection is refused with a warning.
    """
    entry = _require_entry(doc, key, f"update {collection} item")
    if entry is None:
        return doc
    items = _ensure_collection(entry.data, collection, seeds)
    if not 0 <= index < len(items):
        logger.warning(
            "Cannot update %s item on section %r: invalid index %d (length %d)",
            collection,
            key,
            index,
            len(items),
        )
        return doc
    current = items[index]
    if isinstance(current, str):
        current = upgrade_legacy_item(current, collection=collection, index=index)
    elif not isinstance(current, cabc.Mapping):
        current = {}
    items[index] = {**current, **copy.deepcopy(dict(patch))}
    return _replace_collection(doc, key, entry, collection, items)


def add_repeating_item(
    doc: ContentDocument,
    key: str,
    collection: str,
    item: cabc.Mapping[str, typ.Any],
    *,
    seeds: Seeds | None = None,
) -> ContentDocument:
    """Append ``item`` to a repeating collection, creating it when missing."""
    entry = _require_entry(doc, key, f"add {collection} item")
    if entry is None:
        return doc
    items = _ensure_collection(entry.data, collection, seeds)
    items.append(copy.deepcopy(dict(item)))
    return _replace_collection(doc, key, entry, collection, items)


def delete_repeating_item(
    doc: ContentDocument,
    key: str,
    collection: str,
    index: int,
    *,
    seeds: Seeds | None = None,
) -> ContentDocument:
    """Remove one element of a repeating collection; out of range is a no-op."""
    entry = _require_entry(doc, key, f"delete {collection} item")
    if entry is None:
        return doc
    items = _ensure_collection(entry.data, collection, seeds)
    if not 0 <= index < len(items):
        logger.warning(
            "Cannot delete %s item on section %r: invalid index %d (length %d)",
            collection,
            key,
            index,
            len(items),
        )
        return doc
    del items[index]
    return _replace_collection(doc, key, entry, collection, items)


def upgrade_legacy_item(text: str, *, collection: str, index: int) -> dict[str, typ.Any]:
    """Convert a bare-string collection element into its object form.

    >>> upgrade_legacy_item("Fast shipping", collection="features", index=0)
    {'id': 'feature-0', 'icon': 'Check', 'title': 'Fast shipping', 'text': 'Fast shipping'}
    """
    return {
        "id": f"{_singular(collection)}-{index}",
        "icon": LEGACY_ITEM_ICON,
        "title": text,
        "text": text,
    }


def update_section_settings(
    doc: ContentDocument, key: str, patch: cabc.Mapping[str, typ.Any]
) -> ContentDocument:
    """Shallow-merge ``patch`` into the section's settings."""
    entry = _require_entry(doc, key, "update settings")
    if entry is None:
        return doc
    settings = {**entry.settings, **copy.deepcopy(dict(patch))}
    return doc.with_entry(key, dc.replace(entry, settings=settings))


def set_section_visibility(
    doc: ContentDocument,
    key: str,
    visible: bool,
    *,
    layout: LayoutConfig | None = None,
    multi_instance: cabc.Collection[str] = builtin.MULTI_INSTANCE_TYPES,
) -> ContentDocument:
    """Show or hide a section; required sections cannot be hidden."""
    entry = _require_entry(doc, key, "change visibility of")
    if entry is None:
        return doc
    if not visible and layout is not None and is_required(layout, key, multi_instance):
        logger.warning("Cannot hide required section %r", key)
        return doc
    if entry.visible == visible:
        return doc
    return doc.with_entry(key, dc.replace(entry, visible=visible))


def hide_section(
    doc: ContentDocument,
    key: str,
    *,
    layout: LayoutConfig | None = None,
    multi_instance: cabc.Collection[str] = builtin.MULTI_INSTANCE_TYPES,
) -> ContentDocument:
    return set_section_visibility(doc, key, False, layout=layout, multi_instance=multi_instance)


def show_section(doc: ContentDocument, key: str) -> ContentDocument:
    return set_section_visibility(doc, key, True)


def toggle_section_visibility(
    doc: ContentDocument,
    key: str,
    *,
    layout: LayoutConfig | None = None,
    multi_instance: cabc.Collection[str] = builtin.MULTI_INSTANCE_TYPES,
) -> ContentDocument:
    entry = _require_entry(doc, key, "toggle")
    if entry is None:
        return doc
    return set_section_visibility(
        doc, key, not entry.visible, layout=layout, multi_instance=multi_instance
    )


def delete_section(
    doc: ContentDocument,
    key: str,
    *,
    layout: LayoutConfig | None = None,
    multi_instance: cabc.Collection[str] = builtin.MULTI_INSTANCE_TYPES,
) -> ContentDocument:
    """Remove a section entirely; required sections are kept."""
    if _require_entry(doc, key, "delete") is None:
        return doc
    if layout is not None and is_required(layout, key, multi_instance):
        logger.warning("Cannot delete required section %r", key)
        return doc
    sections = {k: v for k, v in doc.sections.items() if k != key}
    return doc.with_sections(sections)


def duplicate_section(doc: ContentDocument, key: str) -> ContentDocument:
    """Deep-copy a section under ``<key>_copy`` (or ``<key>_copy_<n>``).

    The copy is placed directly after its source and all orders are
    renumbered so no two sections share a position.
    """
    entry = _require_entry(doc, key, "duplicate")
    if entry is None:
        return doc
    new_key = copy_key(doc, key)
    clone = dc.replace(
        entry,
        settings=copy.deepcopy(entry.settings),
        data=copy.deepcopy(entry.data),
    )
    keys = sorted_keys(doc)
    keys.insert(keys.index(key) + 1, new_key)
    return _renumber(doc.with_entry(new_key, clone), keys)


def copy_key(doc: ContentDocument, key: str) -> str:
    """Return the first free key in the ``_copy``, ``_copy_1``... sequence."""
    candidate = f"{key}_copy"
    counter = 1
    while candidate in doc.sections:
        candidate = f"{key}_copy_{counter}"
        counter += 1
    return candidate


def instance_key(
    doc: ContentDocument, section_type: str, *, multi_instance: bool
) -> str | None:
    """Return the key a newly added section of ``section_type`` would use.

    Multi-instance types take the bare type first and then ``<type>_1``,
    ``<type>_2``...; any other type only ever gets its bare key and yields
    ``None`` when it already exists.
    """
    if section_type not in doc.sections:
        return section_type
    if not multi_instance:
        return None
    counter = 1
    while f"{section_type}_{counter}" in doc.sections:
        counter += 1
    return f"{section_type}_{counter}"


def add_section(
    doc: ContentDocument, slot: str, *, registry: SectionRegistry
) -> ContentDocument:
    """Add an optional layout slot (or a bare section type) to the page.

    The new section is visible, seeded from the layout's default section or
    the type's default data, and appended after the last section.
    """
    resolved = registry.resolve_slot(doc.layout, slot)
    if resolved is None:
        logger.warning("Cannot add section: unknown section type %r", slot)
        return doc
    section_type, seed = resolved
    new_key = instance_key(doc, slot, multi_instance=registry.is_multi_instance(slot))
    if new_key is None:
        logger.warning("Cannot add section %r: it already exists", slot)
        return doc
    next_order = max((entry.order for entry in doc.sections.values()), default=0) + 1
    entry = SectionEntry(
        type=section_type,
        visible=True,
        order=next_order,
        settings=seed["settings"],
        data=seed["data"],
    )
    return doc.with_entry(new_key, entry)


def move_section(doc: ContentDocument, key: str, direction: Direction) -> ContentDocument:
    """Swap a section with its neighbour in page order.

    Moving the first section up or the last one down is refused. On success
    every section is renumbered ``1..N``.
    """
    if _require_entry(doc, key, f"move {direction}") is None:
        return doc
    keys = sorted_keys(doc)
    current = keys.index(key)
    target = current - 1 if direction == "up" else current + 1
    if not 0 <= target < len(keys):
        logger.warning("Cannot move section %r %s: already at the boundary", key, direction)
        return doc
    keys[current], keys[target] = keys[target], keys[current]
    return _renumber(doc, keys)


def reorder_sections(
    doc: ContentDocument, ordered_keys: cabc.Sequence[str]
) -> ContentDocument:
    """Apply a full new ordering of the page's section keys.

    ``ordered_keys`` must name every existing section exactly once; any
    other input is refused with a warning. Each entry's ``order`` becomes its
    1-based position in ``ordered_keys``.
    """
    problem = permutation_problem(doc, ordered_keys)
    if problem:
        logger.warning("Cannot reorder sections: %s", problem)
        return doc
    return _renumber(doc, list(ordered_keys))


def permutation_problem(
    doc: ContentDocument, ordered_keys: cabc.Sequence[str]
) -> str | None:
    """Describe why ``ordered_keys`` is not a permutation of the document keys."""
    seen: set[str] = set()
    duplicates: set[str] = set()
    for key in ordered_keys:
        if key in seen:
            duplicates.add(key)
        seen.add(key)
    if duplicates:
        return f"duplicate keys {', '.join(sorted(duplicates))}"
    unknown = sorted(seen - doc.sections.keys())
    if unknown:
        return f"unknown keys {', '.join(unknown)}"
    missing = [k for k in doc.sections if k not in seen]
    if missing:
        return f"missing keys {', '.join(missing)}"
    return None


def normalize_order(doc: ContentDocument) -> ContentDocument:
    """Renumber sections ``1..N`` in their current page order.

    Returns ``doc`` itself when the numbering is already consecutive and the
    mapping already iterates in page order.
    """
    keys = sorted_keys(doc)
    already = keys == list(doc.sections) and all(
        doc.sections[k].order == position for position, k in enumerate(keys, start=1)
    )
    return doc if already else _renumber(doc, keys)


def _renumber(doc: ContentDocument, keys: list[str]) -> ContentDocument:
    sections: dict[str, SectionEntry] = {}
    for position, key in enumerate(keys, start=1):
        entry = doc.sections[key]
        sections[key] = entry if entry.order == position else dc.replace(entry, order=position)
    return doc.with_sections(sections)


def _require_entry(doc: ContentDocument, key: str, action: str) -> SectionEntry | None:
    if not isinstance(doc.sections, cabc.Mapping):
        msg = "Content document 'sections' must be a mapping."
        raise DocumentStructureError(msg)
    entry = doc.sections.get(key)
    if entry is None:
        logger.warning("Cannot %s section %r: no such section", action, key)
    return entry


def _ensure_collection(
    data: cabc.Mapping[str, typ.Any], collection: str, seeds: Seeds | None
) -> list[typ.Any]:
    """Return a private copy of the collection, materialising its seed if needed."""
    existing = get_in(data, (collection,))
    if isinstance(existing, list) and existing:
        return copy.deepcopy(existing)
    seed = (builtin.SEEDS if seeds is None else seeds).get(collection)
    if seed is not None:
        logger.info("Initialising %s with default items", collection)
        return [copy.deepcopy(dict(item)) for item in seed]
    return copy.deepcopy(existing) if isinstance(existing, list) else []


def _replace_collection(
    doc: ContentDocument,
    key: str,
    entry: SectionEntry,
    collection: str,
    items: list[typ.Any],
) -> ContentDocument:
    data = update_in(entry.data, (collection,), lambda _: items)
    return doc.with_entry(key, dc.replace(entry, data=data))


def _singular(collection: str) -> str:
    if collection.endswith("ies"):
        return collection[:-3] + "y"
    if collection.endswith("s"):
        return collection[:-1]
    return collection


__all__ = [
    "Direction",
    "add_repeating_item",
    "add_section",
    "copy_key",
    "delete_repeating_item",
    "delete_section",
    "duplicate_section",
    "hide_section",
    "instance_key",
    "move_section",
    "normalize_order",
    "permutation_problem",
    "reorder_sections",
    "set_section_visibility",
    "show_section",
    "toggle_section_visibility",
    "update_field_by_path",
    "update_repeating_item",
    "update_section_data",
    "update_section_settings",
    "upgrade_legacy_item",
]
