"""Clone-on-write access to nested section data by dotted path.

Every field and collection edit in :mod:`pagecraft.mutations` goes through
:func:`update_in`, which deep-copies the section's data once and then walks
the copy. The edited section therefore never shares a container with the
previous document, while other sections stay shared untouched.

Examples
--------
>>> from pagecraft.document.paths import parse_path, update_in
>>> parse_path("data.items.0.title")
('items', '0', 'title')
>>> update_in({"items": [{"title": "a"}]}, ("items", "0", "title"), lambda _: "b")
{'items': [{'title': 'b'}]}
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import typing as typ

Segment = str | int
PathSegments = tuple[Segment, ...]

_DATA_PREFIX = "data"


class PathError(LookupError):
    """Raised when a path cannot be followed through the data."""


def parse_path(path: str | cabc.Sequence[Segment]) -> PathSegments:
    """Split a dotted path into segments, dropping a leading ``data`` segment.

    Segments stay strings; a numeric segment only becomes a list index when
    the value it is applied to is a list. Empty paths and empty segments are
    rejected.
    """
    if isinstance(path, str):
        raw: list[Segment] = list(path.strip().split("."))
    else:
        raw = list(path)
    if len(raw) > 1 and raw[0] == _DATA_PREFIX:
        raw = raw[1:]
    if not raw or any(segment == "" for segment in raw):
        msg = f"Invalid field path {path!r}."
        raise PathError(msg)
    return tuple(raw)


def get_in(data: object, path: PathSegments, default: object = None) -> typ.Any:
    """Return the value at ``path`` or ``default`` when any segment is missing."""
    current = data
    for segment in path:
        match current:
            case cabc.Mapping() if segment in current:
                current = current[segment]
            case list():
                index = _list_index(segment)
                if index is None or not 0 <= index < len(current):
                    return default
                current = current[index]
            case _:
                return default
    return current


def update_in(
    data: cabc.Mapping[str, typ.Any],
    path: PathSegments,
    fn: cabc.Callable[[typ.Any], typ.Any],
) -> dict[str, typ.Any]:
    """Return a deep copy of ``data`` with ``fn`` applied to the value at ``path``.

    Missing mapping segments are created as empty dicts on the way down and
    ``fn`` receives ``None`` for a missing leaf. List segments must index an
    existing element.

    Raises
    ------
    PathError
        If a segment indexes past the end of a list or walks into a scalar.
    """
    root: dict[str, typ.Any] = copy.deepcopy(dict(data))
    if not path:
        msg = "Cannot update an empty path."
        raise PathError(msg)
    parent: typ.Any = root
    for depth, segment in enumerate(path[:-1]):
        parent = _descend(parent, segment, path[: depth + 1])
    leaf = path[-1]
    _assign(parent, leaf, fn(_peek(parent, leaf)), path)
    return root


def _descend(container: typ.Any, segment: Segment, walked: PathSegments) -> typ.Any:
    if isinstance(container, dict):
        child = container.get(segment)
        if not isinstance(child, (dict, list)):
            if child not in (None, "", 0, False):
                msg = f"Cannot descend into scalar at {_render(walked)}."
                raise PathError(msg)
            child = {}
            container[segment] = child
        return child
    index = _list_index(segment) if isinstance(container, list) else None
    if index is not None:
        if not 0 <= index < len(container):
            msg = f"Index {index} out of range at {_render(walked)}."
            raise PathError(msg)
        child = container[index]
        if not isinstance(child, (dict, list)):
            msg = f"Cannot descend into scalar at {_render(walked)}."
            raise PathError(msg)
        return child
    msg = f"Cannot follow {segment!r} at {_render(walked)}."
    raise PathError(msg)


def _peek(container: typ.Any, segment: Segment) -> typ.Any:
    if isinstance(container, dict):
        return container.get(segment)
    index = _list_index(segment) if isinstance(container, list) else None
    if index is not None:
        return container[index] if 0 <= index < len(container) else None
    return None


def _assign(container: typ.Any, segment: Segment, value: typ.Any, path: PathSegments) -> None:
    if isinstance(container, dict):
        container[segment] = value
        return
    index = _list_index(segment) if isinstance(container, list) else None
    if index is not None:
        if not 0 <= index < len(container):
            msg = f"Index {index} out of range at {_render(path)}."
            raise PathError(msg)
        container[index] = value
        return
    msg = f"Cannot assign {segment!r} at {_render(path)}."
    raise PathError(msg)


def _list_index(segment: Segment) -> int | None:
    if isinstance(segment, int):
        return segment
    return int(segment) if segment.isdigit() else None


def _render(path: PathSegments) -> str:
    return ".".join(str(segment) for segment in path)


__all__ = ["PathError", "PathSegments", "get_in", "parse_path", "update_in"]
