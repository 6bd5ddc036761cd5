"""Shared fixtures for the pagecraft test suite."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import pytest

from pagecraft.document import ContentDocument, SectionEntry
from pagecraft.registry import SectionRegistry

DocumentFactory = cabc.Callable[..., ContentDocument]


def build_document(
    keys: cabc.Iterable[str],
    *,
    layout: str = "landing",
    data: cabc.Mapping[str, dict[str, typ.Any]] | None = None,
) -> ContentDocument:
    """Return a document with one visible section per key, ordered as given.

    Keys with a numeric suffix (``richText_1``) get their base type.
    """
    data = data or {}
    sections: dict[str, SectionEntry] = {}
    for position, key in enumerate(keys, start=1):
        section_type = key.rsplit("_", 1)[0] if key.rsplit("_", 1)[-1].isdigit() else key
        sections[key] = SectionEntry(
            type=section_type, order=position, data=dict(data.get(key, {}))
        )
    return ContentDocument(sections=sections, layout=layout)


@pytest.fixture
def make_document() -> DocumentFactory:
    return build_document


@pytest.fixture(scope="session")
def registry() -> SectionRegistry:
    return SectionRegistry.builtin()
