"""Read and write page files.

A page file is a YAML (or JSON) mapping with the content document under
``content`` and the page metadata under ``page``::

    page:
      title: Spring sale
      slug: spring-sale
      is_published: false
    content:
      version: "1.0"
      layout: landing
      sections:
        hero: {type: hero, visible: true, order: 1, settings: {}, data: {}}

A bare content document (with ``sections`` at the top level) is accepted as
well and gets empty metadata. Documents are renumbered ``1..N`` on load.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import logging
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .document import ContentDocument, DocumentStructureError
from .mutations import normalize_order
from .session import PageMetadata

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class PageFileError(ValueError):
    """Raised when a page file cannot be parsed."""


def _build_loader() -> YAML:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader


def _build_dumper() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def load_page(path: Path, *, normalize: bool = True) -> tuple[ContentDocument, PageMetadata]:
    """Load a page file into a document and its metadata.

    Section orders are renumbered ``1..N`` unless ``normalize`` is false, in
    which case the stored orders are returned as written.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    PageFileError
        If the file is not valid YAML or its ``page`` block is malformed.
    DocumentStructureError
        If the content document is malformed.
    """
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = _build_loader().load(handle) or {}
        except YAMLError as exc:
            msg = f"Unable to parse page file {path}: {exc}"
            raise PageFileError(msg) from exc
    if not isinstance(payload, cabc.Mapping):
        msg = f"Page file {path} must contain a mapping."
        raise DocumentStructureError(msg)

    if "content" in payload:
        content = payload["content"]
        metadata = _metadata_from_mapping(payload.get("page") or {}, path=path)
    else:
        content = payload
        metadata = PageMetadata()
    document = ContentDocument.from_mapping(content)
    if not normalize:
        return document, metadata
    normalized = normalize_order(document)
    if normalized is not document:
        logger.info("Renumbered section order while loading %s", path)
    return normalized, metadata


def save_page(path: Path, document: ContentDocument, metadata: PageMetadata) -> None:
    """Write ``document`` and ``metadata`` to ``path``, replacing its contents."""
    payload = {
        "page": {
            "title": metadata.title,
            "slug": metadata.slug,
            "is_published": metadata.is_published,
        },
        "content": document.to_mapping(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            _build_dumper().dump(payload, handle)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d sections to %s", len(document), path)


class FilePersister:
    """Persist function that writes the page file off the event loop.

    Instances are awaitable callables matching
    :data:`pagecraft.session.PersistFn`.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    async def __call__(self, document: ContentDocument, metadata: PageMetadata) -> None:
        await asyncio.to_thread(save_page, self.path, document, metadata)


def _metadata_from_mapping(payload: object, *, path: Path) -> PageMetadata:
    if not isinstance(payload, cabc.Mapping):
        msg = f"'page' in {path} must be a mapping."
        raise PageFileError(msg)
    return PageMetadata(
        title=str(payload.get("title") or ""),
        slug=str(payload.get("slug") or ""),
        is_published=bool(payload.get("is_published", False)),
    )


__all__ = ["FilePersister", "PageFileError", "load_page", "save_page"]
