"""Page-content document model and editing engine for the site builder.

A page is a :class:`~pagecraft.document.ContentDocument` of named, typed
sections. :mod:`pagecraft.mutations` edits it, :mod:`pagecraft.drag` turns
drops into reorders, and :class:`~pagecraft.session.EditorSession` buffers the
edits until they are saved or discarded.

Exports
-------
- ``app``: Cyclopts application behind the ``pagecraft`` console script.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``ContentDocument``, ``SectionEntry``, ``SectionRegistry`` and
  ``EditorSession``: the core editing API.

Examples
--------
>>> from pagecraft import ContentDocument, EditorSession
>>> session = EditorSession(ContentDocument(layout="landing"))
>>> session.add_section("cta")
True
>>> session.add_section("cta")
False
"""

from __future__ import annotations

from .cli import app, main
from .document import ContentDocument, SectionEntry
from .registry import SectionRegistry
from .session import EditorSession

__all__ = ["ContentDocument", "EditorSession", "SectionEntry", "SectionRegistry", "app", "main"]
