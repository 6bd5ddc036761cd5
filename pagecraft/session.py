"""Editing session: owns the live document, tracks dirtiness and saves it.

An :class:`EditorSession` holds the document being edited together with the
snapshot it was opened from and the last snapshot that reached the backend.
Every editing method forwards to :mod:`pagecraft.mutations`; when the engine
returns a new document the session marks itself dirty and arms the unload
guard. When the engine refuses an edit it returns the same document, and the
session reports the refusal as a warning notice instead.

Examples
--------
>>> import asyncio
>>> from pagecraft.document import ContentDocument, SectionEntry
>>> saved = []
>>> async def persist(document, metadata):
...     saved.append(document)
>>> session = EditorSession(
...     ContentDocument({"hero": SectionEntry(type="hero", order=1)}, layout="landing"),
...     persist=persist,
... )
>>> session.update_field("hero", "headline", "Welcome")
True
>>> session.is_dirty
True
>>> asyncio.run(session.save()).ok
True
>>> session.is_dirty
False
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import logging
import typing as typ

from . import mutations
from .drag import DragController
from .notices import LoggingNotifier, Notice, NoticeLevel, Notifier
from .preferences import DEFAULT_EDITOR_MODE, EditorMode, MemoryPreferenceStore, PreferenceStore
from .registry import SectionRegistry

if typ.TYPE_CHECKING:
    from .document import ContentDocument

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class PageMetadata:
    """Page attributes edited alongside the content and saved with it."""

    title: str = ""
    slug: str = ""
    is_published: bool = False


@dc.dataclass(slots=True, frozen=True)
class SaveResult:
    ok: bool
    reason: str | None = None
    saved_at: dt.datetime | None = None


PersistFn = cabc.Callable[["ContentDocument", PageMetadata], cabc.Awaitable[None]]


class SaveTimeoutError(RuntimeError):
    """Raised when the persist function exceeds the configured save timeout."""


class UnloadGuard:
    """Tracks whether leaving the editor should be intercepted.

    Hosts poll :attr:`armed` (or call :meth:`confirm_leave`) from their own
    before-unload hook. An optional ``prompt`` callback decides whether the
    user really wants to leave while there are unsaved changes.
    """

    def __init__(self, prompt: cabc.Callable[[], bool] | None = None) -> None:
        self._armed = False
        self._prompt = prompt

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        if not self._armed:
            logger.debug("Unload guard armed")
        self._armed = True

    def disarm(self) -> None:
        if self._armed:
            logger.debug("Unload guard disarmed")
        self._armed = False

    def confirm_leave(self) -> bool:
        if not self._armed:
            return True
        if self._prompt is None:
            return False
        return self._prompt()


class EditorSession:
    """The single owner of a page's in-memory document.

    Parameters
    ----------
    document : ContentDocument or None
        Snapshot loaded from the backend. ``None`` models an editor that has
        not received a page yet; such a session cannot save.
    persist : PersistFn or None
        ``async (document, metadata) -> None``; raising signals failure.
    registry : SectionRegistry or None
        Section types, layouts and seeds. Defaults to the built-in table.
    metadata : PageMetadata or None
        Title, slug and publish state saved with the document.
    notifier : Notifier or None
        Receives user-facing notices. Defaults to logging them.
    preferences : PreferenceStore or None
        Where the edit/navigate mode is read from and written to.
    save_timeout : float or None
        Seconds to wait for ``persist`` before treating the save as failed.
        ``None`` waits indefinitely.
    unload_guard : UnloadGuard or None
        Shared guard the host checks before leaving the editor.
    """

    def __init__(
        self,
        document: ContentDocument | None,
        *,
        persist: PersistFn | None = None,
        registry: SectionRegistry | None = None,
        metadata: PageMetadata | None = None,
        notifier: Notifier | None = None,
        preferences: PreferenceStore | None = None,
        save_timeout: float | None = None,
        unload_guard: UnloadGuard | None = None,
    ) -> None:
        self._registry = registry or SectionRegistry.builtin()
        if document is not None:
            document = mutations.normalize_order(document)
        self._document = document
        self._initial_snapshot = document
        self._last_persisted_snapshot = document
        self._metadata = metadata or PageMetadata()
        self._initial_metadata = dc.replace(self._metadata)
        self._persist = persist
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._preferences: PreferenceStore = preferences or MemoryPreferenceStore()
        self._save_timeout = save_timeout
        self._guard = unload_guard or UnloadGuard()
        self._is_dirty = False
        self._is_saving = False
        self._last_saved_at: dt.datetime | None = None
        self._active_section: str | None = None
        self._closed = False
        try:
            self._mode: EditorMode = self._preferences.get_editor_mode()
        except ValueError:
            logger.warning("Unreadable editor preferences; using %r mode", DEFAULT_EDITOR_MODE)
            self._mode = DEFAULT_EDITOR_MODE

    # -- state ---------------------------------------------------------------

    @property
    def document(self) -> ContentDocument | None:
        return self._document

    @property
    def initial_snapshot(self) -> ContentDocument | None:
        return self._initial_snapshot

    @property
    def last_persisted_snapshot(self) -> ContentDocument | None:
        return self._last_persisted_snapshot

    @property
    def registry(self) -> SectionRegistry:
        return self._registry

    @property
    def metadata(self) -> PageMetadata:
        return dc.replace(self._metadata)

    @property
    def is_dirty(self) -> bool:
        return self._is_dirty

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    @property
    def last_saved_at(self) -> dt.datetime | None:
        return self._last_saved_at

    @property
    def unload_guard(self) -> UnloadGuard:
        return self._guard

    @property
    def active_section(self) -> str | None:
        return self._active_section

    @active_section.setter
    def active_section(self, key: str | None) -> None:
        if key is not None and (self._document is None or key not in self._document):
            logger.warning("Cannot activate section %r: no such section", key)
            return
        self._active_section = key

    @property
    def editor_mode(self) -> EditorMode:
        return self._mode

    @editor_mode.setter
    def editor_mode(self, mode: EditorMode) -> None:
        self._preferences.set_editor_mode(mode)
        self._mode = mode

    # -- metadata ------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self._set_metadata(title=title)

    def set_slug(self, slug: str) -> None:
        self._set_metadata(slug=slug)

    def set_published(self, is_published: bool) -> None:
        self._set_metadata(is_published=is_published)

    def _set_metadata(self, **changes: typ.Any) -> None:
        self._metadata = dc.replace(self._metadata, **changes)
        self._mark_dirty()

    # -- content edits -------------------------------------------------------

    def update_section_data(self, key: str, partial: cabc.Mapping[str, typ.Any]) -> bool:
        return self._apply(
            lambda doc: mutations.update_section_data(doc, key, partial),
            failure=f"Could not update section {key!r}",
        )

    def update_field(self, key: str, path: str, value: typ.Any) -> bool:
        return self._apply(
            lambda doc: mutations.update_field_by_path(doc, key, path, value),
            failure=f"Could not update {path!r} on section {key!r}",
        )

    def update_section_settings(
        self, key: str, patch: cabc.Mapping[str, typ.Any], *, silent: bool = False
    ) -> bool:
        """Merge ``patch`` into a section's settings.

        ``silent`` suppresses the success notice for automated updates such as
        re-applying defaults; the document still becomes dirty.
        """
        return self._apply(
            lambda doc: mutations.update_section_settings(doc, key, patch),
            success=None if silent else "Section settings updated",
            failure=f"Could not update settings of section {key!r}",
        )

    def update_repeating_item(
        self, key: str, collection: str, index: int, patch: cabc.Mapping[str, typ.Any]
    ) -> bool:
        return self._apply(
            lambda doc: mutations.update_repeating_item(
                doc, key, collection, index, patch, seeds=self._registry.config.seeds
            ),
            failure=f"Could not update {collection} item {index} on section {key!r}",
        )

    def add_repeating_item(
        self, key: str, collection: str, item: cabc.Mapping[str, typ.Any]
    ) -> bool:
        return self._apply(
            lambda doc: mutations.add_repeating_item(
                doc, key, collection, item, seeds=self._registry.config.seeds
            ),
            failure=f"Could not add an item to {collection} on section {key!r}",
        )

    def delete_repeating_item(self, key: str, collection: str, index: int) -> bool:
        return self._apply(
            lambda doc: mutations.delete_repeating_item(
                doc, key, collection, index, seeds=self._registry.config.seeds
            ),
            failure=f"Could not delete {collection} item {index} on section {key!r}",
        )

    # -- structural edits ----------------------------------------------------

    def add_section(self, slot: str) -> bool:
        return self._apply(
            lambda doc: mutations.add_section(doc, slot, registry=self._registry),
            success=f"Added {slot} section",
            failure=f"Could not add section {slot!r}",
        )

    def delete_section(self, key: str) -> bool:
        removed = self._apply(
            lambda doc: mutations.delete_section(doc, key, **self._required_guard(doc)),
            success=f"Removed section {key!r}",
            failure=f"Could not remove section {key!r}",
        )
        if removed and self._active_section == key:
            self._active_section = None
        return removed

    def hide_section(self, key: str) -> bool:
        return self._apply(
            lambda doc: mutations.hide_section(doc, key, **self._required_guard(doc)),
            success=f"Section {key!r} hidden",
            failure=f"Could not hide section {key!r}",
        )

    def show_section(self, key: str) -> bool:
        return self._apply(
            lambda doc: mutations.show_section(doc, key),
            success=f"Section {key!r} shown",
            failure=f"Could not show section {key!r}",
        )

    def toggle_section_visibility(self, key: str) -> bool:
        return self._apply(
            lambda doc: mutations.toggle_section_visibility(
                doc, key, **self._required_guard(doc)
            ),
            failure=f"Could not change visibility of section {key!r}",
        )

    def duplicate_section(self, key: str) -> bool:
        return self._apply(
            lambda doc: mutations.duplicate_section(doc, key),
            success=f"Section {key!r} duplicated",
            failure=f"Could not duplicate section {key!r}",
        )

    def move_section(self, key: str, direction: mutations.Direction) -> bool:
        return self._apply(
            lambda doc: mutations.move_section(doc, key, direction),
            failure=f"Cannot move section {direction}",
        )

    def reorder_sections(self, ordered_keys: cabc.Sequence[str]) -> bool:
        return self._apply(
            lambda doc: mutations.reorder_sections(doc, ordered_keys),
            failure="Could not reorder sections",
        )

    def drag_controller(self, *, bulk: bool = True) -> DragController:
        """Return a :class:`DragController` wired to this session.

        ``bulk`` selects the permutation handler; otherwise drops are applied
        as repeated single-step moves.
        """
        if bulk:
            return DragController(self._current, on_reorder=self.reorder_sections)
        return DragController(self._current, on_move=self.move_section)

    # -- save / discard ------------------------------------------------------

    async def save(self) -> SaveResult:
        """Persist the current document and metadata.

        Never raises for backend failures; the outcome is reported through the
        returned :class:`SaveResult` and an error notice.
        """
        if self._persist is None or self._document is None:
            if self._persist is None:
                reason = "cannot save: no persist function"
            else:
                reason = "cannot save: no document loaded"
            self._notify(NoticeLevel.ERROR, reason)
            return SaveResult(ok=False, reason=reason)
        if self._is_saving:
            reason = "save already in progress"
            self._notify(NoticeLevel.WARNING, reason)
            return SaveResult(ok=False, reason=reason)

        document = self._document
        metadata = dc.replace(self._metadata)
        self._is_saving = True
        try:
            await self._run_persist(self._persist, document, metadata)
        except Exception as exc:  # noqa: BLE001 - persist is host-supplied
            logger.exception("Save failed")
            reason = str(exc) or type(exc).__name__
            self._notify(NoticeLevel.ERROR, f"Failed to save page: {reason}")
            return SaveResult(ok=False, reason=reason)
        finally:
            self._is_saving = False

        saved_at = dt.datetime.now(dt.UTC)
        self._last_persisted_snapshot = document
        self._last_saved_at = saved_at
        if self._document is document and self._metadata == metadata:
            self._set_clean()
        self._notify(NoticeLevel.SUCCESS, "Page saved successfully")
        return SaveResult(ok=True, saved_at=saved_at)

    def discard(self) -> None:
        """Drop every unsaved edit and return to the snapshot the session opened with."""
        self._document = self._initial_snapshot
        self._metadata = dc.replace(self._initial_metadata)
        if self._active_section is not None and (
            self._document is None or self._active_section not in self._document
        ):
            self._active_section = None
        self._set_clean()
        self._notify(NoticeLevel.INFO, "Changes discarded")

    def close(self) -> None:
        """End the session; the unload guard no longer intercepts navigation."""
        self._closed = True
        self._guard.disarm()

    # -- internals -----------------------------------------------------------

    async def _run_persist(
        self, persist: PersistFn, document: ContentDocument, metadata: PageMetadata
    ) -> None:
        if self._save_timeout is None:
            await persist(document, metadata)
            return
        try:
            await asyncio.wait_for(persist(document, metadata), self._save_timeout)
        except TimeoutError as exc:
            msg = f"save timed out after {self._save_timeout:g}s"
            raise SaveTimeoutError(msg) from exc


    def _current(self) -> ContentDocument:
        if self._document is None:
            msg = "No document loaded in this editor session."
            raise RuntimeError(msg)
        return self._document

    def _required_guard(self, doc: ContentDocument) -> dict[str, typ.Any]:
        """Keyword arguments that let the engine refuse to drop required sections.

        An unknown layout has no required sections; a warning notice says so.
        """
        layout = self._registry.find_layout(doc.layout)
        if layout is None:
            logger.warning("Unknown layout %r; required sections not enforced", doc.layout)
            self._notify(
                NoticeLevel.WARNING,
                f"Unknown layout {doc.layout!r}: required sections are not enforced",
            )
        return {"layout": layout, "multi_instance": self._registry.multi_instance_types}

    def _apply(
        self,
        operation: cabc.Callable[[ContentDocument], ContentDocument],
        *,
        success: str | None = None,
        failure: str,
    ) -> bool:
        if self._document is None:
            self._notify(NoticeLevel.WARNING, f"{failure}: no document loaded")
            return False
        previous = self._document
        updated = operation(previous)
        if updated is previous:
            self._notify(NoticeLevel.WARNING, failure)
            return False
        self._document = updated
        self._mark_dirty()
        if success is not None:
            self._notify(NoticeLevel.SUCCESS, success)
        return True

    def _mark_dirty(self) -> None:
        self._is_dirty = True
        if not self._closed:
            self._guard.arm()

    def _set_clean(self) -> None:
        self._is_dirty = False
        self._guard.disarm()

    def _notify(self, level: NoticeLevel, message: str) -> None:
        self._notifier.notify(Notice(level, message))


__all__ = [
    "EditorSession",
    "PageMetadata",
    "PersistFn",
    "SaveResult",
    "SaveTimeoutError",
    "UnloadGuard",
]
