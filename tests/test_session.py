"""Unit tests for the editor session's dirty tracking and save protocol."""

from __future__ import annotations

import asyncio
import textwrap
import typing as typ
from pathlib import Path

import pytest

from pagecraft.document import ContentDocument, SectionEntry, sorted_keys
from pagecraft.drag import DragEvent
from pagecraft.notices import CollectingNotifier, NoticeLevel
from pagecraft.preferences import MemoryPreferenceStore
from pagecraft.registry import SectionRegistry
from pagecraft.session import EditorSession, PageMetadata, UnloadGuard

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

    from .conftest import DocumentFactory


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


def _session(
    document: ContentDocument | None, notifier: CollectingNotifier, **kwargs: typ.Any
) -> EditorSession:
    return EditorSession(document, notifier=notifier, **kwargs)


def test_edits_mark_the_session_dirty(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero", "cta"]), notifier)
    assert not session.is_dirty
    assert not session.unload_guard.armed

    assert session.update_field("hero", "headline", "Hi")
    assert session.is_dirty
    assert session.unload_guard.armed


def test_value_equal_edits_still_mark_dirty(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    doc = make_document(["hero"], data={"hero": {"headline": "Hi"}})
    session = _session(doc, notifier)
    assert session.update_field("hero", "headline", "Hi")
    assert session.document == doc
    assert session.is_dirty


def test_refused_edits_warn_and_stay_clean(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero", "cta"]), notifier)
    assert not session.move_section("hero", "up")
    assert not session.hide_section("hero")
    assert not session.delete_section("hero")
    assert not session.update_repeating_item("cta", "items", 0, {"a": 1})

    assert not session.is_dirty
    assert [notice.level for notice in notifier.notices] == [NoticeLevel.WARNING] * 4
    assert notifier.messages[0] == "Cannot move section up"


def test_silent_settings_update_skips_the_notice(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero"]), notifier)
    assert session.update_section_settings("hero", {"padding": "lg"}, silent=True)
    assert notifier.notices == []
    assert session.is_dirty

    assert session.update_section_settings("hero", {"padding": "sm"})
    assert notifier.messages == ["Section settings updated"]


def test_metadata_edits_mark_dirty(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero"]), notifier, metadata=PageMetadata(title="Home"))
    session.set_slug("home")
    session.set_published(True)
    assert session.is_dirty
    assert session.metadata == PageMetadata(title="Home", slug="home", is_published=True)


def test_save_without_persist_or_document(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    result = asyncio.run(_session(make_document(["hero"]), notifier).save())
    assert not result.ok
    assert result.reason == "cannot save: no persist function"

    async def persist(document: ContentDocument, metadata: PageMetadata) -> None:
        return None

    result = asyncio.run(_session(None, notifier, persist=persist).save())
    assert not result.ok
    assert result.reason == "cannot save: no document loaded"


def test_successful_save_passes_document_and_metadata(
    make_document: DocumentFactory, notifier: CollectingNotifier, mocker: MockerFixture
) -> None:
    persist = mocker.AsyncMock(return_value=None)
    session = _session(
        make_document(["hero"]), notifier, persist=persist, metadata=PageMetadata(title="Home")
    )
    session.update_field("hero", "headline", "Hi")
    result = asyncio.run(session.save())

    assert result.ok
    persist.assert_awaited_once()
    document, metadata = persist.await_args.args
    assert document is session.document
    assert metadata == PageMetadata(title="Home")
    assert session.last_persisted_snapshot is session.document
    assert session.last_saved_at == result.saved_at
    assert not session.is_dirty
    assert not session.unload_guard.armed
    assert notifier.messages[-1] == "Page saved successfully"


def test_failed_save_keeps_state(
    make_document: DocumentFactory, notifier: CollectingNotifier, mocker: MockerFixture
) -> None:
    persist = mocker.AsyncMock(side_effect=OSError("disk full"))
    session = _session(make_document(["hero"]), notifier, persist=persist)
    session.update_field("hero", "headline", "Hi")
    edited = session.document

    result = asyncio.run(session.save())

    assert not result.ok
    assert result.reason == "disk full"
    assert session.is_dirty
    assert session.document is edited
    assert session.last_saved_at is None
    assert not session.is_saving
    assert notifier.notices[-1].level is NoticeLevel.ERROR


def test_stalled_save_times_out(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    async def persist(document: ContentDocument, metadata: PageMetadata) -> None:
        await asyncio.sleep(10)

    session = _session(make_document(["hero"]), notifier, persist=persist, save_timeout=0.01)
    session.update_field("hero", "headline", "Hi")
    result = asyncio.run(session.save())

    assert not result.ok
    assert result.reason is not None
    assert "timed out" in result.reason
    assert session.is_dirty
    assert not session.is_saving


def test_concurrent_save_is_rejected(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    calls: list[ContentDocument] = []

    async def persist(document: ContentDocument, metadata: PageMetadata) -> None:
        calls.append(document)
        await asyncio.sleep(0.01)

    session = _session(make_document(["hero"]), notifier, persist=persist)
    session.update_field("hero", "headline", "Hi")

    async def save_twice() -> list[typ.Any]:
        return await asyncio.gather(session.save(), session.save())

    first, second = asyncio.run(save_twice())
    assert first.ok
    assert not second.ok
    assert second.reason == "save already in progress"
    assert len(calls) == 1


def test_discard_restores_the_opened_snapshot(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    opened = make_document(["hero", "cta"], data={"hero": {"headline": "Welcome"}})
    session = _session(opened, notifier, metadata=PageMetadata(title="Home"))
    session.update_field("hero", "headline", "Sale")
    session.add_section("richText")
    session.duplicate_section("cta")
    session.move_section("cta", "up")
    session.set_title("Sale")
    session.active_section = "richText"

    session.discard()

    assert session.document is opened
    assert session.metadata == PageMetadata(title="Home")
    assert session.active_section is None
    assert not session.is_dirty
    assert not session.unload_guard.armed


def test_discard_ignores_intermediate_saves(
    make_document: DocumentFactory, notifier: CollectingNotifier, mocker: MockerFixture
) -> None:
    opened = make_document(["hero"])
    session = _session(opened, notifier, persist=mocker.AsyncMock(return_value=None))
    session.update_field("hero", "headline", "Saved")
    asyncio.run(session.save())
    session.discard()
    assert session.document is opened


def test_session_normalises_order_on_open(notifier: CollectingNotifier) -> None:
    doc = ContentDocument(
        {"cta": SectionEntry(type="cta", order=5), "hero": SectionEntry(type="hero", order=2)}
    )
    session = _session(doc, notifier)
    assert session.document is not None
    assert {k: e.order for k, e in session.document.sections.items()} == {"hero": 1, "cta": 2}
    assert session.initial_snapshot is session.document
    assert not session.is_dirty


def test_close_disarms_the_unload_guard(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    prompts: list[bool] = []

    def prompt() -> bool:
        prompts.append(True)
        return False

    guard = UnloadGuard(prompt)
    session = _session(make_document(["hero"]), notifier, unload_guard=guard)
    session.update_field("hero", "headline", "Hi")
    assert not guard.confirm_leave()
    session.close()
    assert guard.confirm_leave()
    assert prompts == [True]


def test_editor_mode_is_read_and_written_through_the_store(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    store = MemoryPreferenceStore("navigate")
    session = _session(make_document(["hero"]), notifier, preferences=store)
    assert session.editor_mode == "navigate"
    session.editor_mode = "edit"
    assert store.get_editor_mode() == "edit"
    assert not session.is_dirty


def test_drag_controller_edits_the_session(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero", "cta", "richText"]), notifier)
    for bulk in (True, False):
        controller = session.drag_controller(bulk=bulk)
        controller.drop(DragEvent("richText", "hero"))
        assert sorted_keys(session.document) == ["richText", "hero", "cta"]
        session.discard()


def test_configured_multi_instance_copies_of_required_sections_are_kept(
    tmp_path: Path, make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    config = tmp_path / "pagecraft.yaml"
    config.write_text(
        textwrap.dedent(
            """
            section_types:
              gallery:
                multi_instance: true
            layouts:
              showcase:
                required: [hero, gallery]
            """
        ),
        encoding="utf-8",
    )
    registry = SectionRegistry.from_path(config)
    session = _session(
        make_document(["hero", "gallery"], layout="showcase"), notifier, registry=registry
    )

    assert session.add_section("gallery")
    assert sorted_keys(session.document) == ["hero", "gallery", "gallery_1"]
    assert not session.hide_section("gallery_1")
    assert not session.toggle_section_visibility("gallery_1")
    assert not session.delete_section("gallery_1")
    assert "gallery_1" in session.document


def test_unknown_layout_edits_warn_instead_of_raising(
    make_document: DocumentFactory, notifier: CollectingNotifier
) -> None:
    session = _session(make_document(["hero", "cta"], layout="custom"), notifier)

    assert session.hide_section("cta")
    assert session.delete_section("cta")
    assert session.add_section("faq")
    assert "Unknown layout 'custom'" in notifier.messages[0]
    assert [notice.level for notice in notifier.notices].count(NoticeLevel.ERROR) == 0
