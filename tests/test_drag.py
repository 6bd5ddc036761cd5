"""Unit tests for drag-and-drop reconciliation."""

from __future__ import annotations

import itertools
import typing as typ

import pytest

from pagecraft import mutations
from pagecraft.document import sorted_keys
from pagecraft.drag import DragController, DragEvent, apply_drag, array_move, plan_drag

if typ.TYPE_CHECKING:
    from pagecraft.document import ContentDocument

    from .conftest import DocumentFactory

KEYS = ["hero", "featured", "cta", "faq", "team"]


def _orders(doc: ContentDocument) -> dict[str, int]:
    return {key: entry.order for key, entry in doc.sections.items()}


def test_array_move() -> None:
    assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]
    assert array_move(["a", "b", "c", "d"], 3, 0) == ["d", "a", "b", "c"]


def test_plan_drag_ignores_cancelled_and_self_drops(make_document: DocumentFactory) -> None:
    doc = make_document(KEYS)
    assert plan_drag(doc, DragEvent("cta", None)) is None
    assert plan_drag(doc, DragEvent("cta", "cta")) is None
    assert plan_drag(doc, DragEvent("cta", "pricing")) is None
    assert apply_drag(doc, DragEvent("cta", None)) is doc


def test_plan_drag_describes_the_move(make_document: DocumentFactory) -> None:
    plan = plan_drag(make_document(KEYS), DragEvent("team", "featured"))
    assert plan is not None
    assert (plan.old_index, plan.new_index, plan.steps, plan.direction) == (4, 1, 3, "up")
    assert plan.order == ["hero", "team", "featured", "cta", "faq"]


def test_bulk_and_stepwise_drags_agree(make_document: DocumentFactory) -> None:
    doc = make_document(KEYS)
    for source, destination in itertools.permutations(KEYS, 2):
        event = DragEvent(source, destination)
        bulk = apply_drag(doc, event, bulk=True)
        stepped = apply_drag(doc, event, bulk=False)
        assert _orders(bulk) == _orders(stepped), (source, destination)
        assert sorted_keys(bulk) == array_move(
            KEYS, KEYS.index(source), KEYS.index(destination)
        )


def test_controller_prefers_the_bulk_handler(make_document: DocumentFactory) -> None:
    state = {"doc": make_document(KEYS)}
    reorders: list[list[str]] = []
    moves: list[tuple[str, str]] = []

    def on_reorder(order: list[str]) -> None:
        reorders.append(order)
        state["doc"] = mutations.reorder_sections(state["doc"], order)

    controller = DragController(
        lambda: state["doc"], on_reorder=on_reorder, on_move=lambda k, d: moves.append((k, d))
    )
    assert controller.start("faq")
    assert controller.active is not None
    assert controller.active[0] == "faq"
    controller.drop(DragEvent("faq", "hero"))

    assert controller.active is None
    assert reorders == [["faq", "hero", "featured", "cta", "team"]]
    assert moves == []
    assert sorted_keys(state["doc"]) == reorders[0]


def test_controller_falls_back_to_single_steps(make_document: DocumentFactory) -> None:
    state = {"doc": make_document(KEYS)}

    def on_move(key: str, direction: mutations.Direction) -> None:
        state["doc"] = mutations.move_section(state["doc"], key, direction)

    controller = DragController(lambda: state["doc"], on_move=on_move)
    plan = controller.drop(DragEvent("hero", "faq"))

    assert plan is not None
    assert plan.steps == 3
    assert sorted_keys(state["doc"]) == ["featured", "cta", "faq", "hero", "team"]


def test_expanded_section_cannot_be_dragged(make_document: DocumentFactory) -> None:
    doc = make_document(KEYS)
    reorders: list[list[str]] = []
    controller = DragController(lambda: doc, on_reorder=reorders.append)

    assert controller.toggle_expanded("cta") == "cta"
    assert not controller.start("cta")
    assert controller.drop(DragEvent("cta", "hero")) is None
    assert controller.toggle_expanded("cta") is None
    assert controller.start("cta")
    controller.cancel()
    assert controller.active is None
    assert reorders == []


def test_controller_requires_a_handler(make_document: DocumentFactory) -> None:
    with pytest.raises(ValueError, match="handler"):
        DragController(lambda: make_document(KEYS))
