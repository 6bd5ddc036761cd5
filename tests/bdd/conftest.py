"""Steps shared by the editor behaviour scenarios."""

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import parsers, then, when

from pagecraft.notices import NoticeLevel

if typ.TYPE_CHECKING:
    from pagecraft.notices import CollectingNotifier
    from pagecraft.session import EditorSession

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@when(parsers.parse('I add a "{slot}" section'))
def when_add_section(scenario_state: ScenarioState, slot: str) -> None:
    session: EditorSession = scenario_state["session"]
    session.add_section(slot)


@then("the editor has unsaved changes")
def then_dirty(scenario_state: ScenarioState) -> None:
    session: EditorSession = scenario_state["session"]
    assert session.is_dirty, "expected the session to be dirty"
    assert session.unload_guard.armed, "expected the unload guard to be armed"


@then("the editor has no unsaved changes")
def then_clean(scenario_state: ScenarioState) -> None:
    session: EditorSession = scenario_state["session"]
    assert not session.is_dirty, "expected the session to be clean"
    assert not session.unload_guard.armed, "expected the unload guard to be disarmed"


@then("a warning was shown")
def then_warning_shown(scenario_state: ScenarioState) -> None:
    notifier: CollectingNotifier = scenario_state["notifier"]
    levels = [notice.level for notice in notifier.notices]
    assert NoticeLevel.WARNING in levels, f"expected a warning notice, got {levels!r}"
