"""Behaviour tests for block style updates over hanging selections.

``hanging_selection.feature`` drives an :class:`EditorSession` built from the
shared sample snapshot: a root view holding a title paragraph and a body
paragraph. Text nodes are keyed ``"2"`` (title) and ``"4"`` (body) in the
assembled tree.

Usage
-----
Run ``pytest tests/bdd/test_hanging_selection.py -v``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from page_editor.document import ComponentNode, Point, Range
from page_editor.session import EditorSession, SetTextStyle

if typ.TYPE_CHECKING:
    from page_editor.snapshot import Snapshot

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "hanging_selection.feature"
)
scenarios(FEATURE_FILE)

TITLE_KEY = "2"
BODY_KEY = "4"

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _session(state: ScenarioState) -> EditorSession:
    return typ.cast("EditorSession", state["session"])


@given("an editing session on a page with a title and a body paragraph")
def given_session(scenario_state: ScenarioState, snapshot: Snapshot) -> None:
    scenario_state["session"] = EditorSession(snapshot)


@given("text blocks are configured as void components")
def given_void_text(scenario_state: ScenarioState) -> None:
    session = _session(scenario_state)
    session.settings = dc.replace(session.settings, void_components=("Text",))


@given("a selection from the start of the title to the start of the body")
def given_hanging_selection(scenario_state: ScenarioState) -> None:
    _session(scenario_state).select(
        Range(anchor=Point(TITLE_KEY, 0), focus=Point(BODY_KEY, 0))
    )


@given(
    parsers.parse(
        "a selection from the start of the title to offset {offset:d} of the body"
    )
)
def given_selection_into_body(scenario_state: ScenarioState, offset: int) -> None:
    _session(scenario_state).select(
        Range(anchor=Point(TITLE_KEY, 0), focus=Point(BODY_KEY, offset))
    )


@when(parsers.parse('I apply the text style "{style_id}"'))
def when_apply_style(scenario_state: ScenarioState, style_id: str) -> None:
    _session(scenario_state).dispatch(SetTextStyle(style_id=style_id))


def _block(state: ScenarioState, position: int) -> ComponentNode:
    root = _session(state).value.root
    assert isinstance(root, ComponentNode)
    block = root.children[position]
    assert isinstance(block, ComponentNode)
    return block


@then(parsers.parse('the {which} block uses style "{style_id}"'))
def then_block_style(scenario_state: ScenarioState, which: str, style_id: str) -> None:
    position = {"title": 0, "body": 1}[which]
    actual = EditorSession.node_text_style_id(_block(scenario_state, position))
    assert actual == style_id, (
        f"expected the {which} block to use {style_id!r}, got {actual!r}"
    )
