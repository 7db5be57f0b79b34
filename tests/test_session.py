"""Tests for the editing session and its action dispatch."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import pytest

from page_editor import EditorSession
from page_editor.document import ComponentNode, DocumentValue, Point, Range, TextNode
from page_editor.errors import InvariantViolationError, MissingRequiredStyleError
from page_editor.render import MarkType
from page_editor.session import (
    Focus,
    MoveToAnchor,
    SetTextStyle,
    ToggleMark,
    Update,
    parse_action,
)
from page_editor.settings import EditorSettings
from page_editor.snapshot import Page, Snapshot, Style, WebData, parse_snapshot
from page_editor.styles import sheets as sheets_module

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

TITLE = "2"
BODY = "4"


@pytest.fixture
def session(snapshot: Snapshot) -> EditorSession:
    return EditorSession(snapshot)


def _blocks(session: EditorSession) -> list[ComponentNode]:
    root = session.value.root
    assert isinstance(root, ComponentNode)
    return [child for child in root.children if isinstance(child, ComponentNode)]


def _style_ids(session: EditorSession) -> list[str]:
    return [EditorSession.node_text_style_id(block) for block in _blocks(session)]


def test_session_exposes_page_metadata(session: EditorSession) -> None:
    assert session.page_id == "page-1"
    assert session.title == "Home (draft)", "draft title should win over title"
    assert session.selection is None
    assert session.is_focused is False
    assert session.document_changed is False


def test_from_snapshot_returns_none_until_complete(
    snapshot_payload: dict[str, typ.Any],
) -> None:
    snapshot_payload["page"]["web"]["elements"] = None
    assert EditorSession.from_snapshot(parse_snapshot(snapshot_payload)) is None
    assert EditorSession.from_snapshot(Snapshot(components=[])) is None


def test_constructor_rejects_incomplete_snapshot() -> None:
    snapshot = Snapshot(
        components=[],
        page=Page(id="p", element_id="root", web=WebData()),
    )
    with pytest.raises(InvariantViolationError):
        EditorSession(snapshot)


def test_document_is_built_once(session: EditorSession) -> None:
    """Replacing the element list keeps the assembled document."""
    value = session.value
    session.replace_web_data(elements=[])
    assert session.value is value
    assert session.elements == []
    assert session.value.root.key == "0"


def test_style_sheets_are_cached_by_content(
    session: EditorSession, mocker: MockerFixture
) -> None:
    spy = mocker.spy(sheets_module, "build_style_sheets")
    first = session.style_sheets
    session.replace_web_data(styles=list(session.styles))
    second = session.style_sheets
    assert second is first
    assert spy.call_count == 1


def test_style_sheets_follow_style_changes(session: EditorSession) -> None:
    before = session.style_sheets["s-text"].style()
    styles = [
        dc.replace(style, font_size=18) if style.id == "s-text" else style
        for style in session.styles
    ]
    session.replace_web_data(styles=styles)
    after = session.style_sheets["s-text"].style()
    assert before == [{"fontSize": 16, "color": "rgb(10, 20, 30)"}]
    assert after == [{"fontSize": 18, "color": "rgb(10, 20, 30)"}]


def test_text_styles_are_sorted_by_name(session: EditorSession) -> None:
    assert [style.name for style in session.text_styles()] == ["heading", "text"]


@pytest.mark.parametrize(
    ("slot", "expected"), [(0, "s-heading"), (1, "s-text"), (2, None), (-1, None)]
)
def test_style_for_hotkey(
    session: EditorSession, slot: int, expected: str | None
) -> None:
    assert session.style_for_hotkey(slot) == expected


def test_hotkey_slots_are_limited_by_settings(snapshot: Snapshot) -> None:
    session = EditorSession(snapshot, EditorSettings(hotkey_style_slots=1))
    assert session.style_for_hotkey(0) == "s-heading"
    assert session.style_for_hotkey(1) is None


def test_default_text_style(snapshot: Snapshot, session: EditorSession) -> None:
    assert session.default_text_style_id() == "s-text"
    strict = EditorSession(snapshot, EditorSettings(text_style_name="body"))
    with pytest.raises(
        MissingRequiredStyleError, match="App must have a text style named 'body'"
    ):
        strict.default_text_style_id()


def test_renderer_uses_session_sheets(session: EditorSession) -> None:
    root = session.value.root
    assert isinstance(root, ComponentNode)
    rendered = session.renderer.render_node(root)
    assert rendered.component == "View"
    assert rendered.props["style"] == session.style_sheets["s-box"].style()


def test_focus_action(session: EditorSession) -> None:
    session.dispatch(Focus())
    assert session.is_focused is True


def test_set_text_style_without_selection_is_ignored(session: EditorSession) -> None:
    session.dispatch(SetTextStyle(style_id="s-heading"))
    assert _style_ids(session) == ["s-heading", "s-text"]
    assert session.document_changed is False


def test_set_text_style_on_hanging_selection(session: EditorSession) -> None:
    """The block the selection merely grazes keeps its style."""
    session.select(Range(anchor=Point(TITLE), focus=Point(BODY)))
    session.dispatch(SetTextStyle(style_id="s-text"))
    assert _style_ids(session) == ["s-text", "s-text"]
    session.dispatch(SetTextStyle(style_id="s-heading"))
    assert _style_ids(session) == ["s-heading", "s-text"]
    assert session.document_changed is True


def test_void_start_block_disables_hanging(snapshot: Snapshot) -> None:
    session = EditorSession(snapshot, EditorSettings(void_components=("Text",)))
    session.select(Range(anchor=Point(TITLE), focus=Point(BODY)))
    session.dispatch(SetTextStyle(style_id="s-box"))
    assert _style_ids(session) == ["s-box", "s-box"]


def test_toggle_mark_action(session: EditorSession) -> None:
    session.dispatch(ToggleMark(mark=MarkType.BOLD))
    session.select(Range(anchor=Point(TITLE), focus=Point(TITLE, 5)))
    session.dispatch(ToggleMark(mark=MarkType.BOLD))
    root = session.value.root
    assert isinstance(root, ComponentNode)
    title, body = root.texts()
    assert [mark["type"] for mark in title.leaves[0]["marks"]] == ["bold"]
    assert body.leaves[0]["marks"] == []


def test_move_to_anchor_collapses_selection(session: EditorSession) -> None:
    session.select(Range(anchor=Point(BODY, 3), focus=Point(TITLE, 1)))
    session.dispatch(MoveToAnchor())
    assert session.selection == Range.collapsed(Point(BODY, 3))
    assert session.is_focused is True


def test_move_to_anchor_ignores_collapsed_selection(session: EditorSession) -> None:
    session.select(Range.collapsed(Point(TITLE, 2)))
    session.dispatch(MoveToAnchor())
    assert session.selection == Range.collapsed(Point(TITLE, 2))
    assert session.is_focused is False


def test_update_replaces_value_and_selection(session: EditorSession) -> None:
    value = DocumentValue(nodes=[TextNode(leaves=[], key="0")])
    selection = Range.collapsed(Point("0"))
    session.dispatch(Update(value=value, selection=selection))
    assert session.value is value
    assert session.selection == selection
    assert session.document_changed is True


def test_update_with_same_value_is_not_a_change(session: EditorSession) -> None:
    session.dispatch(Update(value=session.value))
    assert session.document_changed is False


def test_dispatch_accepts_session_as_dispatcher(session: EditorSession) -> None:
    """Collaborators receive the bound ``dispatch`` method."""
    dispatch = session.dispatch
    dispatch(Focus())
    assert session.is_focused is True


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"type": "focus"}, Focus()),
        ({"type": "toggleMark", "mark": "italic"}, ToggleMark(mark=MarkType.ITALIC)),
        ({"type": "setTextStyle", "styleId": "s-1"}, SetTextStyle(style_id="s-1")),
        ({"type": "moveToAnchor"}, MoveToAnchor()),
    ],
)
def test_parse_action(payload: dict[str, str], expected: object) -> None:
    assert parse_action(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [{"type": "update"}, {"type": "setTextStyle"}, {"kind": "focus"}],
)
def test_parse_action_rejects_unknown_payloads(payload: dict[str, str]) -> None:
    with pytest.raises(ValueError, match="Cannot decode editor action"):
        parse_action(payload)


def test_replace_web_data_keeps_unchanged_collections(session: EditorSession) -> None:
    colors = list(session.color_values)
    session.replace_web_data(styles=[Style(id="only", name="only", is_text=True)])
    assert session.color_values == colors
    assert [style.id for style in session.text_styles()] == ["only"]
