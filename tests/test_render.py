"""Tests for component prop resolution and mark rendering."""

from __future__ import annotations

import pytest

from page_editor.document import ComponentNode, NodeData, TextNode
from page_editor.errors import ExhaustivenessError, UnknownReferenceError
from page_editor.render import (
    ComponentRenderer,
    MarkType,
    render_mark,
    resolve_component_props,
)
from page_editor.snapshot import Component, ElementProp
from page_editor.styles import ResolvedStyleEntry, freeze_bag

SHEETS = {
    "s-text": ResolvedStyleEntry(
        name="text",
        is_text=True,
        fragments=(freeze_bag({"fontSize": 16}), freeze_bag({"color": "red"})),
    )
}
COMPONENTS = {
    "c-text": Component(id="c-text", name="Text", kind="BLOCK"),
    "c-image": Component(id="c-image", name="Image", kind="VOID"),
}


def _node(type_id: str, *props: ElementProp) -> ComponentNode:
    return ComponentNode(
        object_kind="block",
        type_id=type_id,
        children=[TextNode(leaves=[{"text": "hi", "marks": []}], key="1")],
        data=NodeData(id="el", props={prop.name: prop for prop in props}),
        key="0",
    )


def test_style_props_resolve_to_fragments() -> None:
    props = {
        "style": ElementProp(id="p1", name="style", type="STYLE", value_style="s-text"),
        "numberOfLines": ElementProp(id="p2", name="numberOfLines", type="INT", value=3),
    }
    resolved = resolve_component_props(props, SHEETS)
    assert resolved == {
        "style": [{"fontSize": 16}, {"color": "red"}],
        "numberOfLines": 3,
    }


def test_style_marker_is_matched_by_containment() -> None:
    """Any prop type containing the marker is treated as a style reference."""
    props = {
        "containerStyle": ElementProp(
            id="p", name="containerStyle", type="LIST_STYLE", value_style="s-text"
        )
    }
    assert resolve_component_props(props, SHEETS)["containerStyle"] == [
        {"fontSize": 16},
        {"color": "red"},
    ]


def test_custom_marker_changes_detection() -> None:
    props = {"style": ElementProp(id="p", name="style", type="STYLE", value="raw")}
    assert resolve_component_props(props, SHEETS, marker="LOOK") == {"style": "raw"}


def test_unknown_style_reference_is_rejected() -> None:
    props = {
        "style": ElementProp(id="p", name="style", type="STYLE", value_style="nope")
    }
    with pytest.raises(UnknownReferenceError, match="'nope'"):
        resolve_component_props(props, SHEETS)


def test_renderer_resolves_supported_component() -> None:
    renderer = ComponentRenderer(COMPONENTS, SHEETS)
    node = _node(
        "c-text", ElementProp(id="p", name="style", type="STYLE", value_style="s-text")
    )
    rendered = renderer.render_node(node)
    assert rendered.component == "Text"
    assert rendered.props == {"style": [{"fontSize": 16}, {"color": "red"}]}
    assert rendered.children is node.children


def test_renderer_rejects_unsupported_component() -> None:
    renderer = ComponentRenderer(COMPONENTS, SHEETS)
    with pytest.raises(UnknownReferenceError, match="'Image'"):
        renderer.render_node(_node("c-image"))


def test_renderer_honours_configured_components() -> None:
    renderer = ComponentRenderer(COMPONENTS, SHEETS, supported=("Image",))
    assert renderer.render_node(_node("c-image")).component == "Image"


def test_renderer_rejects_component_missing_from_catalog() -> None:
    renderer = ComponentRenderer(COMPONENTS, SHEETS)
    with pytest.raises(UnknownReferenceError, match="'c-ghost'"):
        renderer.render_node(_node("c-ghost"))


@pytest.mark.parametrize(
    ("mark", "expected"),
    [
        (MarkType.BOLD, {"fontWeight": "bold"}),
        ("bold", {"fontWeight": "bold"}),
        (MarkType.ITALIC, {"fontStyle": "italic"}),
    ],
)
def test_render_mark(mark: str, expected: dict[str, str]) -> None:
    assert render_mark(mark) == expected


def test_render_unknown_mark_fails() -> None:
    with pytest.raises(ExhaustivenessError, match="underline"):
        render_mark("underline")


def test_resolved_style_props_are_private_copies() -> None:
    props = {
        "style": ElementProp(id="p", name="style", type="STYLE", value_style="s-text")
    }
    first = resolve_component_props(props, SHEETS)
    first["style"][0]["fontSize"] = 99
    second = resolve_component_props(props, SHEETS)
    assert second["style"] == [{"fontSize": 16}, {"color": "red"}]
