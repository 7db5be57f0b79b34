"""Shared snapshot fixtures for the page editor test-suite.

The ``snapshot_payload`` fixture mirrors the editor query result: a small
catalog (``View`` and ``Text`` components) and a page whose root view holds
two paragraphs, each a ``Text`` component wrapping one text node. Three
styles cover plain text, a heading that spreads the text style, and a
non-text box style.
"""

from __future__ import annotations

import copy
import typing as typ

import pytest

from page_editor.snapshot import parse_snapshot

if typ.TYPE_CHECKING:
    from page_editor.snapshot import Snapshot

SNAPSHOT_PAYLOAD: dict[str, typ.Any] = {
    "components": [
        {"id": "c-view", "name": "View", "type": "VIEW", "props": []},
        {
            "id": "c-text",
            "name": "Text",
            "type": "BLOCK",
            "props": [{"id": "p-style", "name": "style", "type": "STYLE"}],
        },
    ],
    "page": {
        "id": "page-1",
        "title": "Home",
        "draftTitle": "Home (draft)",
        "element": {"id": "root"},
        "web": {
            "borderValues": [
                {"id": "b-1", "name": "hairline", "unit": "POINT", "value": 1}
            ],
            "colorValues": [
                {"id": "col-ink", "name": "ink", "r": 10, "g": 20, "b": 30},
                {"id": "col-veil", "name": "veil", "r": 0, "g": 0, "b": 0, "a": 0.5},
            ],
            "dimensionValues": [
                {"id": "d-pad", "name": "pad", "unit": "POINT", "value": 8},
                {"id": "d-half", "name": "half", "unit": "PERCENTAGE", "value": 50},
                {"id": "d-auto", "name": "auto", "unit": "KEYWORD", "value": 1},
            ],
            "styles": [
                {
                    "id": "s-text",
                    "name": "text",
                    "isText": True,
                    "spreadStyles": [],
                    "fontSize": 16,
                    "color": {"id": "col-ink"},
                },
                {
                    "id": "s-heading",
                    "name": "heading",
                    "isText": False,
                    "spreadStyles": [{"index": 0, "style": {"id": "s-text"}}],
                    "fontWeight": "BOLD",
                    "fontSize": 32,
                },
                {
                    "id": "s-box",
                    "name": "box",
                    "isText": False,
                    "spreadStyles": [],
                    "flexDirection": "ROW_REVERSE",
                    "padding": {"id": "d-pad"},
                    "width": {"id": "d-half"},
                    "backgroundColor": {"id": "col-veil"},
                    "borderWidth": {"id": "b-1"},
                },
            ],
            "elements": [
                {
                    "id": "root",
                    "type": "COMPONENT",
                    "index": 0,
                    "component": {"id": "c-view"},
                    "children": [{"id": "p2"}, {"id": "p1"}],
                    "props": [
                        {
                            "id": "root-style",
                            "name": "style",
                            "type": "STYLE",
                            "valueStyle": {"id": "s-box"},
                        }
                    ],
                },
                {
                    "id": "p1",
                    "type": "COMPONENT",
                    "index": 0,
                    "component": {"id": "c-text"},
                    "children": [{"id": "t1"}],
                    "props": [
                        {
                            "id": "p1-style",
                            "name": "style",
                            "type": "STYLE",
                            "valueStyle": {"id": "s-heading"},
                        }
                    ],
                },
                {
                    "id": "p2",
                    "type": "COMPONENT",
                    "index": 1,
                    "component": {"id": "c-text"},
                    "children": [{"id": "t2"}],
                    "props": [
                        {
                            "id": "p2-style",
                            "name": "style",
                            "type": "STYLE",
                            "valueStyle": {"id": "s-text"},
                        },
                        {
                            "id": "p2-lines",
                            "name": "numberOfLines",
                            "type": "INT",
                            "value": 2,
                        },
                    ],
                },
                {
                    "id": "t1",
                    "type": "TEXT_NODE",
                    "index": 0,
                    "textLeaves": [{"text": "Title", "marks": []}],
                },
                {
                    "id": "t2",
                    "type": "TEXT_NODE",
                    "index": 0,
                    "textLeaves": [{"text": "Body copy", "marks": []}],
                },
            ],
        },
    },
}


@pytest.fixture
def snapshot_payload() -> dict[str, typ.Any]:
    """Return a fresh, mutable copy of the sample snapshot payload."""
    return copy.deepcopy(SNAPSHOT_PAYLOAD)


@pytest.fixture
def snapshot(snapshot_payload: dict[str, typ.Any]) -> Snapshot:
    """Return the sample payload parsed into dataclasses."""
    return parse_snapshot(snapshot_payload)
