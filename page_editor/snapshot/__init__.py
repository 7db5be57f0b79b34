"""Load and index the relational design-data snapshot.

This subpackage turns the editor query result (components plus a page with
its flat border, color, dimension, style and element lists) into strongly
typed dataclasses and provides :func:`build_index`, which every later stage
uses to look records up by id.

Examples
--------
>>> from page_editor.snapshot import build_index, parse_snapshot
>>> snapshot = parse_snapshot({"components": [], "page": None})
>>> snapshot.is_complete
False
>>> build_index(snapshot.components)
{}
"""

from .helpers import build_index
from .loader import load_snapshot, parse_snapshot
from .models import (
    BorderUnit,
    BorderValue,
    ColorValue,
    Component,
    DimensionUnit,
    DimensionValue,
    Element,
    ElementProp,
    ElementType,
    Page,
    PropSchema,
    Snapshot,
    SnapshotError,
    SpreadStyle,
    Style,
    WebData,
)

__all__ = [
    "BorderUnit",
    "BorderValue",
    "ColorValue",
    "Component",
    "DimensionUnit",
    "DimensionValue",
    "Element",
    "ElementProp",
    "ElementType",
    "Page",
    "PropSchema",
    "Snapshot",
    "SnapshotError",
    "SpreadStyle",
    "Style",
    "WebData",
    "build_index",
    "load_snapshot",
    "parse_snapshot",
]
