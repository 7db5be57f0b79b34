"""Load relational design-data snapshots into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import typing as typ

from ruamel.yaml import YAML

from .helpers import _optional_str, _ref_id, _require, _to_camel
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

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_STYLE_HEADER_FIELDS = frozenset({"id", "name", "is_text", "spread_styles"})
_STYLE_BODY_FIELDS: tuple[str, ...] = tuple(
    field.name for field in dc.fields(Style) if field.name not in _STYLE_HEADER_FIELDS
)


def load_snapshot(path: Path) -> Snapshot:
    """Load a snapshot file exported from the data layer.

    Parameters
    ----------
    path : Path
        YAML or JSON file shaped like the editor query result: a
        ``components`` list and a ``page`` mapping whose ``web`` entry holds
        the border, color, dimension, style and element lists.

    Returns
    -------
    Snapshot
        Parsed snapshot. ``Snapshot.is_complete`` reports whether any of the
        page collections were missing.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    SnapshotError
        If the document is not a mapping or a record lacks a required field.
    YAMLError
        If the content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from page_editor.snapshot import load_snapshot
    >>> snapshot = load_snapshot(Path("snapshot.json"))  # doctest: +SKIP
    >>> snapshot.page.element_id  # doctest: +SKIP
    'root'
    """
    if not path.exists():
        msg = f"Snapshot file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level snapshot structure must be a mapping."
        raise SnapshotError(msg)
    return parse_snapshot(loaded)


def parse_snapshot(payload: cabc.Mapping[str, typ.Any]) -> Snapshot:
    """Build a :class:`Snapshot` from an already decoded mapping."""
    components = [_build_component(entry) for entry in payload.get("components") or []]
    page_raw = payload.get("page")
    page = _build_page(page_raw) if page_raw is not None else None
    snapshot = Snapshot(components=components, page=page)
    logger.debug(
        "parsed snapshot with %d components (complete=%s)",
        len(components),
        snapshot.is_complete,
    )
    return snapshot


def _build_page(payload: cabc.Mapping[str, typ.Any]) -> Page:
    match payload:
        case {"id": page_id, "element": element, **rest}:
            pass
        case _:
            msg = "Page must be a mapping with 'id' and 'element'."
            raise SnapshotError(msg)
    element_id = _ref_id(element)
    if element_id is None:
        msg = f"Page '{page_id}' has no root element."
        raise SnapshotError(msg)
    web = rest.get("web") or {}
    return Page(
        id=str(page_id),
        element_id=element_id,
        web=WebData(
            border_values=_build_list(web.get("borderValues"), _build_border_value),
            color_values=_build_list(web.get("colorValues"), _build_color_value),
            dimension_values=_build_list(
                web.get("dimensionValues"), _build_dimension_value
            ),
            styles=_build_list(web.get("styles"), _build_style),
            elements=_build_list(web.get("elements"), _build_element),
        ),
        title=_optional_str(rest.get("title")),
        draft_title=_optional_str(rest.get("draftTitle")),
    )


RecordT = typ.TypeVar("RecordT")


def _build_list(
    entries: list[cabc.Mapping[str, typ.Any]] | None,
    builder: cabc.Callable[[cabc.Mapping[str, typ.Any]], RecordT],
) -> list[RecordT] | None:
    """Build every entry with ``builder``; ``None`` stays ``None``."""
    if entries is None:
        return None
    return [builder(entry) for entry in entries]


def _build_component(payload: cabc.Mapping[str, typ.Any]) -> Component:
    component_id = str(_require(payload, "id", "Component"))
    schema = tuple(
        PropSchema(
            id=str(_require(prop, "id", "Component prop")),
            name=str(_require(prop, "name", "Component prop")),
            type=str(_require(prop, "type", "Component prop")),
        )
        for prop in payload.get("props") or []
    )
    return Component(
        id=component_id,
        name=str(payload.get("name") or component_id),
        kind=str(_require(payload, "type", f"Component '{component_id}'")),
        props_schema=schema,
    )


def _build_border_value(payload: cabc.Mapping[str, typ.Any]) -> BorderValue:
    return BorderValue(
        id=str(_require(payload, "id", "Border value")),
        unit=_enum_member(BorderUnit, payload.get("unit"), "border unit"),
        value=_require(payload, "value", "Border value"),
        name=_optional_str(payload.get("name")),
    )


def _build_color_value(payload: cabc.Mapping[str, typ.Any]) -> ColorValue:
    return ColorValue(
        id=str(_require(payload, "id", "Color value")),
        r=_require(payload, "r", "Color value"),
        g=_require(payload, "g", "Color value"),
        b=_require(payload, "b", "Color value"),
        a=payload.get("a"),
        name=_optional_str(payload.get("name")),
    )


def _build_dimension_value(payload: cabc.Mapping[str, typ.Any]) -> DimensionValue:
    return DimensionValue(
        id=str(_require(payload, "id", "Dimension value")),
        unit=_enum_member(DimensionUnit, payload.get("unit"), "dimension unit"),
        value=_require(payload, "value", "Dimension value"),
        name=_optional_str(payload.get("name")),
    )


def _build_style(payload: cabc.Mapping[str, typ.Any]) -> Style:
    style_id = str(_require(payload, "id", "Style"))
    spreads_raw = payload.get("spreadStyles")
    spreads = (
        None
        if spreads_raw is None
        else tuple(
            SpreadStyle(
                index=int(_require(entry, "index", f"Spread of style '{style_id}'")),
                style=_ref_id(_require(entry, "style", f"Spread of style '{style_id}'")),
            )
            for entry in spreads_raw
        )
    )
    body: dict[str, typ.Any] = {}
    for attribute in _STYLE_BODY_FIELDS:
        value = payload.get(_to_camel(attribute))
        if value is None:
            continue
        body[attribute] = _ref_id(value) if isinstance(value, dict) else value
    return Style(
        id=style_id,
        name=str(payload.get("name") or ""),
        is_text=bool(payload.get("isText", False)),
        spread_styles=spreads,
        **body,
    )


def _build_element(payload: cabc.Mapping[str, typ.Any]) -> Element:
    element_id = str(_require(payload, "id", "Element"))
    element_type = _enum_member(ElementType, payload.get("type"), "element type")
    children = payload.get("children")
    props = payload.get("props")
    leaves = payload.get("textLeaves")
    return Element(
        id=element_id,
        type=element_type,
        index=int(payload.get("index") or 0),
        component=_ref_id(payload.get("component")),
        children=None if children is None else [_ref_id(child) for child in children],
        props=None if props is None else [_build_element_prop(prop) for prop in props],
        text_leaves=None if leaves is None else list(leaves),
    )


def _build_element_prop(payload: cabc.Mapping[str, typ.Any]) -> ElementProp:
    return ElementProp(
        id=str(_require(payload, "id", "Element prop")),
        name=str(_require(payload, "name", "Element prop")),
        type=str(_require(payload, "type", "Element prop")),
        value=payload.get("value"),
        value_style=_ref_id(payload.get("valueStyle")),
    )


EnumT = typ.TypeVar("EnumT", bound=enum.StrEnum)


def _enum_member(enum_cls: type[EnumT], value: object, what: str) -> EnumT:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        msg = f"Unknown {what} {value!r}; expected one of: {allowed}"
        raise SnapshotError(msg) from exc


__all__ = ["load_snapshot", "parse_snapshot"]
