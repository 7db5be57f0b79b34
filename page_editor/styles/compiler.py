"""Compile style records into flat, render-ready property bags.

Each style field is emitted only when the record sets it. Enum-like tags are
converted from the backend's ``UPPER_SNAKE`` spelling to the lower-case
spelling the renderer expects, and fields that reference border, color or
dimension values are replaced with the resolved scalar.
"""

from __future__ import annotations

import enum
import logging
import typing as typ

from ..errors import assert_never
from ..snapshot.helpers import _to_snake
from .values import AUTO_KEYWORD

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import Style
    from .models import PropertyBag

logger = logging.getLogger(__name__)

FLEX_BASIS_AUTO_SENTINEL = -1
_FONT_WEIGHT_PREFIX = "int_"


class FieldKind(enum.Enum):
    """How a style field is converted into its property-bag value."""

    KEYWORD = enum.auto()
    HYPHENATED = enum.auto()
    FONT_WEIGHT = enum.auto()
    SCALAR = enum.auto()
    FLEX_BASIS = enum.auto()
    BORDER = enum.auto()
    COLOR = enum.auto()
    DIMENSION = enum.auto()


def _fields(kind: FieldKind, *keys: str) -> tuple[tuple[str, FieldKind], ...]:
    return tuple((key, kind) for key in keys)


STYLE_FIELDS: tuple[tuple[str, FieldKind], ...] = (
    *_fields(FieldKind.KEYWORD, "display", "position"),
    *_fields(
        FieldKind.HYPHENATED,
        "flexDirection",
        "flexWrap",
        "justifyContent",
        "alignItems",
        "alignSelf",
        "alignContent",
    ),
    *_fields(FieldKind.KEYWORD, "overflow"),
    *_fields(FieldKind.SCALAR, "flex", "flexGrow", "flexShrink"),
    *_fields(FieldKind.FLEX_BASIS, "flexBasis"),
    *_fields(FieldKind.SCALAR, "zIndex"),
    *_fields(FieldKind.KEYWORD, "direction"),
    *_fields(FieldKind.SCALAR, "opacity", "fontFamily", "fontSize"),
    *_fields(FieldKind.KEYWORD, "fontStyle"),
    *_fields(FieldKind.FONT_WEIGHT, "fontWeight"),
    *_fields(FieldKind.HYPHENATED, "fontVariant"),
    *_fields(FieldKind.SCALAR, "letterSpacing", "lineHeight"),
    *_fields(FieldKind.KEYWORD, "textAlign", "textAlignVertical"),
    *_fields(FieldKind.HYPHENATED, "textDecorationLine"),
    *_fields(FieldKind.KEYWORD, "textTransform", "borderStyle"),
    *_fields(
        FieldKind.BORDER,
        "borderRadius",
        "borderBottomEndRadius",
        "borderBottomLeftRadius",
        "borderBottomRightRadius",
        "borderBottomStartRadius",
        "borderTopEndRadius",
        "borderTopLeftRadius",
        "borderTopRightRadius",
        "borderTopStartRadius",
        "borderWidth",
        "borderBottomWidth",
        "borderEndWidth",
        "borderLeftWidth",
        "borderRightWidth",
        "borderStartWidth",
        "borderTopWidth",
    ),
    *_fields(
        FieldKind.COLOR,
        "color",
        "backgroundColor",
        "borderColor",
        "borderBottomColor",
        "borderEndColor",
        "borderLeftColor",
        "borderRightColor",
        "borderStartColor",
        "borderTopColor",
    ),
    *_fields(
        FieldKind.DIMENSION,
        "width",
        "height",
        "bottom",
        "end",
        "left",
        "right",
        "start",
        "top",
        "minWidth",
        "maxWidth",
        "minHeight",
        "maxHeight",
        "margin",
        "marginBottom",
        "marginEnd",
        "marginHorizontal",
        "marginLeft",
        "marginRight",
        "marginStart",
        "marginTop",
        "marginVertical",
        "padding",
        "paddingBottom",
        "paddingEnd",
        "paddingHorizontal",
        "paddingLeft",
        "paddingRight",
        "paddingStart",
        "paddingTop",
        "paddingVertical",
    ),
)

_ATTRIBUTES: dict[str, str] = {key: _to_snake(key) for key, _kind in STYLE_FIELDS}


def _lookup(
    values: cabc.Mapping[str, typ.Any], ref: str, *, style: Style, key: str
) -> typ.Any:
    """Return the resolved value for ``ref``; dangling ids yield ``None``."""
    if ref not in values:
        logger.debug("style %s: %s references unknown value %s", style.id, key, ref)
    return values.get(ref)


def compile_style_body(
    style: Style,
    borders: cabc.Mapping[str, float],
    colors: cabc.Mapping[str, str],
    dimensions: cabc.Mapping[str, float | str],
) -> PropertyBag:
    """Compile one style record into its own property bag.

    Parameters
    ----------
    style : Style
        The style record; only fields set on it are emitted.
    borders, colors, dimensions : Mapping
        Resolved primitive values keyed by value id, as produced by
        :mod:`page_editor.styles.values`.

    Returns
    -------
    PropertyBag
        camelCase property names mapped to resolved values. A field whose
        referenced value id is unknown is kept with the value ``None``.
    """
    bag: PropertyBag = {}
    for key, kind in STYLE_FIELDS:
        raw = getattr(style, _ATTRIBUTES[key])
        if raw is None:
            continue
        match kind:
            case FieldKind.KEYWORD:
                bag[key] = str(raw).lower()
            case FieldKind.HYPHENATED:
                bag[key] = str(raw).lower().replace("_", "-", 1)
            case FieldKind.FONT_WEIGHT:
                bag[key] = str(raw).lower().removeprefix(_FONT_WEIGHT_PREFIX)
            case FieldKind.SCALAR:
                bag[key] = raw
            case FieldKind.FLEX_BASIS:
                bag[key] = AUTO_KEYWORD if raw == FLEX_BASIS_AUTO_SENTINEL else raw
            case FieldKind.BORDER:
                bag[key] = _lookup(borders, raw, style=style, key=key)
            case FieldKind.COLOR:
                bag[key] = _lookup(colors, raw, style=style, key=key)
            case FieldKind.DIMENSION:
                bag[key] = _lookup(dimensions, raw, style=style, key=key)
            case _:
                assert_never(kind)
    return bag


def compile_style_bodies(
    styles: cabc.Iterable[Style],
    borders: cabc.Mapping[str, float],
    colors: cabc.Mapping[str, str],
    dimensions: cabc.Mapping[str, float | str],
) -> dict[str, PropertyBag]:
    """Compile every style into its own property bag, keyed by style id."""
    bodies = {
        style.id: compile_style_body(style, borders, colors, dimensions)
        for style in styles
    }
    logger.debug("compiled %d style bodies", len(bodies))
    return bodies


__all__ = [
    "FLEX_BASIS_AUTO_SENTINEL",
    "STYLE_FIELDS",
    "FieldKind",
    "compile_style_bodies",
    "compile_style_body",
]
