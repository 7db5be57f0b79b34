"""Resolve border, color and dimension records into style-ready scalars."""

from __future__ import annotations

import logging
import typing as typ

from ..errors import assert_never
from ..snapshot.models import BorderUnit, DimensionUnit

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import BorderValue, ColorValue, DimensionValue

logger = logging.getLogger(__name__)

AUTO_KEYWORD = "auto"
_KEYWORD_AUTO_VALUE = 1


def _format_number(value: float) -> str:
    """Render ``value`` the way style strings expect (``50`` not ``50.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_borders(values: cabc.Iterable[BorderValue]) -> dict[str, float]:
    """Map border value ids to their point widths."""
    borders: dict[str, float] = {}
    for border in values:
        match border.unit:
            case BorderUnit.POINT:
                borders[border.id] = border.value
            case _:
                assert_never(border.unit)
    return borders


def resolve_colors(values: cabc.Iterable[ColorValue]) -> dict[str, str]:
    """Map color value ids to ``rgb(...)`` strings.

    The alpha channel is appended as a fourth argument only when present.

    Examples
    --------
    >>> from page_editor.snapshot import ColorValue
    >>> resolve_colors([ColorValue(id="c", r=1, g=2, b=3, a=0.5)])
    {'c': 'rgb(1, 2, 3, 0.5)'}
    """
    colors: dict[str, str] = {}
    for color in values:
        channels = [color.r, color.g, color.b]
        if color.a is not None:
            channels.append(color.a)
        colors[color.id] = "rgb({})".format(
            ", ".join(_format_number(channel) for channel in channels)
        )
    return colors


def resolve_dimensions(
    values: cabc.Iterable[DimensionValue],
) -> dict[str, float | str]:
    """Map dimension value ids to points, percentages or ``"auto"``.

    Parameters
    ----------
    values : Iterable[DimensionValue]
        Dimension records from the page snapshot.

    Returns
    -------
    dict[str, float | str]
        ``POINT`` values map to the number itself, ``PERCENTAGE`` values to a
        ``"<value>%"`` string. ``KEYWORD`` values map to ``"auto"`` when their
        value is ``1``; any other keyword is left out of the mapping entirely.
    """
    dimensions: dict[str, float | str] = {}
    for dimension in values:
        match dimension.unit:
            case DimensionUnit.POINT:
                dimensions[dimension.id] = dimension.value
            case DimensionUnit.PERCENTAGE:
                dimensions[dimension.id] = f"{_format_number(dimension.value)}%"
            case DimensionUnit.KEYWORD:
                if dimension.value != _KEYWORD_AUTO_VALUE:
                    logger.debug(
                        "skipping keyword dimension %s with value %r",
                        dimension.id,
                        dimension.value,
                    )
                    continue
                dimensions[dimension.id] = AUTO_KEYWORD
            case _:
                assert_never(dimension.unit)
    return dimensions


__all__ = ["AUTO_KEYWORD", "resolve_borders", "resolve_colors", "resolve_dimensions"]
