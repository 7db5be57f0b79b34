"""Build, cache and query resolved style sheets for a page."""

from __future__ import annotations

import contextlib
import dataclasses as dc
import locale
import logging
import types
import typing as typ

from ..snapshot.helpers import build_index
from .cascade import resolve_all_styles
from .compiler import compile_style_bodies
from .values import resolve_borders, resolve_colors, resolve_dimensions

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import BorderValue, ColorValue, DimensionValue, Style
    from .models import FrozenPropertyBag, ResolvedStyleEntry

logger = logging.getLogger(__name__)


def build_style_sheets(
    styles: cabc.Sequence[Style],
    border_values: cabc.Iterable[BorderValue],
    color_values: cabc.Iterable[ColorValue],
    dimension_values: cabc.Iterable[DimensionValue],
) -> dict[str, ResolvedStyleEntry]:
    """Run the full style pipeline: primitives, own bags, then cascades.

    Examples
    --------
    >>> from page_editor.snapshot import Style
    >>> styles = [Style(id="s", name="text", display="FLEX")]
    >>> sheets = build_style_sheets(styles, [], [], [])
    >>> sheets["s"].style()
    [{'display': 'flex'}]
    """
    bodies = compile_style_bodies(
        styles,
        resolve_borders(border_values),
        resolve_colors(color_values),
        resolve_dimensions(dimension_values),
    )
    return resolve_all_styles(styles, bodies, build_index(styles))


class StyleSheetCache:
    """Recompute style sheets only when their inputs change.

    The cache key is the content of the four input collections, so passing
    an equal copy of the same records is a hit while any edited, added or
    removed record forces a full recomputation. The returned mapping is
    read-only and shared between hits.
    """

    def __init__(self) -> None:
        self._key: tuple[tuple[typ.Any, ...], ...] | None = None
        self._sheets: cabc.Mapping[str, ResolvedStyleEntry] | None = None
        self.hits = 0
        self.misses = 0

    def get(
        self,
        styles: cabc.Sequence[Style],
        border_values: cabc.Sequence[BorderValue],
        color_values: cabc.Sequence[ColorValue],
        dimension_values: cabc.Sequence[DimensionValue],
    ) -> cabc.Mapping[str, ResolvedStyleEntry]:
        """Return the style sheets for the given collections."""
        key = (
            tuple(styles),
            tuple(border_values),
            tuple(color_values),
            tuple(dimension_values),
        )
        if self._sheets is not None and key == self._key:
            self.hits += 1
            logger.debug("style sheet cache hit")
            return self._sheets
        self.misses += 1
        logger.debug("style sheet cache miss; rebuilding %d styles", len(styles))
        self._sheets = types.MappingProxyType(build_style_sheets(*key))
        self._key = key
        return self._sheets

    def clear(self) -> None:
        """Drop the cached sheets."""
        self._key = None
        self._sheets = None


@dc.dataclass(slots=True)
class TextStyle:
    """A style sheet that may be applied to text blocks."""

    id: str
    name: str
    is_text: bool
    style: tuple[FrozenPropertyBag, ...]


@contextlib.contextmanager
def _collation(locale_name: str | None) -> cabc.Iterator[None]:
    """Use ``locale_name`` for string collation inside the block."""
    if not locale_name:
        yield
        return
    previous = locale.setlocale(locale.LC_COLLATE)
    locale.setlocale(locale.LC_COLLATE, locale_name)
    try:
        yield
    finally:
        locale.setlocale(locale.LC_COLLATE, previous)


def text_styles(
    sheets: cabc.Mapping[str, ResolvedStyleEntry], *, sort_locale: str | None = None
) -> list[TextStyle]:
    """Return text style sheets ordered by name using locale collation.

    Parameters
    ----------
    sheets : Mapping[str, ResolvedStyleEntry]
        Resolved style sheets keyed by style id.
    sort_locale : str or None, optional
        Collation locale for the ordering. The process locale is used when
        omitted and is restored after sorting otherwise.

    Raises
    ------
    locale.Error
        If ``sort_locale`` is not available on this system.
    """
    entries = [
        TextStyle(
            id=style_id, name=entry.name, is_text=entry.is_text, style=entry.fragments
        )
        for style_id, entry in sheets.items()
        if entry.is_text
    ]
    with _collation(sort_locale):
        return sorted(entries, key=lambda entry: locale.strxfrm(entry.name))


__all__ = [
    "StyleSheetCache",
    "TextStyle",
    "build_style_sheets",
    "text_styles",
]
