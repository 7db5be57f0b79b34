"""Expand spread styles into ordered fragment sequences.

A style may spread other styles into itself. Resolving a style walks those
spreads recursively, in ascending ``index`` order, and yields every spread
style's fragments followed by the style's own compiled bag. The ``is_text``
flag is inherited upwards: a style is a text style when it, or anything
spread into it, is one.
"""

from __future__ import annotations

import logging
import typing as typ

from ..errors import CycleDetectedError, InvariantViolationError, UnknownReferenceError
from .models import CascadeResult, ResolvedStyleEntry, freeze_bag

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import Style
    from .models import PropertyBag

logger = logging.getLogger(__name__)


def resolve_style(
    style_id: str,
    styles_by_id: cabc.Mapping[str, Style],
    compiled_bodies: cabc.Mapping[str, PropertyBag],
    *,
    memo: dict[str, CascadeResult] | None = None,
    _path: tuple[str, ...] = (),
) -> CascadeResult:
    """Resolve ``style_id`` into its text flag and ordered fragments.

    Parameters
    ----------
    style_id : str
        Style to resolve.
    styles_by_id : Mapping[str, Style]
        Every style of the snapshot keyed by id.
    compiled_bodies : Mapping[str, PropertyBag]
        Own property bag of every style, from
        :func:`page_editor.styles.compiler.compile_style_bodies`.
    memo : dict[str, CascadeResult], optional
        Results already computed during the same pass. Shared sub-graphs are
        resolved once when a dict is supplied.

    Returns
    -------
    CascadeResult
        ``fragments`` lists the fragments of each spread (ascending
        ``index``, ties in record order) and ends with the style's own bag.

    Raises
    ------
    UnknownReferenceError
        If ``style_id`` or a spread target is not in ``styles_by_id``.
    InvariantViolationError
        If a style record has no ``spread_styles`` list.
    CycleDetectedError
        If the spread graph loops back to a style already being resolved.
    """
    if style_id in _path:
        raise CycleDetectedError([*_path, style_id])
    if memo is not None and style_id in memo:
        cached = memo[style_id]
        return CascadeResult(is_text=cached.is_text, fragments=list(cached.fragments))

    style = styles_by_id.get(style_id)
    if style is None:
        msg = f"Unknown style '{style_id}'."
        raise UnknownReferenceError(msg)
    if style.spread_styles is None:
        msg = f"Style '{style_id}' has no spread styles list."
        raise InvariantViolationError(msg)

    path = (*_path, style_id)
    is_text = style.is_text
    fragments: list[PropertyBag] = []
    for spread in sorted(style.spread_styles, key=lambda item: item.index):
        resolved = resolve_style(
            spread.style, styles_by_id, compiled_bodies, memo=memo, _path=path
        )
        is_text = is_text or resolved.is_text
        fragments = [*fragments, *resolved.fragments]
    result = CascadeResult(
        is_text=is_text, fragments=[*fragments, compiled_bodies[style_id]]
    )
    logger.debug(
        "resolved style %s at depth %d into %d fragments",
        style_id,
        len(_path),
        len(result.fragments),
    )
    if memo is not None:
        memo[style_id] = CascadeResult(
            is_text=is_text, fragments=list(result.fragments)
        )
    return result


def resolve_all_styles(
    styles: cabc.Sequence[Style],
    compiled_bodies: cabc.Mapping[str, PropertyBag],
    styles_by_id: cabc.Mapping[str, Style] | None = None,
) -> dict[str, ResolvedStyleEntry]:
    """Resolve every style into a :class:`ResolvedStyleEntry` keyed by id.

    Each entry holds read-only copies of its fragments, so no two entries
    share a mutable property bag.
    """
    if styles_by_id is None:
        styles_by_id = {style.id: style for style in styles}
    memo: dict[str, CascadeResult] = {}
    sheets: dict[str, ResolvedStyleEntry] = {}
    for style in styles:
        resolved = resolve_style(style.id, styles_by_id, compiled_bodies, memo=memo)
        sheets[style.id] = ResolvedStyleEntry(
            name=style.name,
            is_text=resolved.is_text,
            fragments=tuple(freeze_bag(bag) for bag in resolved.fragments),
        )
    return sheets


__all__ = ["resolve_all_styles", "resolve_style"]
