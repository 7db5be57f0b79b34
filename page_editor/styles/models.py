"""Shared dataclasses produced by the style pipeline."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ

PropertyBag: typ.TypeAlias = dict[str, typ.Any]
FrozenPropertyBag: typ.TypeAlias = cabc.Mapping[str, typ.Any]


def freeze_bag(bag: cabc.Mapping[str, typ.Any]) -> FrozenPropertyBag:
    """Return a read-only copy of ``bag``.

    Examples
    --------
    >>> frozen = freeze_bag({"display": "flex"})
    >>> frozen == {"display": "flex"}
    True
    """
    return types.MappingProxyType(dict(bag))


@dc.dataclass(slots=True)
class CascadeResult:
    """Fragments and text flag produced by resolving one style's spreads."""

    is_text: bool
    fragments: list[PropertyBag]


@dc.dataclass(slots=True, frozen=True)
class ResolvedStyleEntry:
    """A style sheet ready for rendering.

    Attributes
    ----------
    name : str
        Display name of the style.
    is_text : bool
        True when the style, or any style spread into it, applies to text.
    fragments : tuple[FrozenPropertyBag, ...]
        Read-only property bags in application order: spread styles first,
        the style's own bag last.
    """

    name: str
    is_text: bool
    fragments: tuple[FrozenPropertyBag, ...]

    def style(self) -> list[PropertyBag]:
        """Return fresh mutable copies of the fragments."""
        return [dict(bag) for bag in self.fragments]

    def to_json(self) -> dict[str, typ.Any]:
        """Return the serialisable form consumed by renderers and menus."""
        return {"name": self.name, "isText": self.is_text, "style": self.style()}


__all__ = [
    "CascadeResult",
    "FrozenPropertyBag",
    "PropertyBag",
    "ResolvedStyleEntry",
    "freeze_bag",
]
