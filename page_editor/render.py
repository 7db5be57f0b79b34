"""Resolve component nodes and text marks into renderer inputs.

The renderer itself lives outside this package; it calls
:meth:`ComponentRenderer.render_node` for every component node and
:func:`render_mark` for every mark on a text leaf.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import DEFAULT_STYLE_PROP_MARKER, DEFAULT_SUPPORTED_COMPONENTS
from .errors import UnknownReferenceError, assert_never

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .document.models import ComponentNode, DocumentNode
    from .snapshot.models import Component, ElementProp
    from .styles.models import PropertyBag, ResolvedStyleEntry


class MarkType(enum.StrEnum):
    """Text marks the editor can apply."""

    BOLD = "bold"
    ITALIC = "italic"


def render_mark(mark: MarkType | str) -> PropertyBag:
    """Return the style bag applied to text carrying ``mark``."""
    match mark:
        case MarkType.BOLD:
            return {"fontWeight": "bold"}
        case MarkType.ITALIC:
            return {"fontStyle": "italic"}
        case _:
            assert_never(mark)


def resolve_component_props(
    props: cabc.Mapping[str, ElementProp],
    style_sheets: cabc.Mapping[str, ResolvedStyleEntry],
    *,
    marker: str = DEFAULT_STYLE_PROP_MARKER,
) -> dict[str, typ.Any]:
    """Resolve a node's props into final values.

    Style-typed props (type tag containing ``marker``) become the fragment
    list of the referenced style sheet; every other prop passes its literal
    value through.

    Raises
    ------
    UnknownReferenceError
        If a style prop references a style that has no sheet.
    """
    resolved: dict[str, typ.Any] = {}
    for name, prop in props.items():
        if not prop.is_style(marker):
            resolved[name] = prop.value
            continue
        sheet = style_sheets.get(prop.value_style or "")
        if sheet is None:
            msg = f"Prop '{name}' references unknown style {prop.value_style!r}."
            raise UnknownReferenceError(msg)
        resolved[name] = sheet.style()
    return resolved


@dc.dataclass(slots=True)
class RenderedNode:
    """What the host renderer needs to draw one component node."""

    component: str
    props: dict[str, typ.Any]
    children: list[DocumentNode]


class ComponentRenderer:
    """Map component nodes onto the fixed set of supported components."""

    def __init__(
        self,
        components_by_id: cabc.Mapping[str, Component],
        style_sheets: cabc.Mapping[str, ResolvedStyleEntry],
        *,
        supported: cabc.Collection[str] = DEFAULT_SUPPORTED_COMPONENTS,
        marker: str = DEFAULT_STYLE_PROP_MARKER,
    ) -> None:
        self.components_by_id = components_by_id
        self.style_sheets = style_sheets
        self.supported = frozenset(supported)
        self.marker = marker

    def render_node(self, node: ComponentNode) -> RenderedNode:
        """Resolve ``node`` for rendering.

        Raises
        ------
        UnknownReferenceError
            If the node's component is missing from the catalog or is not one
            of the supported components.
        """
        component = self.components_by_id.get(node.type_id)
        if component is None:
            msg = f"Unknown component {node.type_id!r}."
            raise UnknownReferenceError(msg)
        if component.name not in self.supported:
            msg = f"Unknown component {component.name!r}."
            raise UnknownReferenceError(msg)
        return RenderedNode(
            component=component.name,
            props=resolve_component_props(
                node.data.props, self.style_sheets, marker=self.marker
            ),
            children=node.children,
        )


__all__ = [
    "ComponentRenderer",
    "MarkType",
    "RenderedNode",
    "render_mark",
    "resolve_component_props",
]
