"""Typed dataclasses describing the relational design-data snapshot."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class SnapshotError(ValueError):
    """Raised when raw snapshot data does not match the expected shape."""


class ElementType(enum.StrEnum):
    """Tag selecting which variant an element record carries."""

    COMPONENT = "COMPONENT"
    TEXT_NODE = "TEXT_NODE"
    SHARED = "SHARED"


class BorderUnit(enum.StrEnum):
    """Units accepted by border values."""

    POINT = "POINT"


class DimensionUnit(enum.StrEnum):
    """Units accepted by dimension values."""

    POINT = "POINT"
    PERCENTAGE = "PERCENTAGE"
    KEYWORD = "KEYWORD"


@dc.dataclass(slots=True, frozen=True)
class PropSchema:
    """A prop declared by a catalog component."""

    id: str
    name: str
    type: str


@dc.dataclass(slots=True, frozen=True)
class Component:
    """Catalog entry used to pick a renderer for component elements."""

    id: str
    name: str
    kind: str
    props_schema: tuple[PropSchema, ...] = ()


@dc.dataclass(slots=True)
class ElementProp:
    """A prop value stored on a component element.

    Style-typed props reference a style through ``value_style``; every other
    prop carries a literal ``value``.
    """

    id: str
    name: str
    type: str
    value: typ.Any = None
    value_style: str | None = None

    def is_style(self, marker: str = "STYLE") -> bool:
        """Return True when the prop type tag denotes a style reference."""
        return marker in self.type


@dc.dataclass(slots=True)
class Element:
    """One record of the flat element list.

    Only the fields belonging to ``type`` are populated; the others stay
    ``None``.
    """

    id: str
    type: ElementType
    index: int = 0
    component: str | None = None
    children: list[str] | None = None
    props: list[ElementProp] | None = None
    text_leaves: list[dict[str, typ.Any]] | None = None


@dc.dataclass(slots=True, frozen=True)
class BorderValue:
    """Border width or radius value."""

    id: str
    unit: BorderUnit
    value: float
    name: str | None = None


@dc.dataclass(slots=True, frozen=True)
class ColorValue:
    """RGB color value with optional alpha."""

    id: str
    r: int
    g: int
    b: int
    a: float | None = None
    name: str | None = None


@dc.dataclass(slots=True, frozen=True)
class DimensionValue:
    """Size, offset, margin or padding value."""

    id: str
    unit: DimensionUnit
    value: float
    name: str | None = None


@dc.dataclass(slots=True, frozen=True)
class SpreadStyle:
    """Position at which another style is spread into the owning style."""

    index: int
    style: str


@dc.dataclass(slots=True, frozen=True)
class Style:
    """A style record with its optional presentational fields.

    Enum-like fields hold the raw upper-case tag. Border, color and dimension
    fields hold the id of the referenced value record.
    """

    id: str
    name: str
    is_text: bool = False
    spread_styles: tuple[SpreadStyle, ...] | None = ()
    # enum-like
    display: str | None = None
    position: str | None = None
    flex_direction: str | None = None
    flex_wrap: str | None = None
    justify_content: str | None = None
    align_items: str | None = None
    align_self: str | None = None
    align_content: str | None = None
    overflow: str | None = None
    direction: str | None = None
    font_style: str | None = None
    font_weight: str | None = None
    font_variant: str | None = None
    text_align: str | None = None
    text_align_vertical: str | None = None
    text_decoration_line: str | None = None
    text_transform: str | None = None
    border_style: str | None = None
    # scalars
    flex: float | None = None
    flex_grow: float | None = None
    flex_shrink: float | None = None
    flex_basis: float | None = None
    z_index: int | None = None
    opacity: float | None = None
    font_family: str | None = None
    font_size: float | None = None
    letter_spacing: float | None = None
    line_height: float | None = None
    # border value references
    border_radius: str | None = None
    border_bottom_end_radius: str | None = None
    border_bottom_left_radius: str | None = None
    border_bottom_right_radius: str | None = None
    border_bottom_start_radius: str | None = None
    border_top_end_radius: str | None = None
    border_top_left_radius: str | None = None
    border_top_right_radius: str | None = None
    border_top_start_radius: str | None = None
    border_width: str | None = None
    border_bottom_width: str | None = None
    border_end_width: str | None = None
    border_left_width: str | None = None
    border_right_width: str | None = None
    border_start_width: str | None = None
    border_top_width: str | None = None
    # color value references
    color: str | None = None
    background_color: str | None = None
    border_color: str | None = None
    border_bottom_color: str | None = None
    border_end_color: str | None = None
    border_left_color: str | None = None
    border_right_color: str | None = None
    border_start_color: str | None = None
    border_top_color: str | None = None
    # dimension value references
    width: str | None = None
    height: str | None = None
    bottom: str | None = None
    end: str | None = None
    left: str | None = None
    right: str | None = None
    start: str | None = None
    top: str | None = None
    min_width: str | None = None
    max_width: str | None = None
    min_height: str | None = None
    max_height: str | None = None
    margin: str | None = None
    margin_bottom: str | None = None
    margin_end: str | None = None
    margin_horizontal: str | None = None
    margin_left: str | None = None
    margin_right: str | None = None
    margin_start: str | None = None
    margin_top: str | None = None
    margin_vertical: str | None = None
    padding: str | None = None
    padding_bottom: str | None = None
    padding_end: str | None = None
    padding_horizontal: str | None = None
    padding_left: str | None = None
    padding_right: str | None = None
    padding_start: str | None = None
    padding_top: str | None = None
    padding_vertical: str | None = None


@dc.dataclass(slots=True)
class WebData:
    """Collections published for a page's web target.

    Any collection may be ``None`` when the backend schema changed under the
    client; such snapshots are treated as incomplete.
    """

    border_values: list[BorderValue] | None = None
    color_values: list[ColorValue] | None = None
    dimension_values: list[DimensionValue] | None = None
    styles: list[Style] | None = None
    elements: list[Element] | None = None

    @property
    def is_complete(self) -> bool:
        """Return True when every collection is present."""
        return None not in (
            self.border_values,
            self.color_values,
            self.dimension_values,
            self.styles,
            self.elements,
        )


@dc.dataclass(slots=True)
class Page:
    """The page being edited and the root element of its content."""

    id: str
    element_id: str
    web: WebData
    title: str | None = None
    draft_title: str | None = None


@dc.dataclass(slots=True)
class Snapshot:
    """Everything the editor needs, as delivered by the data layer."""

    components: list[Component]
    page: Page | None = None

    @property
    def is_complete(self) -> bool:
        """Return True when the page and all of its web collections exist."""
        return self.page is not None and self.page.web.is_complete


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
]
