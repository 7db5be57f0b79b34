"""Assemble and edit the hierarchical content document."""

from .assembler import assemble_document, build_document_value
from .models import ComponentNode, DocumentNode, DocumentValue, NodeData, TextNode
from .selection import (
    STYLE_PROP_NAME,
    Point,
    Range,
    block_style_id,
    is_hanging,
    leaf_blocks_at_range,
    range_edges,
    set_blocks_at_range,
    set_text_style,
    texts_at_range,
    toggle_mark,
)

__all__ = [
    "STYLE_PROP_NAME",
    "ComponentNode",
    "DocumentNode",
    "DocumentValue",
    "NodeData",
    "Point",
    "Range",
    "TextNode",
    "assemble_document",
    "block_style_id",
    "build_document_value",
    "is_hanging",
    "leaf_blocks_at_range",
    "range_edges",
    "set_blocks_at_range",
    "set_text_style",
    "texts_at_range",
    "toggle_mark",
]
