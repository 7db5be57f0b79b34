"""Range helpers for block-level updates on the document tree.

Ranges address text nodes by key and offset. Block operations act on the
leaf blocks touched by a range: the closest component node around each text
node between the range's start and end.
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import logging
import typing as typ

from ..errors import UnknownReferenceError
from ..snapshot.models import ElementProp
from .models import ComponentNode, NodeData, TextNode

if typ.TYPE_CHECKING:
    from .models import DocumentNode

logger = logging.getLogger(__name__)

STYLE_PROP_NAME = "style"

VoidPredicate: typ.TypeAlias = cabc.Callable[[ComponentNode], bool]
BlockCallback: typ.TypeAlias = cabc.Callable[[ComponentNode], NodeData]


def _never_void(_block: ComponentNode) -> bool:
    return False


@dc.dataclass(slots=True, frozen=True)
class Point:
    """A caret position: a text node key and an offset into its text."""

    key: str
    offset: int = 0


@dc.dataclass(slots=True, frozen=True)
class Range:
    """A selection between an anchor and a focus point."""

    anchor: Point
    focus: Point

    @classmethod
    def collapsed(cls, point: Point) -> Range:
        """Return a range whose anchor and focus are the same point."""
        return cls(anchor=point, focus=point)

    @property
    def is_collapsed(self) -> bool:
        return self.anchor == self.focus

    @property
    def is_expanded(self) -> bool:
        return not self.is_collapsed


class _TreeIndex:
    """Document-order positions and parent links for one tree."""

    def __init__(self, root: DocumentNode) -> None:
        self.texts: list[TextNode] = []
        self.parents: dict[str, ComponentNode] = {}
        self._visit(root)
        self.positions = {
            text.key: position for position, text in enumerate(self.texts)
        }

    def _visit(self, node: DocumentNode) -> None:
        match node:
            case ComponentNode():
                for child in node.children:
                    self.parents[child.key] = node
                    self._visit(child)
            case TextNode():
                self.texts.append(node)

    def position(self, key: str) -> int:
        try:
            return self.positions[key]
        except KeyError as exc:
            msg = f"Range points at unknown text node '{key}'."
            raise UnknownReferenceError(msg) from exc

    def ordered(self, rng: Range) -> tuple[Point, Point]:
        anchor, focus = rng.anchor, rng.focus
        backward = (self.position(focus.key), focus.offset) < (
            self.position(anchor.key),
            anchor.offset,
        )
        return (focus, anchor) if backward else (anchor, focus)

    def closest_block(self, key: str) -> ComponentNode:
        self.position(key)
        parent = self.parents.get(key)
        if parent is None:
            msg = f"Text node '{key}' has no enclosing block."
            raise UnknownReferenceError(msg)
        return parent

    def ancestors(self, key: str) -> list[ComponentNode]:
        chain: list[ComponentNode] = []
        current = key
        while current in self.parents:
            parent = self.parents[current]
            chain.append(parent)
            current = parent.key
        return chain


def range_edges(root: DocumentNode, rng: Range) -> tuple[Point, Point]:
    """Return ``(start, end)`` of ``rng`` in document order."""
    return _TreeIndex(root).ordered(rng)


def texts_at_range(root: DocumentNode, rng: Range) -> list[TextNode]:
    """Return the text nodes from the range start to its end, inclusive."""
    index = _TreeIndex(root)
    start, end = index.ordered(rng)
    return index.texts[index.position(start.key) : index.position(end.key) + 1]


def leaf_blocks_at_range(root: DocumentNode, rng: Range) -> list[ComponentNode]:
    """Return the distinct closest blocks of the texts in ``rng``, in order."""
    index = _TreeIndex(root)
    start, end = index.ordered(rng)
    blocks: dict[str, ComponentNode] = {}
    for text in index.texts[index.position(start.key) : index.position(end.key) + 1]:
        block = index.closest_block(text.key)
        blocks.setdefault(block.key, block)
    return list(blocks.values())


def is_hanging(
    root: DocumentNode, rng: Range, is_void: VoidPredicate = _never_void
) -> bool:
    """Return True when the range only grazes the start of its last block.

    A hanging range is expanded, starts and ends at offset 0, does not start
    inside a void block, and both of its edges sit on the first text of their
    closest blocks. Block operations skip the last block of such a range.
    """
    if rng.is_collapsed:
        return False
    index = _TreeIndex(root)
    start, end = index.ordered(rng)
    if start.offset != 0 or end.offset != 0:
        return False
    if any(is_void(block) for block in index.ancestors(start.key)):
        return False
    start_block = index.closest_block(start.key)
    end_block = index.closest_block(end.key)
    return (
        start.key == start_block.texts()[0].key
        and end.key == end_block.texts()[0].key
    )


def set_blocks_at_range(
    root: DocumentNode,
    rng: Range,
    callback: BlockCallback,
    is_void: VoidPredicate = _never_void,
) -> list[ComponentNode]:
    """Replace the data of every leaf block in ``rng`` with ``callback(block)``.

    Returns the blocks that were updated.
    """
    blocks = leaf_blocks_at_range(root, rng)
    targets = blocks[:-1] if is_hanging(root, rng, is_void) else blocks
    for block in targets:
        block.data = callback(block)
    logger.debug("updated %d of %d blocks in range", len(targets), len(blocks))
    return targets


def _with_style(block: ComponentNode, style_id: str, marker: str) -> NodeData:
    props = {name: dc.replace(prop) for name, prop in block.data.props.items()}
    existing = props.get(STYLE_PROP_NAME)
    if existing is None:
        props[STYLE_PROP_NAME] = ElementProp(
            id=f"{block.data.id}:{STYLE_PROP_NAME}",
            name=STYLE_PROP_NAME,
            type=marker,
            value_style=style_id,
        )
    else:
        existing.value_style = style_id
    return NodeData(id=block.data.id, props=props)


def set_text_style(
    root: DocumentNode,
    rng: Range,
    style_id: str,
    is_void: VoidPredicate = _never_void,
    *,
    marker: str = "STYLE",
) -> list[ComponentNode]:
    """Point the ``style`` prop of every block in ``rng`` at ``style_id``."""
    return set_blocks_at_range(
        root, rng, lambda block: _with_style(block, style_id, marker), is_void
    )


def block_style_id(block: ComponentNode) -> str:
    """Return the style id a block's ``style`` prop points at, or ``""``."""
    prop = block.data.props.get(STYLE_PROP_NAME)
    if prop is None or prop.value_style is None:
        return ""
    return prop.value_style


def _mark_type(mark: object) -> object:
    match mark:
        case {"type": kind}:
            return kind
        case _:
            return mark


def _split_leaves(text: TextNode, lo: int, hi: int) -> list[dict[str, typ.Any]]:
    """Split ``text`` so the characters in ``[lo, hi)`` sit in whole leaves.

    Leaves straddling an edge are cut into copies carrying the same marks.
    ``text.leaves`` is replaced in place and the leaves inside the span are
    returned.
    """
    pieces: list[dict[str, typ.Any]] = []
    selected: list[dict[str, typ.Any]] = []
    position = 0
    for leaf in text.leaves:
        content = str(leaf.get("text", ""))
        size = len(content)
        cut_lo = min(max(lo - position, 0), size)
        cut_hi = min(max(hi - position, 0), size)
        position += size
        if cut_lo >= cut_hi:
            pieces.append(leaf)
            continue
        for part_lo, part_hi, inside in (
            (0, cut_lo, False),
            (cut_lo, cut_hi, True),
            (cut_hi, size, False),
        ):
            if part_lo == part_hi:
                continue
            if (part_lo, part_hi) == (0, size):
                piece = leaf
            else:
                piece = {**copy.deepcopy(leaf), "text": content[part_lo:part_hi]}
            pieces.append(piece)
            if inside:
                selected.append(piece)
    text.leaves = pieces
    return selected


def toggle_mark(root: DocumentNode, rng: Range, mark: str) -> list[TextNode]:
    """Add ``mark`` to the selected characters, or remove it if all have it.

    Only the characters between the range edges change. Leaves that cross an
    edge are split first; neighbouring leaves with equal marks are not merged
    back together afterwards.

    Returns the text nodes the range touches.
    """
    if rng.is_collapsed:
        return []
    index = _TreeIndex(root)
    start, end = index.ordered(rng)
    texts = index.texts[index.position(start.key) : index.position(end.key) + 1]
    leaves: list[dict[str, typ.Any]] = []
    for text in texts:
        lo = start.offset if text.key == start.key else 0
        hi = end.offset if text.key == end.key else len(text.text)
        leaves.extend(_split_leaves(text, lo, hi))
    present = bool(leaves) and all(
        mark in (_mark_type(item) for item in leaf.get("marks", [])) for leaf in leaves
    )
    for leaf in leaves:
        marks = [item for item in leaf.get("marks", []) if _mark_type(item) != mark]
        if not present:
            marks.append({"object": "mark", "type": mark, "data": {}})
        leaf["marks"] = marks
    logger.debug("toggled %s on %d leaves", mark, len(leaves))
    return texts


__all__ = [
    "STYLE_PROP_NAME",
    "Point",
    "Range",
    "block_style_id",
    "is_hanging",
    "leaf_blocks_at_range",
    "range_edges",
    "set_blocks_at_range",
    "set_text_style",
    "texts_at_range",
    "toggle_mark",
]
