"""Rebuild the document tree from the flat element list."""

from __future__ import annotations

import copy
import dataclasses as dc
import itertools
import logging
import typing as typ

from ..errors import (
    InvariantViolationError,
    UnimplementedVariantError,
    UnknownReferenceError,
    assert_never,
)
from ..snapshot.helpers import build_index
from ..snapshot.models import ElementType
from .models import ComponentNode, DocumentValue, NodeData, TextNode

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import Component, Element
    from .models import DocumentNode

logger = logging.getLogger(__name__)


class _TreeAssembler:
    """Walk elements from a root id, numbering nodes as they are created."""

    def __init__(
        self,
        elements_by_id: cabc.Mapping[str, Element],
        components_by_id: cabc.Mapping[str, Component],
    ) -> None:
        self.elements_by_id = elements_by_id
        self.components_by_id = components_by_id
        self._keys = itertools.count()
        self.node_count = 0

    def _element(self, element_id: str) -> Element:
        try:
            return self.elements_by_id[element_id]
        except KeyError as exc:
            msg = f"Unknown element '{element_id}'."
            raise UnknownReferenceError(msg) from exc

    def _component(self, element: Element) -> Component:
        component = self.components_by_id.get(element.component or "")
        if component is None:
            msg = f"Element '{element.id}' uses unknown component {element.component!r}."
            raise UnknownReferenceError(msg)
        return component

    def walk(self, element_id: str) -> DocumentNode:
        element = self._element(element_id)
        key = str(next(self._keys))
        self.node_count += 1
        match element.type:
            case ElementType.SHARED:
                msg = f"Shared element '{element_id}' is not implemented yet."
                raise UnimplementedVariantError(msg)
            case ElementType.COMPONENT:
                return self._component_node(element, key)
            case ElementType.TEXT_NODE:
                return TextNode(leaves=copy.deepcopy(element.text_leaves or []), key=key)
            case _:
                assert_never(element.type)

    def _component_node(self, element: Element, key: str) -> ComponentNode:
        if element.children is None or element.props is None:
            msg = f"Component element '{element.id}' must have children and props."
            raise InvariantViolationError(msg)
        component = self._component(element)
        children = sorted(
            (self._element(child_id) for child_id in element.children),
            key=lambda child: child.index,
        )
        props = {prop.name: dc.replace(prop) for prop in element.props}
        return ComponentNode(
            object_kind=component.kind.lower(),
            type_id=component.id,
            key=key,
            children=[self.walk(child.id) for child in children],
            data=NodeData(id=element.id, props=props),
        )


def assemble_document(
    root_id: str,
    elements_by_id: cabc.Mapping[str, Element],
    components_by_id: cabc.Mapping[str, Component],
) -> DocumentNode:
    """Assemble the node tree rooted at ``root_id``.

    Parameters
    ----------
    root_id : str
        Id of the page's root element.
    elements_by_id : Mapping[str, Element]
        Every element of the snapshot keyed by id.
    components_by_id : Mapping[str, Component]
        Component catalog keyed by id.

    Returns
    -------
    DocumentNode
        A :class:`ComponentNode` for component elements, whose children are
        sorted by element ``index`` (ties keep their listed order), or a
        :class:`TextNode` holding a copy of the element's text leaves. Node
        keys are numbered from ``"0"`` in visiting order.

    Raises
    ------
    UnimplementedVariantError
        If a ``SHARED`` element is reached.
    InvariantViolationError
        If a component element lacks ``children`` or ``props``.
    UnknownReferenceError
        If a child id or component id cannot be resolved.
    """
    assembler = _TreeAssembler(elements_by_id, components_by_id)
    root = assembler.walk(root_id)
    logger.debug("assembled %d nodes from root %s", assembler.node_count, root_id)
    return root


def build_document_value(
    root_id: str,
    elements: cabc.Iterable[Element],
    components_by_id: cabc.Mapping[str, Component],
) -> DocumentValue:
    """Index ``elements`` and wrap the assembled root in a document value."""
    root = assemble_document(root_id, build_index(elements), components_by_id)
    return DocumentValue(nodes=[root])


__all__ = ["assemble_document", "build_document_value"]
