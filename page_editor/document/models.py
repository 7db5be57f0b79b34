"""Node dataclasses for the editable document tree."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..snapshot.models import ElementProp

TEXT_OBJECT = "text"


def _prop_to_json(prop: ElementProp) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {"id": prop.id, "name": prop.name, "type": prop.type}
    if prop.value_style is not None:
        payload["valueStyle"] = {"id": prop.value_style}
    else:
        payload["value"] = prop.value
    return payload


@dc.dataclass(slots=True)
class NodeData:
    """Element id and props carried by a component node."""

    id: str
    props: dict[str, ElementProp] = dc.field(default_factory=dict)

    def to_json(self) -> dict[str, typ.Any]:
        """Return the serialisable form of the node data."""
        return {
            "id": self.id,
            "props": {name: _prop_to_json(prop) for name, prop in self.props.items()},
        }


@dc.dataclass(slots=True)
class TextNode:
    """A run of text leaves; leaf content is kept exactly as stored."""

    leaves: list[dict[str, typ.Any]]
    key: str = ""

    @property
    def text(self) -> str:
        """Return the concatenated text of every leaf."""
        return "".join(str(leaf.get("text", "")) for leaf in self.leaves)

    def to_json(self) -> dict[str, typ.Any]:
        """Return the serialisable form of the node."""
        return {"object": TEXT_OBJECT, "key": self.key, "leaves": self.leaves}


@dc.dataclass(slots=True)
class ComponentNode:
    """A component instance and its ordered children.

    Attributes
    ----------
    object_kind : str
        Lower-cased component kind, e.g. ``"view"``.
    type_id : str
        Id of the catalog component that renders this node.
    children : list[DocumentNode]
        Child nodes ordered by their element ``index``.
    data : NodeData
        Source element id and its props keyed by prop name.
    key : str
        Key of this node within the assembled document.
    """

    object_kind: str
    type_id: str
    children: list[DocumentNode]
    data: NodeData
    key: str = ""

    def walk(self) -> cabc.Iterator[DocumentNode]:
        """Yield this node and every descendant in document order."""
        yield self
        for child in self.children:
            match child:
                case ComponentNode():
                    yield from child.walk()
                case _:
                    yield child

    def texts(self) -> list[TextNode]:
        """Return every text node below this node in document order."""
        return [node for node in self.walk() if isinstance(node, TextNode)]

    @property
    def text(self) -> str:
        """Return the text of every descendant text node."""
        return "".join(node.text for node in self.texts())

    def to_json(self) -> dict[str, typ.Any]:
        """Return the serialisable form of the node and its subtree."""
        return {
            "object": self.object_kind,
            "type": self.type_id,
            "key": self.key,
            "nodes": [child.to_json() for child in self.children],
            "data": self.data.to_json(),
        }


DocumentNode: typ.TypeAlias = ComponentNode | TextNode


@dc.dataclass(slots=True)
class DocumentValue:
    """The value handed to the editing surface: a document with one root."""

    nodes: list[DocumentNode]

    @property
    def root(self) -> DocumentNode:
        """Return the root node assembled from the page element."""
        return self.nodes[0]

    def to_json(self) -> dict[str, typ.Any]:
        """Return the serialisable ``{document: {nodes: [...]}}`` form."""
        return {"document": {"nodes": [node.to_json() for node in self.nodes]}}


__all__ = [
    "TEXT_OBJECT",
    "ComponentNode",
    "DocumentNode",
    "DocumentValue",
    "NodeData",
    "TextNode",
]
