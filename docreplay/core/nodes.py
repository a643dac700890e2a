"""
Tree model for JSON documents under replay.

A ValueNode is a tagged JSON value that instructions mutate in place.
Scalars keep their literal text so that re-serialization reproduces
exactly what was read or supplied (1.0 stays 1.0).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .errors import UnsupportedRootError


class NodeKind(str, Enum):
    """The six JSON value kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"


SCALAR_KINDS = frozenset({NodeKind.STRING, NodeKind.NUMBER, NodeKind.BOOL, NodeKind.NULL})

# Name of the synthetic holder property that carries an array root.
ARRAY_HOLDER_KEY = ""


@dataclass
class ValueNode:
    """
    One JSON value.

    Fields:
        kind: Which variant this node is
        text: Literal text for STRING, NUMBER and BOOL nodes
        properties: Members of an OBJECT node, keyed by exact name
        items: Elements of an ARRAY node, in order

    Property names are unique by exact spelling but looked up
    case-insensitively: an exact match wins, otherwise the first
    case-insensitive match in insertion order.
    """
    kind: NodeKind
    text: str = ""
    properties: Dict[str, "ValueNode"] = field(default_factory=dict)
    items: List["ValueNode"] = field(default_factory=list)

    @classmethod
    def string(cls, text: str) -> "ValueNode":
        return cls(NodeKind.STRING, text=text)

    @classmethod
    def number(cls, literal: str) -> "ValueNode":
        return cls(NodeKind.NUMBER, text=literal)

    @classmethod
    def boolean(cls, literal: str) -> "ValueNode":
        return cls(NodeKind.BOOL, text=literal)

    @classmethod
    def null(cls) -> "ValueNode":
        return cls(NodeKind.NULL)

    @classmethod
    def object(cls, properties: Optional[Dict[str, "ValueNode"]] = None) -> "ValueNode":
        return cls(NodeKind.OBJECT, properties=dict(properties or {}))

    @classmethod
    def array(cls, items: Optional[List["ValueNode"]] = None) -> "ValueNode":
        return cls(NodeKind.ARRAY, items=list(items or []))

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    def find_key(self, name: str) -> Optional[str]:
        """
        Return the stored spelling of property `name`, or None.

        Exact spelling is tried first, then a case-insensitive scan.
        """
        if name in self.properties:
            return name
        wanted = name.lower()
        for key in self.properties:
            if key.lower() == wanted:
                return key
        return None

    def get(self, name: str) -> Optional["ValueNode"]:
        """Case-insensitive property lookup."""
        key = self.find_key(name)
        if key is None:
            return None
        return self.properties[key]

    def put(self, name: str, node: "ValueNode") -> None:
        """
        Set property `name` to `node`.

        An existing property matching case-insensitively is replaced in
        place, keeping its position and original spelling.
        """
        key = self.find_key(name)
        self.properties[name if key is None else key] = node

    def remove(self, name: str) -> bool:
        """Delete property `name` (case-insensitive). Returns False if absent."""
        key = self.find_key(name)
        if key is None:
            return False
        del self.properties[key]
        return True

    def assign(self, other: "ValueNode") -> None:
        """Overwrite this node's kind and content with `other`'s."""
        self.kind = other.kind
        self.text = other.text
        self.properties = other.properties
        self.items = other.items

    def set_scalar(self, kind: NodeKind, text: str = "") -> None:
        """Turn this node into a scalar of `kind` holding literal `text`."""
        self.assign(ValueNode(kind, text=text if kind is not NodeKind.NULL else ""))

    def make_object(self) -> None:
        """Turn this node into an empty object."""
        self.assign(ValueNode.object())

    def make_array(self) -> None:
        """Turn this node into an empty array."""
        self.assign(ValueNode.array())


@dataclass
class RootContainer:
    """
    Top level of a document under replay.

    Fields:
        holder: OBJECT node whose properties are the document's properties
        is_array: True when the document is an array

    An array document is kept as the single holder property named
    ARRAY_HOLDER_KEY, so that the path resolver always starts at an
    object and paths beginning with an indexer address the root array.
    """
    holder: ValueNode
    is_array: bool = False

    @classmethod
    def from_node(cls, node: ValueNode) -> "RootContainer":
        """
        Wrap a parsed top-level value.

        Raises:
            UnsupportedRootError: If node is a scalar
        """
        if node.kind is NodeKind.OBJECT:
            return cls(holder=node, is_array=False)
        if node.kind is NodeKind.ARRAY:
            return cls(holder=ValueNode.object({ARRAY_HOLDER_KEY: node}), is_array=True)
        raise UnsupportedRootError(
            f"document root must be an object or an array, got {node.kind.value}"
        )

    @property
    def is_empty(self) -> bool:
        return not self.holder.properties

    @property
    def root_array(self) -> Optional[ValueNode]:
        """The root array node, or None for object documents."""
        if not self.is_array:
            return None
        return self.holder.properties.get(ARRAY_HOLDER_KEY)

    def replace_with(self, other: "RootContainer") -> None:
        """Swap in another document's whole tree, including its root kind."""
        self.holder = other.holder
        self.is_array = other.is_array
