"""
Path expressions: parsing and resolution against a document tree.

Grammar:
    path     := segment ('.' segment)*
    segment  := name indexer*
    indexer  := '[' token ']'

Names match case-insensitively. Tokens are `first`, `new`, `last` and
`all`; `last` and conditional selectors are reserved and rejected, `all`
only means something to the Remove action.

Example:
    Prop1.SubProp1[first].ArrayProp1 resolves ArrayProp1 inside the first
    element of the SubProp1 array, which is a property of Prop1.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import (
    EmptyArrayError,
    IndexerNotSupportedError,
    NullInPathError,
    PathNotFoundError,
    PathSyntaxError,
    PathTypeError,
    UnsupportedIndexerError,
)
from .nodes import NodeKind, ValueNode

INDEX_FIRST = "first"
INDEX_LAST = "last"
INDEX_NEW = "new"
INDEX_ALL = "all"

_INDEXER = re.compile(r"\[([^\[\]]*)\]")
_CONDITION_CHARS = frozenset("=<>!")


@dataclass(frozen=True)
class PathSegment:
    """
    One dot-separated piece of a path.

    Fields:
        name: Property name (may be empty for a leading indexer)
        indexers: Lower-cased bracket tokens, outermost first
    """
    name: str
    indexers: Tuple[str, ...] = ()

    def without_last_indexer(self) -> "PathSegment":
        return PathSegment(self.name, self.indexers[:-1])

    def __str__(self) -> str:
        return self.name + "".join(f"[{token}]" for token in self.indexers)


def parse_path(path: str) -> List[PathSegment]:
    """
    Split a path expression into segments.

    Raises:
        PathSyntaxError: If text after a name is not a run of [token] indexers
    """
    segments = []
    for part in path.split("."):
        name, bracket, rest = part.partition("[")
        indexers = []
        if bracket:
            chain = bracket + rest
            pos = 0
            for match in _INDEXER.finditer(chain):
                if match.start() != pos:
                    break
                indexers.append(match.group(1).lower())
                pos = match.end()
            if pos != len(chain):
                raise PathSyntaxError(f"malformed array indexer in path segment `{part}`")
        segments.append(PathSegment(name, tuple(indexers)))
    return segments


def format_path(segments: Sequence[PathSegment]) -> str:
    return ".".join(str(segment) for segment in segments)


def resolve(root: ValueNode, path: str, create_if_missing: bool) -> ValueNode:
    """
    Locate the node addressed by `path`, starting at object `root`.

    Args:
        root: OBJECT node to start from
        path: Path expression
        create_if_missing: Create absent properties and array elements
            along the way instead of failing

    Returns:
        The addressed node, ready to be mutated in place

    Raises:
        ResolveError: If the path cannot be followed; no partial
            result is ever returned
    """
    return resolve_segments(root, parse_path(path), create_if_missing)


def resolve_segments(
    root: ValueNode, segments: Sequence[PathSegment], create_if_missing: bool
) -> ValueNode:
    """Same as resolve(), for an already-parsed path."""
    if not segments:
        return root
    return _resolve_in_object(root, list(segments), create_if_missing)


def _resolve_in_object(obj: ValueNode, segments: List[PathSegment], create: bool) -> ValueNode:
    segment, rest = segments[0], segments[1:]
    found = obj.get(segment.name)

    if found is None:
        if not create:
            raise PathNotFoundError(
                f"unable to locate element named `{segment.name}` and createIfMissing is false"
            )
        if segment.indexers:
            found = ValueNode.array()
        elif rest:
            found = ValueNode.object()
        else:
            found = ValueNode.null()
        obj.put(segment.name, found)

    if segment.indexers:
        if found.kind is NodeKind.NULL:
            if not create:
                raise NullInPathError(
                    f"encountered null value at `{segment.name}` in path, and create path is not enabled"
                )
            found.make_array()
        if found.kind is not NodeKind.ARRAY:
            raise PathTypeError(
                f"element `{segment.name}` is {found.kind.value}, not an array"
            )
        return _resolve_in_array(found, segment.indexers, rest, create, segment.name)

    return _descend(found, (), rest, create, segment.name)


def _resolve_in_array(
    array: ValueNode,
    indexers: Tuple[str, ...],
    rest: List[PathSegment],
    create: bool,
    name: str,
) -> ValueNode:
    token, more = indexers[0], indexers[1:]

    if token == INDEX_FIRST:
        if array.items:
            return _descend(array.items[0], more, rest, create, name)
        if not create:
            raise EmptyArrayError(f"empty array `{name}` encountered when seeking first element")
    elif token == INDEX_NEW:
        if not create:
            raise UnsupportedIndexerError(
                f"`{INDEX_NEW}` cannot be used on `{name}` when the path must already exist"
            )
    elif token == INDEX_LAST:
        raise IndexerNotSupportedError("last array element is not yet supported")
    elif _CONDITION_CHARS.intersection(token):
        raise IndexerNotSupportedError(f"conditional array element `{token}` is not yet supported")
    elif token == INDEX_ALL:
        raise UnsupportedIndexerError(f"`{INDEX_ALL}` is only valid as the last indexer of a remove")
    else:
        raise UnsupportedIndexerError(f"array element operator `{token}` is not supported")

    # append a fresh element shaped for whatever follows it
    if more:
        element = ValueNode.array()
    elif rest:
        element = ValueNode.object()
    else:
        element = ValueNode.null()
    array.items.append(element)
    return _descend(element, more, rest, create, name)


def _descend(
    node: ValueNode,
    more: Tuple[str, ...],
    rest: List[PathSegment],
    create: bool,
    name: str,
) -> ValueNode:
    """Continue from `node` with remaining indexers, then remaining segments."""
    if more:
        if node.kind is NodeKind.NULL:
            if not create:
                raise NullInPathError(
                    f"encountered null element in `{name}`, and create path is not enabled"
                )
            node.make_array()
        if node.kind is not NodeKind.ARRAY:
            raise PathTypeError(f"element of `{name}` is {node.kind.value}, not a nested array")
        return _resolve_in_array(node, more, rest, create, name)

    if not rest:
        return node

    if node.kind is NodeKind.NULL:
        if not create:
            raise NullInPathError(
                f"encountered null value at `{name}` in path, and create path is not enabled"
            )
        node.make_object()
    if node.kind is not NodeKind.OBJECT:
        raise PathTypeError(
            f"element `{name}` is {node.kind.value}, cannot resolve `{format_path(rest)}` inside it"
        )
    return _resolve_in_object(node, rest, create)
