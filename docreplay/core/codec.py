"""
JSON parsing and serialization for the replay tree.

Parsing uses the stdlib decoder with hooks that hand back number literals
as text and object members as ordered pairs, then walks the result once to
build ValueNodes. Serialization renders JSON with a structural writer:
compact by default, indented on request, numbers and bools exactly as
stored.
"""

import json
from typing import Any, List, Optional, Union

from .errors import ParseError, SerializeError
from .nodes import NodeKind, RootContainer, ValueNode


class _NumberLiteral(str):
    """Number text as it appeared in the source."""


class _Members(list):
    """(name, value) pairs of a decoded object, in source order."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


_decoder = json.JSONDecoder(
    object_pairs_hook=_Members,
    parse_float=_NumberLiteral,
    parse_int=_NumberLiteral,
    parse_constant=_reject_constant,
)


def _decode(data: Union[bytes, str]) -> Any:
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8")
        except UnicodeDecodeError as ex:
            raise ParseError(f"document is not valid UTF-8: {ex}") from ex
    try:
        return _decoder.decode(data)
    except ValueError as ex:
        raise ParseError(f"invalid JSON: {ex}") from ex


def _build(value: Any) -> ValueNode:
    # bool before the str checks: the decoder yields real bools for true/false
    if value is None:
        return ValueNode.null()
    if value is True:
        return ValueNode.boolean("true")
    if value is False:
        return ValueNode.boolean("false")
    if isinstance(value, _NumberLiteral):
        return ValueNode.number(str(value))
    if isinstance(value, str):
        return ValueNode.string(value)
    if isinstance(value, _Members):
        node = ValueNode.object()
        for name, member in value:
            node.properties[name] = _build(member)
        return node
    if isinstance(value, list):
        return ValueNode.array([_build(item) for item in value])
    raise ParseError(f"unsupported decoded value type: {type(value)!r}")


def parse_value(data: Union[bytes, str]) -> ValueNode:
    """
    Parse JSON text holding any value into a ValueNode tree.

    Raises:
        ParseError: If data is not valid JSON or is nested too deeply
    """
    try:
        return _build(_decode(data))
    except RecursionError as ex:
        raise ParseError(f"document is nested too deeply: {ex}") from None


def parse_document(data: Union[bytes, str]) -> RootContainer:
    """
    Parse a base document.

    Args:
        data: UTF-8 JSON bytes (or already-decoded text)

    Returns:
        RootContainer wrapping the document's object or array

    Raises:
        ParseError: If data is not valid JSON
        UnsupportedRootError: If the top-level value is a scalar
    """
    return RootContainer.from_node(parse_value(data))


def _quote(text: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates cannot be written as UTF-8; escape everything
        return json.dumps(text)
    return json.dumps(text, ensure_ascii=False)


class _JsonWriter:
    """
    Appends JSON for a ValueNode tree.

    Output is compact unless `indent` is given, in which case members and
    elements go on their own lines, `indent` spaces deeper per level.
    """

    def __init__(self, indent: Optional[int] = None) -> None:
        self._parts: List[str] = []
        self._indent = indent
        self._depth = 0

    def _newline(self) -> None:
        if self._indent is not None:
            self._parts.append("\n" + " " * (self._indent * self._depth))

    def write(self, node: ValueNode) -> None:
        kind = node.kind
        if kind is NodeKind.OBJECT:
            self._write_object(node)
        elif kind is NodeKind.ARRAY:
            self._write_array(node)
        elif kind is NodeKind.STRING:
            self._parts.append(_quote(node.text))
        elif kind is NodeKind.NUMBER or kind is NodeKind.BOOL:
            self._parts.append(node.text)
        elif kind is NodeKind.NULL:
            self._parts.append("null")
        else:
            raise SerializeError(f"unexpected node kind `{kind}` found in document")

    def _write_object(self, node: ValueNode) -> None:
        if not node.properties:
            self._parts.append("{}")
            return
        self._parts.append("{")
        self._depth += 1
        needs_separator = False
        for name, child in node.properties.items():
            if needs_separator:
                self._parts.append(",")
            self._newline()
            self._parts.append(_quote(name))
            self._parts.append(":" if self._indent is None else ": ")
            self.write(child)
            needs_separator = True
        self._depth -= 1
        self._newline()
        self._parts.append("}")

    def _write_array(self, node: ValueNode) -> None:
        if not node.items:
            self._parts.append("[]")
            return
        self._parts.append("[")
        self._depth += 1
        needs_separator = False
        for item in node.items:
            if needs_separator:
                self._parts.append(",")
            self._newline()
            self.write(item)
            needs_separator = True
        self._depth -= 1
        self._newline()
        self._parts.append("]")

    def getvalue(self) -> str:
        return "".join(self._parts)


def serialize_value(node: ValueNode, indent: Optional[int] = None) -> str:
    """
    Render a single node (and its subtree) as JSON text.

    Raises:
        SerializeError: If a node has an unknown kind, or the tree is
            nested too deeply to render
    """
    writer = _JsonWriter(indent)
    try:
        writer.write(node)
    except RecursionError as ex:
        raise SerializeError(f"document is nested too deeply: {ex}") from None
    return writer.getvalue()


def serialize_document(root: RootContainer, indent: Optional[int] = None) -> bytes:
    """
    Render a document back into JSON, compact unless `indent` is given.

    Array documents are emitted as the bare root array.

    Returns:
        UTF-8 encoded JSON bytes

    Raises:
        SerializeError: If a node has an unknown kind, or an array
            document no longer holds exactly its root array
    """
    if root.is_array:
        node = root.root_array
        if len(root.holder.properties) != 1 or node is None or node.kind is not NodeKind.ARRAY:
            raise SerializeError("array document no longer holds its root array")
    else:
        node = root.holder
    return serialize_value(node, indent).encode("utf-8")
