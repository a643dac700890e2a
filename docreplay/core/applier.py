"""
InstructionApplier: applies one instruction to a document tree.

Mutations happen in place. A failing instruction leaves earlier
instructions applied; the replay runner discards the tree on error.
"""

import logging
from typing import Callable, Dict, List, Optional

from .codec import parse_document, parse_value
from .config import DEFAULT_CONFIG, ReplayConfig
from .errors import (
    ActionNotImplementedError,
    EmptyArrayError,
    NonEmptyReplaceError,
    ParseError,
    PathNotFoundError,
    PathTypeError,
    ResolveError,
    UnknownActionTypeError,
    UnknownDataTypeError,
    UnsupportedIndexerError,
    UnsupportedRootError,
)
from .events import ActionType, DataType, EventInstruction
from .nodes import ARRAY_HOLDER_KEY, NodeKind, RootContainer, ValueNode
from .paths import INDEX_ALL, INDEX_FIRST, INDEX_LAST, PathSegment, parse_path, resolve_segments

logger = logging.getLogger(__name__)

# Handler signature: (document, instruction) -> None, mutating the document
Handler = Callable[[RootContainer, EventInstruction], None]

_SCALAR_KINDS = {
    DataType.STRING: NodeKind.STRING,
    DataType.NUMBER: NodeKind.NUMBER,
    DataType.BOOL: NodeKind.BOOL,
    DataType.NULL: NodeKind.NULL,
}


def _parse_instruction_value(value: str) -> ValueNode:
    try:
        return parse_value(value)
    except ParseError:
        logger.warning(f"error unmarshalling instruction value `{value}`")
        raise


def set_value(node: ValueNode, data_type: str, value: str) -> None:
    """
    Overwrite a node's kind and content.

    Scalars store `value` verbatim, so "1.0" is written back as 1.0.
    map and array values are parsed and spliced in.

    Raises:
        UnknownDataTypeError: If data_type is empty or unknown
        ParseError: If a map/array value is not a JSON object/array
    """
    try:
        dt = DataType(data_type)
    except ValueError:
        raise UnknownDataTypeError(f"unexpected instruction data type `{data_type}`") from None

    if dt in _SCALAR_KINDS:
        node.set_scalar(_SCALAR_KINDS[dt], value)
        return

    if dt is DataType.MAP:
        parsed = _parse_instruction_value(value)
        if parsed.kind is not NodeKind.OBJECT:
            raise ParseError(f"map instruction value must be a JSON object, got {parsed.kind.value}")
        node.assign(parsed)
        return

    if dt is DataType.ARRAY:
        parsed = _parse_instruction_value(value)
        if parsed.kind is not NodeKind.ARRAY:
            raise ParseError(f"array instruction value must be a JSON array, got {parsed.kind.value}")
        node.assign(parsed)
        return

    raise UnknownDataTypeError("instruction has no data type to set")


def is_document_replace(instruction: EventInstruction) -> bool:
    """True for instructions that replace the whole (empty) document."""
    return (
        instruction.path == ""
        and instruction.data_type in (DataType.ARRAY, DataType.MAP)
        and instruction.action_type != ActionType.REMOVE
    )


class InstructionApplier:
    """
    Registry of action handlers bound to one replay configuration.

    Usage:
        applier = InstructionApplier(ReplayConfig())
        applier.apply(root, instruction)
    """

    def __init__(self, config: Optional[ReplayConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._handlers: Dict[ActionType, Handler] = {
            ActionType.SET_OR_ADD: self.set_or_add,
            ActionType.SET_ONLY: self.set_only,
            ActionType.ADD_ONLY: self.add_only,
            ActionType.REMOVE: self.remove,
        }

    def apply(self, root: RootContainer, instruction: EventInstruction) -> None:
        """
        Apply one instruction to the document.

        Raises:
            ReplayError: Any failure; see the individual handlers
        """
        if is_document_replace(instruction):
            self.replace(root, instruction)
            return

        try:
            action = ActionType(instruction.action_type)
        except ValueError:
            raise UnknownActionTypeError(
                f"unexpected instruction action type `{instruction.action_type}`"
            ) from None
        self._handlers[action](root, instruction)

    def replace(self, root: RootContainer, instruction: EventInstruction) -> None:
        """Throw away an empty document and replace it with the instruction's value."""
        if not root.is_empty:
            raise NonEmptyReplaceError("invalid instruction - can't replace non-empty base document")
        try:
            new_root = parse_document(instruction.value)
        except ParseError as ex:
            raise ParseError(f"invalid instruction - new base document is not valid: {ex}") from ex
        if new_root.is_array != (instruction.data_type == DataType.ARRAY):
            raise ParseError(
                f"invalid instruction - new base document does not match data type `{instruction.data_type}`"
            )
        root.replace_with(new_root)

    def set_or_add(self, root: RootContainer, instruction: EventInstruction) -> None:
        """Set the value, creating it and the path to it if necessary."""
        self._set(root, instruction, create=True)

    def set_only(self, root: RootContainer, instruction: EventInstruction) -> None:
        """Set the value; fail if it or any part of the path is absent."""
        self._set(root, instruction, create=False)

    def add_only(self, root: RootContainer, instruction: EventInstruction) -> None:
        """Add the value only if absent. Not implemented."""
        raise ActionNotImplementedError("addOnly not implemented")

    def remove(self, root: RootContainer, instruction: EventInstruction) -> None:
        """
        Remove a property, or the first/last/all elements of an array.

        The parent is found by dropping the last segment, or only the last
        indexer when the segment has one: `a.list[first]` removes from
        `a.list`, `a.b` removes `b` from `a`.
        """
        segments = parse_path(instruction.path)
        last = segments[-1]
        token = None
        if last.indexers:
            parent_segments = segments[:-1] + [last.without_last_indexer()]
            token = last.indexers[-1]
        else:
            parent_segments = segments[:-1]

        if root.is_array and not parent_segments and last.name == ARRAY_HOLDER_KEY:
            raise UnsupportedRootError("the root array of an array document cannot be removed")

        try:
            parent = self._resolve(root, parent_segments, create=False)
        except ResolveError:
            if self.config.remove_missing_element_is_error:
                raise
            logger.debug(f"parent of `{instruction.path}` not found, nothing to remove")
            return

        if token is not None:
            self._remove_array_element(parent, token, last.name)
        else:
            self._remove_property(parent, last.name)

    def _resolve(self, root: RootContainer, segments: List[PathSegment], create: bool) -> ValueNode:
        if root.is_array and segments and segments[0].name != ARRAY_HOLDER_KEY:
            raise PathNotFoundError(
                f"array document has no property `{segments[0].name}`; paths must start with an indexer"
            )
        return resolve_segments(root.holder, segments, create)

    def _set(self, root: RootContainer, instruction: EventInstruction, create: bool) -> None:
        target = self._resolve(root, parse_path(instruction.path), create)
        if target is root.root_array:
            raise UnsupportedRootError("the root array of an array document cannot be overwritten")
        set_value(target, instruction.data_type, instruction.value)

    def _remove_array_element(self, parent: ValueNode, token: str, name: str) -> None:
        if parent.kind not in (NodeKind.ARRAY, NodeKind.NULL):
            raise PathTypeError(f"element `{name}` is {parent.kind.value}, not an array")
        if token not in (INDEX_ALL, INDEX_FIRST, INDEX_LAST):
            raise UnsupportedIndexerError(f"`{token}` is not a supported array index for the remove action")

        if token == INDEX_ALL:
            parent.items = []
            return

        if not parent.items:
            if self.config.remove_missing_array_element_is_error:
                raise EmptyArrayError("attempt to remove array element failed, array was empty")
            return

        if token == INDEX_FIRST:
            del parent.items[0]
        else:
            del parent.items[-1]

    def _remove_property(self, parent: ValueNode, name: str) -> None:
        if parent.kind is NodeKind.OBJECT and parent.remove(name):
            return
        if self.config.remove_missing_element_is_error:
            raise PathNotFoundError(f"element `{name}` not found when trying to remove it")
