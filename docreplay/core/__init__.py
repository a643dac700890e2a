"""
Core document transformation primitives.

This module provides:
- ValueNode / RootContainer: Mutable tree model of a JSON document
- Codec: Parsing into and serializing out of the tree
- Paths: Path expression parsing and resolution
- InstructionApplier: Typed mutations (SetOrAdd, SetOnly, AddOnly, Remove)
- Events: Document, DocumentEvent and EventInstruction records
- ReplayConfig: Per-replay settings for the Remove action
"""

from .nodes import NodeKind, ValueNode, RootContainer
from .codec import parse_document, parse_value, serialize_document, serialize_value
from .paths import PathSegment, parse_path, resolve
from .events import ActionType, DataType, EventInstruction, DocumentEvent, Document
from .config import ReplayConfig, DEFAULT_CONFIG
from .applier import InstructionApplier, set_value
from .errors import (
    ReplayError,
    ParseError,
    UnsupportedRootError,
    SerializeError,
    ResolveError,
    PathNotFoundError,
    NullInPathError,
    EmptyArrayError,
    UnsupportedIndexerError,
    IndexerNotSupportedError,
    PathSyntaxError,
    PathTypeError,
    InstructionError,
    NonEmptyReplaceError,
    ActionNotImplementedError,
    UnknownActionTypeError,
    UnknownDataTypeError,
)

__all__ = [
    "NodeKind",
    "ValueNode",
    "RootContainer",
    "parse_document",
    "parse_value",
    "serialize_document",
    "serialize_value",
    "PathSegment",
    "parse_path",
    "resolve",
    "ActionType",
    "DataType",
    "EventInstruction",
    "DocumentEvent",
    "Document",
    "ReplayConfig",
    "DEFAULT_CONFIG",
    "InstructionApplier",
    "set_value",
    "ReplayError",
    "ParseError",
    "UnsupportedRootError",
    "SerializeError",
    "ResolveError",
    "PathNotFoundError",
    "NullInPathError",
    "EmptyArrayError",
    "UnsupportedIndexerError",
    "IndexerNotSupportedError",
    "PathSyntaxError",
    "PathTypeError",
    "InstructionError",
    "NonEmptyReplaceError",
    "ActionNotImplementedError",
    "UnknownActionTypeError",
    "UnknownDataTypeError",
]
