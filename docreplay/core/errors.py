"""
Exception types for the document replay engine.

Every failure aborts the replay it happens in. Callers catch ReplayError
to handle any of them.
"""

from typing import Optional


class ReplayError(Exception):
    """
    Base class for all replay failures.

    The replay runner records where the failure happened before re-raising:
    event_index and instruction_index are None until then.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.event_index: Optional[int] = None
        self.instruction_index: Optional[int] = None

    def locate(self, event_index: int, instruction_index: int) -> "ReplayError":
        """Record the failing instruction's position and return self."""
        self.event_index = event_index
        self.instruction_index = instruction_index
        return self


class ParseError(ReplayError):
    """Raised when a base document or an instruction value is not valid JSON."""
    pass


class UnsupportedRootError(ReplayError):
    """Raised when a document's top-level value is not an object or array."""
    pass


class SerializeError(ReplayError):
    """Raised when the tree holds a node the serializer cannot render."""
    pass


class ResolveError(ReplayError):
    """Base class for path resolution failures."""
    pass


class PathNotFoundError(ResolveError):
    """Raised when a path segment does not exist and may not be created."""
    pass


class NullInPathError(ResolveError):
    """Raised when a null value blocks traversal and may not be replaced."""
    pass


class EmptyArrayError(ResolveError):
    """Raised when an element is requested from an empty array."""
    pass


class UnsupportedIndexerError(ResolveError):
    """Raised for an unrecognised array indexer, or one used in the wrong place."""
    pass


class IndexerNotSupportedError(ResolveError):
    """Raised for reserved indexers (`last`, conditions) that have no implementation."""
    pass


class PathSyntaxError(ResolveError):
    """Raised when a path expression cannot be parsed."""
    pass


class PathTypeError(ResolveError):
    """Raised when a path traverses through a value of the wrong kind."""
    pass


class InstructionError(ReplayError):
    """Base class for malformed or unsupported instructions."""
    pass


class NonEmptyReplaceError(InstructionError):
    """Raised when a whole-document replace targets a non-empty document."""
    pass


class ActionNotImplementedError(InstructionError):
    """Raised for action types that are defined but not implemented (AddOnly)."""
    pass


class UnknownActionTypeError(InstructionError):
    """Raised when an instruction carries an unrecognised action type."""
    pass


class UnknownDataTypeError(InstructionError):
    """Raised when a value is set with a missing or unrecognised data type."""
    pass
