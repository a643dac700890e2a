"""
Event model: documents, events and the instructions they carry.

Instructions are plain string records so that a malformed one can still
reach the applier and fail there with a descriptive error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ActionType(str, Enum):
    """What an instruction does at its path."""

    SET_OR_ADD = "SetOrAdd"  # add the value, or overwrite it if present
    ADD_ONLY = "AddOnly"  # add the value, fail if present (not implemented)
    SET_ONLY = "SetOnly"  # overwrite the value, fail if absent
    REMOVE = "Remove"  # remove the value


class DataType(str, Enum):
    """Wire names of instruction value types."""

    NONE = ""
    STRING = "string"
    NUMBER = "float64"
    BOOL = "bool"
    NULL = "null"
    ARRAY = "array"
    MAP = "map"


def _wire(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class EventInstruction:
    """
    One mutation directive.

    Fields:
        path: Path to the element in the document
        action_type: One of the ActionType values
        data_type: One of the DataType values; ignored by Remove
        value: Literal text for scalars, JSON text for array/map
    """
    path: str
    action_type: str
    data_type: str = DataType.NONE.value
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation."""
        return {
            "Path": self.path,
            "ActionType": _wire(self.action_type),
            "DataType": _wire(self.data_type),
            "Value": self.value,
        }


@dataclass(frozen=True)
class DocumentEvent:
    """
    A single business event, applied as an ordered run of instructions.

    Fields:
        instructions: Instructions in application order
        event_id: Opaque event identifier
        timestamp: Unix timestamp in microseconds
    """
    instructions: List[EventInstruction] = field(default_factory=list)
    event_id: Optional[str] = None
    timestamp: Optional[int] = None


@dataclass(frozen=True)
class Document:
    """
    A base snapshot plus the events not yet applied to it.

    Fields:
        base_document: Raw JSON bytes of the snapshot
        events: Events in the order they were posted
        entity_id: Opaque identifier of the document
    """
    base_document: bytes
    events: List[DocumentEvent] = field(default_factory=list)
    entity_id: str = ""

    def get_current_state(self, config: Any = None) -> bytes:
        """
        Apply every event to the base document and return the result.

        See docreplay.replay.replay().
        """
        from ..replay.runner import replay

        return replay(self, config)
