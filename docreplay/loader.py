"""
Wire loader: builds Documents and instructions from their JSON form.

Instruction:  {"Path": ..., "ActionType": ..., "DataType": ..., "Value": ...}
Event:        {"EventId": ..., "Timestamp": ..., "Instructions": [...]}
              or a bare list of instructions
Document:     {"EntityId": ..., "BaseDocument": ..., "Events": [...]}

Field names match case-insensitively. BaseDocument may be embedded JSON
(object or array) or a base64 string of the raw bytes.
"""

import base64
import binascii
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .core.codec import parse_value, serialize_value
from .core.errors import ParseError
from .core.events import Document, DocumentEvent, EventInstruction
from .core.nodes import NodeKind

PathLike = Union[str, Path]


def _field(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    if key in data:
        return data[key]
    wanted = key.lower()
    for k, v in data.items():
        if k.lower() == wanted:
            return v
    return default


def _text(data: Dict[str, Any], key: str) -> str:
    val = _field(data, key, "")
    if val is None:
        return ""
    if not isinstance(val, str):
        raise ParseError(f"instruction field `{key}` must be a string, got {type(val).__name__}")
    return val


def instruction_from_dict(data: Dict[str, Any]) -> EventInstruction:
    """
    Build an instruction from its wire form.

    Missing fields default to "". Field order does not matter.
    """
    if not isinstance(data, dict):
        raise ParseError(f"instruction must be a JSON object, got {type(data).__name__}")
    return EventInstruction(
        path=_text(data, "Path"),
        action_type=_text(data, "ActionType"),
        data_type=_text(data, "DataType"),
        value=_text(data, "Value"),
    )


def event_from_wire(data: Any) -> DocumentEvent:
    """Build an event from an event object or a bare instruction list."""
    if isinstance(data, list):
        return DocumentEvent(instructions=[instruction_from_dict(i) for i in data])
    if not isinstance(data, dict):
        raise ParseError(f"event must be a JSON object or array, got {type(data).__name__}")

    timestamp = _field(data, "Timestamp")
    if timestamp is not None and (isinstance(timestamp, bool) or not isinstance(timestamp, int)):
        raise ParseError("event field `Timestamp` must be an integer")
    event_id = _field(data, "EventId")
    instructions = _field(data, "Instructions") or []
    if not isinstance(instructions, list):
        raise ParseError("event field `Instructions` must be an array")
    return DocumentEvent(
        instructions=[instruction_from_dict(i) for i in instructions],
        event_id=None if event_id is None else str(event_id),
        timestamp=timestamp,
    )


def _base_bytes(raw: Any) -> bytes:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, str):
        try:
            return base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError) as ex:
            raise ParseError(f"BaseDocument string is not valid base64: {ex}") from ex
    if isinstance(raw, (dict, list)):
        return json.dumps(raw, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    raise ParseError("BaseDocument must be a JSON object, array or base64 string")


def document_from_dict(data: Dict[str, Any], base_document: Optional[bytes] = None) -> Document:
    """
    Build a Document from its wire form.

    Args:
        data: Decoded document object
        base_document: Raw base bytes to use instead of data's BaseDocument
    """
    if not isinstance(data, dict):
        raise ParseError(f"document must be a JSON object, got {type(data).__name__}")
    events = _field(data, "Events") or []
    if not isinstance(events, list):
        raise ParseError("document field `Events` must be an array")
    if base_document is None:
        base_document = _base_bytes(_field(data, "BaseDocument", {}))
    return Document(
        entity_id=str(_field(data, "EntityId") or ""),
        base_document=base_document,
        events=[event_from_wire(e) for e in events],
    )


def _read(path: PathLike) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _decode(raw: bytes, path: PathLike) -> Any:
    try:
        return json.loads(raw)
    except ValueError as ex:
        raise ParseError(f"{path}: invalid JSON: {ex}") from ex


def load_event(path: PathLike) -> DocumentEvent:
    """Load one event file (event object or instruction list)."""
    return event_from_wire(_decode(_read(path), path))


def load_instructions(path: PathLike) -> List[EventInstruction]:
    """Load the instructions of one event file."""
    return list(load_event(path).instructions)


def load_document(path: PathLike) -> Document:
    """
    Load a whole Document file.

    An embedded BaseDocument is cut out of the file through the replay
    tree, so its number literals reach the replay exactly as written.
    """
    raw = _read(path)
    data = _decode(raw, path)
    base_document = None
    node = parse_value(raw)
    if node.kind is NodeKind.OBJECT:
        base = node.get("BaseDocument")
        if base is not None and base.kind in (NodeKind.OBJECT, NodeKind.ARRAY):
            base_document = serialize_value(base).encode("utf-8")
    return document_from_dict(data, base_document=base_document)


def build_document(
    base_path: PathLike, event_paths: Sequence[PathLike] = (), entity_id: str = ""
) -> Document:
    """
    Build a Document from a base JSON file and event files, in order.

    The base file is passed through byte for byte.
    """
    return Document(
        entity_id=entity_id,
        base_document=_read(base_path),
        events=[load_event(p) for p in event_paths],
    )
