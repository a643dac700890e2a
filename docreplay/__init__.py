"""
Document Replay Engine

Replays ordered events against a base JSON document to produce the
document's current state.
"""

__version__ = "0.1.0"

from .core import (
    ActionType,
    DataType,
    Document,
    DocumentEvent,
    EventInstruction,
    ReplayConfig,
    ReplayError,
)
from .replay import ReplayResult, replay, run_replay

__all__ = [
    "ActionType",
    "DataType",
    "Document",
    "DocumentEvent",
    "EventInstruction",
    "ReplayConfig",
    "ReplayError",
    "ReplayResult",
    "replay",
    "run_replay",
]
