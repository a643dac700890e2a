"""
Replay runner: fold a document's events into its base snapshot.

Replay is pure: no I/O, no shared state. The tree is rebuilt from the
base bytes on every call and discarded after serialization.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.applier import InstructionApplier
from ..core.codec import parse_document, serialize_document
from ..core.config import ReplayConfig
from ..core.errors import ReplayError
from ..core.events import Document
from ..logging_config import get_logger


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of a replay.

    Fields:
        output: Serialized current state of the document
        events_applied: Number of events applied
        instructions_applied: Number of instructions applied
    """
    output: bytes
    events_applied: int
    instructions_applied: int


def run_replay(document: Document, config: Optional[ReplayConfig] = None) -> ReplayResult:
    """
    Replay every event of a document against its base snapshot.

    Events are applied in order, and instructions in order within each
    event. The first failing instruction aborts the whole replay: nothing
    is rolled back and no output is produced.

    Args:
        document: Base snapshot plus events
        config: Remove-action settings (defaults to ReplayConfig())

    Returns:
        ReplayResult with the serialized document and counts

    Raises:
        ReplayError: On the first failure, with event_index and
            instruction_index set when an instruction failed
    """
    logger = get_logger(__name__, trace_id=document.entity_id)
    applier = InstructionApplier(config)

    root = parse_document(document.base_document)

    events_applied = 0
    instructions_applied = 0
    for event_index, event in enumerate(document.events):
        for instruction_index, instruction in enumerate(event.instructions):
            logger.debug(
                f"Applying event {event_index} instruction {instruction_index}: "
                f"{instruction.action_type} `{instruction.path}`"
            )
            try:
                applier.apply(root, instruction)
            except ReplayError as ex:
                logger.error(
                    f"Replay failed at event {event_index} instruction {instruction_index}: {ex}"
                )
                raise ex.locate(event_index, instruction_index)
            instructions_applied += 1
        events_applied += 1

    output = serialize_document(root)
    logger.info(f"Replayed {events_applied} events ({instructions_applied} instructions)")
    return ReplayResult(
        output=output,
        events_applied=events_applied,
        instructions_applied=instructions_applied,
    )


def replay(document: Document, config: Optional[ReplayConfig] = None) -> bytes:
    """
    Return the current state of a document as compact JSON bytes.

    Same as run_replay(document, config).output.
    """
    return run_replay(document, config).output
