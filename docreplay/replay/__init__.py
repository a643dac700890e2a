"""
Replay system for document state reconstruction.

Replay applies every event's instructions to a base document to produce
its current state.
"""

from .runner import ReplayResult, replay, run_replay

__all__ = [
    "ReplayResult",
    "replay",
    "run_replay",
]
