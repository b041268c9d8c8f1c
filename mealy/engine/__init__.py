"""Execution engine: batch runs and step sessions over a shared cursor."""

from mealy.engine.cursor import (
    Cursor,
    MachineError,
    MissingStartError,
    UnknownStateError,
    match_transition,
    stuck_message,
)
from mealy.engine.executor import execute
from mealy.engine.session import Session, create_session

__all__ = [
    "Cursor",
    "MachineError",
    "MissingStartError",
    "UnknownStateError",
    "match_transition",
    "stuck_message",
    "execute",
    "Session",
    "create_session",
]
