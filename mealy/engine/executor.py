"""Run-to-completion execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mealy.engine.cursor import Cursor
from mealy.models.results import ExecutionResult
from mealy.utils.logging import get_logger

if TYPE_CHECKING:
    from mealy.machine import Machine

logger = get_logger("engine.executor")


def execute(
    machine: Machine,
    text: str,
    record_history: bool = False,
) -> ExecutionResult:
    """
    Run a machine over an input until it is consumed or no transition matches.

    Every successful step consumes at least one character, so the run always
    terminates.

    Args:
        machine: A machine that passed validation
        text: Input string
        record_history: Record the labels of visited states

    Returns:
        ExecutionResult describing the final state of the run

    Raises:
        MissingStartError: If the machine has no starting state
        UnknownStateError: If a transition leads outside the machine
    """
    cursor = Cursor(machine, text, record_history)
    logger.debug("execution_started", start=cursor.state.label, length=len(text))

    while not cursor.exhausted:
        if not cursor.advance():
            break
    else:
        cursor.finish()

    result = cursor.result()
    logger.debug(
        "execution_finished",
        final=result.final,
        accepted=result.accepted,
        transitions=result.transitions,
        stuck=cursor.stuck,
    )
    return result
