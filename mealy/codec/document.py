"""Whole-document parsing and serialization."""

from __future__ import annotations

from mealy.codec.parser import parse_lines
from mealy.codec.serializer import state_to_line
from mealy.machine import Machine
from mealy.utils.logging import get_logger
from mealy.utils.result import Err, Ok, ParseError, Result, first_err

logger = get_logger("codec.document")


def parse_machine(text: str) -> Machine:
    """
    Parse a document leniently.

    Blank lines are ignored, lines that fail to parse are skipped, and a
    label seen twice keeps its first definition.
    """
    machine = Machine()
    skipped = 0

    for result in parse_lines(text):
        if result.is_err():
            error = result.unwrap_err()
            logger.warning(
                "line_skipped",
                line_number=error.line_number,
                offset=error.offset,
                reason=error.reason,
            )
            skipped += 1
            continue
        machine.add_state(result.unwrap())

    logger.debug("machine_parsed", states=len(machine), skipped=skipped)
    return machine


def parse_machine_strict(text: str) -> Result[Machine, ParseError]:
    """
    Parse a document, failing on the first line that does not parse.

    Returns:
        Ok with the machine, or Err with the first ParseError (with its line
        number)
    """
    collected = first_err(parse_lines(text))
    if collected.is_err():
        error = collected.unwrap_err()
        logger.info("machine_parse_failed", line_number=error.line_number, offset=error.offset)
        return Err(error)

    machine = Machine()
    for state in collected.unwrap():
        machine.add_state(state)

    logger.debug("machine_parsed", states=len(machine), skipped=0)
    return Ok(machine)


def serialize_machine(machine: Machine) -> str:
    """Render every state on its own line, in machine order."""
    return "\n".join(state_to_line(state) for state in machine)
