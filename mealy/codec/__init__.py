"""Text codec for the line-oriented machine notation."""

from mealy.codec.parser import parse_lines, parse_state
from mealy.codec.serializer import state_to_line, transition_to_text

__all__ = [
    "parse_state",
    "parse_lines",
    "state_to_line",
    "transition_to_text",
]
