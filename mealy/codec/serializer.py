"""Render states back into the one-line notation."""

from __future__ import annotations

from mealy.models.state import Role, State, Transition

ROLE_MARKS: dict[Role, str] = {
    Role.NONE: "",
    Role.START: "[START] ",
    Role.ACCEPT: "[ACCEPT] ",
}


def transition_to_text(transition: Transition, output: bool) -> str:
    """Render one clause: ``dst: match`` or ``dst: match|emit``."""
    text = f"{transition.target}: {transition.match}"
    if output:
        text += f"|{transition.emit or ''}"
    return text


def state_to_line(state: State) -> str:
    """
    Render a state as a single line.

    Example:
        ``[START] S0 :: S0: 0|a, S1: 1|b``
    """
    head = f"{ROLE_MARKS[state.role]}{state.label} ::"
    if not state.transitions:
        return head
    clauses = ", ".join(
        transition_to_text(t, state.output) for t in state.transitions
    )
    return f"{head} {clauses}"
