"""Matching rule and execution cursor shared by batch runs and step sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from mealy.models.results import END_OF_INPUT, ExecutionResult
from mealy.models.state import State, Transition

if TYPE_CHECKING:
    from mealy.machine import Machine


class MachineError(Exception):
    """A machine was executed in violation of its structural contract."""

    pass


class MissingStartError(MachineError):
    """Execution was requested on a machine without a starting state."""

    def __init__(self) -> None:
        super().__init__("Machine has no starting state; validate it before executing")


class UnknownStateError(MachineError):
    """A transition led to a label that is not part of the machine."""

    def __init__(self, state: str, target: str) -> None:
        self.state = state
        self.target = target
        super().__init__(f"State {state}: transition into unknown state {target}")


def match_transition(state: State, text: str, position: int) -> Optional[Transition]:
    """
    Find the transition that fires at ``position``.

    Transitions are tried in declared order and the first whose match token
    is a prefix of the remaining input wins, even when a later one would
    consume more.
    """
    for transition in state.transitions:
        if text.startswith(transition.match, position):
            return transition
    return None


def stuck_message(state: State, text: str, position: int) -> str:
    """Describe the remaining input and the tokens that failed to match it."""
    tokens = ",".join(f'"{match}"' for match in state.inputs)
    return f'No inputs from string "{text[position:]}" matching [{tokens}]'


class Cursor:
    """
    Mutable position of one run over one input.

    The cursor only reads the machine; the machine must not change while a
    cursor bound to it is in use.
    """

    def __init__(
        self,
        machine: Machine,
        text: str,
        record_history: bool = False,
    ) -> None:
        start = machine.get_start_label()
        if start is None:
            raise MissingStartError()

        self.machine = machine
        self.text = text
        self.state: State = machine.get_state(start)
        self.position = 0
        self.output = ""
        self.transitions = 0
        self.message = ""
        self.stuck = False
        self.history: Optional[list[str]] = [start] if record_history else None

    @property
    def exhausted(self) -> bool:
        return self.position >= len(self.text)

    def advance(self) -> bool:
        """
        Apply the matching rule once.

        Returns:
            True if a transition fired, False if the cursor is stuck
        """
        transition = match_transition(self.state, self.text, self.position)
        if transition is None:
            self.message = stuck_message(self.state, self.text, self.position)
            self.stuck = True
            return False

        next_state = self.machine.get_state(transition.target)
        if next_state is None:
            raise UnknownStateError(self.state.label, transition.target)

        self.position += len(transition.match)
        if self.state.output and transition.emit:
            self.output += transition.emit
        self.transitions += 1
        if self.history is not None:
            self.history.append(next_state.label)
        self.state = next_state
        return True

    def finish(self) -> None:
        """Mark the input as fully consumed."""
        self.message = END_OF_INPUT

    @property
    def accepted(self) -> bool:
        return self.state.is_accept and not self.stuck

    def result(self) -> ExecutionResult:
        return ExecutionResult(
            accepted=self.accepted,
            final=self.state.label,
            output=self.output,
            transitions=self.transitions,
            message=self.message,
            history=tuple(self.history) if self.history is not None else None,
        )
