"""Machine: the construction API over an ordered set of states."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from mealy import validator
from mealy.codec.parser import parse_state
from mealy.codec.serializer import state_to_line
from mealy.engine.executor import execute
from mealy.engine.session import Session
from mealy.models.results import CheckResult, ExecutionResult, LintWarning
from mealy.models.state import State
from mealy.utils.logging import get_logger

logger = get_logger("machine")


class Machine:
    """
    A finite-state transducer.

    States are kept in insertion order, which is also the order used by the
    validator and the serializer. The machine must not be modified while an
    execution or session over it is in progress.
    """

    def __init__(self, states: Optional[Iterable[State]] = None) -> None:
        self._states: dict[str, State] = {}
        for state in states or ():
            self.add_state(state)

    def __iter__(self) -> Iterator[State]:
        return iter(self._states.values())

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, label: object) -> bool:
        return label in self._states

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        if self._states.keys() != other._states.keys():
            return False
        return all(
            state.same_as(other._states[label])
            for label, state in self._states.items()
        )

    def __repr__(self) -> str:
        return f"Machine({list(self._states)!r})"

    @property
    def labels(self) -> list[str]:
        return list(self._states)

    def has_state(self, label: str) -> bool:
        """Does this machine have a state with this label?"""
        return label in self._states

    def get_state(self, label: Optional[str]) -> Optional[State]:
        """Get the state with the given label, or None."""
        if label is None:
            return None
        return self._states.get(label)

    def add_state(self, state: State) -> bool:
        """
        Add a state.

        Returns:
            False if a state with the same label is already present
        """
        if state.label in self._states:
            logger.debug("duplicate_state_ignored", label=state.label)
            return False
        self._states[state.label] = state
        return True

    def add_state_from_line(self, line: str) -> bool:
        """
        Parse a line of the state notation and add the result.

        Returns:
            False if the line does not parse or the label is already present
        """
        result = parse_state(line)
        if result.is_err():
            logger.debug("state_line_rejected", error=str(result.unwrap_err()))
            return False
        return self.add_state(result.unwrap())

    def remove_state(self, label: str, prune: bool = False) -> bool:
        """
        Remove the state with the given label.

        Args:
            label: Label to remove
            prune: Also drop transitions of other states that lead to it

        Returns:
            False if no such state exists
        """
        if label not in self._states:
            return False
        del self._states[label]

        if prune:
            for other_label, state in self._states.items():
                kept = [t for t in state.transitions if t.target != label]
                if len(kept) != len(state.transitions):
                    self._states[other_label] = state.with_transitions(kept)
        return True

    def get_start_label(self) -> Optional[str]:
        """Label of the first starting state in iteration order, or None."""
        for state in self._states.values():
            if state.is_start:
                return state.label
        return None

    def validate(self) -> CheckResult:
        """Run the structural validator."""
        return validator.check(self)

    def lint(self) -> list[LintWarning]:
        """Report transitions that can never fire."""
        return validator.lint(self)

    def execute(self, text: str, record_history: bool = False) -> ExecutionResult:
        """Run to completion over ``text``. Validate first."""
        return execute(self, text, record_history)

    def create_session(self, text: str, record_history: bool = False) -> Session:
        """Create a step session over ``text``. Validate first."""
        return Session(self, text, record_history)

    def state_to_line(self, label: str) -> Optional[str]:
        """Render one state as a line, or None if absent."""
        state = self._states.get(label)
        if state is None:
            return None
        return state_to_line(state)

    def to_text(self) -> str:
        """Render the machine as a document, one state per line."""
        from mealy.codec.document import serialize_machine

        return serialize_machine(self)

    @classmethod
    def from_text(cls, text: str) -> Machine:
        """Build a machine from a document, skipping lines that do not parse."""
        from mealy.codec.document import parse_machine

        return parse_machine(text)
