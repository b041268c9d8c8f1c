"""State and transition definitions for transducer machines."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

# Characters allowed in a state label
LABEL_CHARS = frozenset(string.ascii_letters + string.digits + "$_")

# Characters that end a token in the text notation
TOKEN_BREAKS = frozenset(",")
MATCH_BREAKS = frozenset(",|")


class Role(Enum):
    """Role of a state within its machine."""

    NONE = 0
    START = 1
    ACCEPT = 2


def is_valid_label(label: str) -> bool:
    """Check that a label is non-empty and uses only label characters."""
    return bool(label) and all(ch in LABEL_CHARS for ch in label)


def _has_break(token: str, breaks: frozenset[str]) -> bool:
    return any(ch.isspace() or ch in breaks for ch in token)


@dataclass(frozen=True)
class Transition:
    """
    One entry of a state's transition table.

    Attributes:
        match: Literal consumed from the input when this transition fires
        target: Label of the state entered
        emit: Token appended to the output, or None for plain states
    """

    match: str
    target: str
    emit: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.match:
            raise ValueError("Transition match token must not be empty")
        if _has_break(self.match, MATCH_BREAKS):
            raise ValueError(
                f"Transition match token {self.match!r} contains whitespace, ',' or '|'"
            )
        if not is_valid_label(self.target):
            raise ValueError(f"Invalid target label: {self.target!r}")
        if self.emit is not None and _has_break(self.emit, TOKEN_BREAKS):
            raise ValueError(
                f"Transition emit token {self.emit!r} contains whitespace or ','"
            )


@dataclass(frozen=True, eq=False)
class State:
    """
    A named node of a machine.

    A state is either plain (``output`` is False and no transition carries an
    emit token) or output-tracking (``output`` is True and every transition
    carries one). Equality and hashing go by label only.

    ``unmatched_outputs`` holds output tokens supplied without a transition
    to carry them; a state with any is never balanced.
    """

    label: str
    role: Role = Role.NONE
    transitions: tuple[Transition, ...] = field(default_factory=tuple)
    output: bool = False
    unmatched_outputs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not is_valid_label(self.label):
            raise ValueError(f"Invalid state label: {self.label!r}")
        if not isinstance(self.role, Role):
            raise ValueError(f"Invalid role: {self.role!r}")
        object.__setattr__(self, "transitions", tuple(self.transitions))
        object.__setattr__(self, "unmatched_outputs", tuple(self.unmatched_outputs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self.label == other.label

    def __hash__(self) -> int:
        return hash(self.label)

    @classmethod
    def from_columns(
        cls,
        label: str,
        inputs: Sequence[str],
        targets: Sequence[str],
        outputs: Optional[Sequence[str]] = None,
        role: Role = Role.NONE,
    ) -> State:
        """
        Build a state from parallel input/target/output lists.

        This is how editors keep their raw states. ``inputs`` and ``targets``
        must have the same length. An ``outputs`` list of another length
        still builds an output-tracking state, which the validator reports
        as unbalanced: with a shorter list the trailing transitions carry no
        emit, with a longer one the surplus lands in ``unmatched_outputs``.

        Raises:
            ValueError: If inputs and targets differ in length, or a label or
                token is malformed
        """
        if len(inputs) != len(targets):
            raise ValueError(
                f"State {label}: {len(inputs)} inputs but {len(targets)} targets"
            )

        transitions = []
        for i, (match, target) in enumerate(zip(inputs, targets)):
            emit = None
            if outputs is not None and i < len(outputs):
                emit = outputs[i]
            transitions.append(Transition(match=match, target=target, emit=emit))

        return cls(
            label=label,
            role=role,
            transitions=tuple(transitions),
            output=outputs is not None,
            unmatched_outputs=tuple(outputs[len(inputs):]) if outputs is not None else (),
        )

    @property
    def is_start(self) -> bool:
        return self.role is Role.START

    @property
    def is_accept(self) -> bool:
        return self.role is Role.ACCEPT

    @property
    def inputs(self) -> tuple[str, ...]:
        return tuple(t.match for t in self.transitions)

    @property
    def targets(self) -> tuple[str, ...]:
        return tuple(t.target for t in self.transitions)

    @property
    def outputs(self) -> tuple[str, ...]:
        """Emit tokens of an output-tracking state (empty for plain states)."""
        if not self.output:
            return ()
        return tuple(t.emit for t in self.transitions if t.emit is not None)

    def is_balanced(self) -> bool:
        """Check that emit tokens agree with the output tag."""
        if self.unmatched_outputs:
            return False
        if self.output:
            return all(t.emit is not None for t in self.transitions)
        return all(t.emit is None for t in self.transitions)

    def same_as(self, other: State) -> bool:
        """Full structural comparison (label, role, output tag and table)."""
        return (
            self.label == other.label
            and self.role is other.role
            and self.output == other.output
            and self.transitions == other.transitions
            and self.unmatched_outputs == other.unmatched_outputs
        )

    def with_transitions(self, transitions: Iterable[Transition]) -> State:
        """Return a copy of this state with a different transition table."""
        return State(
            label=self.label,
            role=self.role,
            transitions=tuple(transitions),
            output=self.output,
            unmatched_outputs=self.unmatched_outputs,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "label": self.label,
            "role": self.role.name,
            "output": self.output,
            "transitions": [
                {"match": t.match, "target": t.target}
                if not self.output
                else {"match": t.match, "target": t.target, "emit": t.emit}
                for t in self.transitions
            ],
        }
        return data
