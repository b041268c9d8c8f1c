"""Data models for validation and execution outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Message reported when the whole input has been consumed
END_OF_INPUT = "End Of Input"


class CheckCode(Enum):
    """Outcome codes of the structural validator."""

    OK = 0
    NO_START = 1
    MULTIPLE_START = 2
    NO_ACCEPT = 3
    UNKNOWN_TARGET = 4
    UNBALANCED = 5
    NO_TRANSITIONS = 6


@dataclass(frozen=True)
class CheckResult:
    """
    Result of validating a machine.

    Attributes:
        code: Outcome code
        state: Offending state label (MULTIPLE_START, UNKNOWN_TARGET,
            UNBALANCED, NO_TRANSITIONS)
        target: Unknown target label (UNKNOWN_TARGET)
    """

    code: CheckCode
    state: Optional[str] = None
    target: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code is CheckCode.OK

    @property
    def message(self) -> str:
        """Human-readable description of the outcome."""
        code = self.code
        if code is CheckCode.OK:
            return "OK"
        if code is CheckCode.NO_START:
            return "No starting state found"
        if code is CheckCode.MULTIPLE_START:
            return f"More than one starting state found ({self.state})"
        if code is CheckCode.NO_ACCEPT:
            return "No accepting state"
        if code is CheckCode.UNKNOWN_TARGET:
            return f"State {self.state}: unknown connecting state {self.target}"
        if code is CheckCode.UNBALANCED:
            return f"State {self.state}: unbalanced inputs/outputs/targets"
        return f"State {self.state}: takes no inputs"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data: dict = {"code": self.code.name, "message": self.message}
        if self.state is not None:
            data["state"] = self.state
        if self.target is not None:
            data["target"] = self.target
        return data


@dataclass(frozen=True)
class LintWarning:
    """A transition that can never fire because an earlier one shadows it."""

    state: str
    index: int
    match: str
    shadowed_by: int

    def __str__(self) -> str:
        return (
            f"State {self.state}: transition {self.index} on {self.match!r} "
            f"is shadowed by transition {self.shadowed_by}"
        )

    def to_dict(self) -> dict:
        return {
            "state": self.state,
            "index": self.index,
            "match": self.match,
            "shadowed_by": self.shadowed_by,
            "message": str(self),
        }


@dataclass(frozen=True)
class ExecutionResult:
    """
    Final outcome of running a machine over an input.

    Attributes:
        accepted: Final state is an accepting state and the run did not get stuck
        final: Label of the final state
        output: Concatenated emit tokens
        transitions: Number of transitions taken
        message: "End Of Input" or a description of the unmatched input
        history: Visited labels starting with the start state, when recorded
    """

    accepted: bool
    final: str
    output: str
    transitions: int
    message: str
    history: Optional[tuple[str, ...]] = None

    @property
    def stuck(self) -> bool:
        return self.message != END_OF_INPUT

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "accepted": self.accepted,
            "final": self.final,
            "output": self.output,
            "transitions": self.transitions,
            "message": self.message,
        }
        if self.history is not None:
            data["history"] = list(self.history)
        return data


@dataclass(frozen=True)
class SessionSnapshot:
    """Observable progress of a step session between two calls to step()."""

    state: str
    output: str
    transitions: int
    position: int
    done: bool
    message: str
    history: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            "state": self.state,
            "output": self.output,
            "transitions": self.transitions,
            "position": self.position,
            "done": self.done,
            "message": self.message,
        }
        if self.history is not None:
            data["history"] = list(self.history)
        return data
