"""mealy - finite-state transducers from a compact line notation.

A machine is a set of labelled states, each with an ordered transition table
``target: match[|emit]``. Machines are built programmatically or parsed from
text, checked by a structural validator, and then executed either to
completion or one transition at a time::

    machine = Machine.from_text(
        "[START] S0 :: S0: 0, S1: 1\\n"
        "[ACCEPT] S1 :: S1: 0, S0: 1"
    )
    if machine.validate().ok:
        result = machine.execute("1010")
"""

__version__ = "0.3.0"

from mealy.codec.document import parse_machine, parse_machine_strict, serialize_machine
from mealy.codec.parser import parse_state
from mealy.codec.serializer import state_to_line
from mealy.engine import MachineError, MissingStartError, Session, UnknownStateError, execute
from mealy.machine import Machine
from mealy.models import (
    CheckCode,
    CheckResult,
    ExecutionResult,
    LintWarning,
    Role,
    SessionSnapshot,
    State,
    Transition,
)

__all__ = [
    "__version__",
    # Model
    "Role",
    "State",
    "Transition",
    "Machine",
    # Codec
    "parse_state",
    "parse_machine",
    "parse_machine_strict",
    "serialize_machine",
    "state_to_line",
    # Validation
    "CheckCode",
    "CheckResult",
    "LintWarning",
    # Execution
    "execute",
    "Session",
    "ExecutionResult",
    "SessionSnapshot",
    "MachineError",
    "MissingStartError",
    "UnknownStateError",
]
