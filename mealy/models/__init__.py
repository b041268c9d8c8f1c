"""Data models for mealy."""

from mealy.models.results import (
    END_OF_INPUT,
    CheckCode,
    CheckResult,
    ExecutionResult,
    LintWarning,
    SessionSnapshot,
)
from mealy.models.state import (
    LABEL_CHARS,
    Role,
    State,
    Transition,
    is_valid_label,
)

__all__ = [
    # State models
    "LABEL_CHARS",
    "Role",
    "State",
    "Transition",
    "is_valid_label",
    # Result models
    "END_OF_INPUT",
    "CheckCode",
    "CheckResult",
    "LintWarning",
    "ExecutionResult",
    "SessionSnapshot",
]
