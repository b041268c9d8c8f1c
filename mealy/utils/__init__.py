"""Utility modules for mealy."""

from mealy.utils.atomic import AtomicWriteError, atomic_write, atomic_write_text
from mealy.utils.logging import (
    configure_logging,
    get_logger,
    new_session_id,
    set_command,
)
from mealy.utils.result import (
    ConfigError,
    Err,
    ExitCode,
    Ok,
    ParseError,
    Result,
    ResultError,
    collect_results,
    first_err,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "new_session_id",
    "set_command",
    # Atomic writes
    "AtomicWriteError",
    "atomic_write",
    "atomic_write_text",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ParseError",
    "ConfigError",
    "ExitCode",
    "collect_results",
    "first_err",
]
