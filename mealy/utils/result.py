"""Result type for explicit error handling.

Parsing and configuration loading never raise: they hand back either an
``Ok`` carrying the value or an ``Err`` carrying a small error record, and
the caller decides whether the failure is fatal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, Optional, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped type


class ResultError(Exception):
    """Raised when unwrapping a Result fails."""

    pass


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value. Safe to call since this is Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get the success value or a default."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Get the error value. Raises since this is Ok."""
        raise ResultError(f"Called unwrap_err on Ok value: {self.value}")

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """Transform the success value."""
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[E], U]) -> "Ok[T]":
        """Transform the error value. No-op for Ok."""
        return self

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        """Chain another Result-returning operation."""
        return fn(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents an error result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Get the success value. Raises since this is Err."""
        raise ResultError(f"Called unwrap on Err value: {self.error}")

    def unwrap_or(self, default: T) -> T:
        """Get the success value or a default."""
        return default

    def unwrap_err(self) -> E:
        """Get the error value. Safe to call since this is Err."""
        return self.error

    def map(self, fn: Callable[[T], U]) -> "Err[E]":
        """Transform the success value. No-op for Err."""
        return self

    def map_err(self, fn: Callable[[E], U]) -> "Err[U]":
        """Transform the error value."""
        return Err(fn(self.error))

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Err[E]":
        """Chain another Result-returning operation. No-op for Err."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class ParseError:
    """
    A line that could not be parsed.

    Attributes:
        offset: 0-based character offset where the scanner stopped
        reason: Short description of what was expected there
        line: The offending line
        line_number: 1-based line number within a document, if known
    """

    offset: int
    reason: str
    line: str = ""
    line_number: Optional[int] = None

    def with_line_number(self, line_number: int) -> "ParseError":
        return ParseError(
            offset=self.offset,
            reason=self.reason,
            line=self.line,
            line_number=line_number,
        )

    def caret(self) -> str:
        """Render the line with a caret under the failing offset."""
        return f"{self.line}\n{' ' * self.offset}^"

    def __str__(self) -> str:
        where = f"line {self.line_number}, " if self.line_number else ""
        return f"Parse failed at {where}offset {self.offset}: {self.reason}"


@dataclass(frozen=True)
class ConfigError:
    """Error in configuration."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"Config error in '{self.field}': {self.message}"


# Exit codes
class ExitCode:
    """Exit codes for CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1

    # Input errors (10-19)
    PARSE_FAILED = 10
    INVALID_MACHINE = 11
    CONFIG_INVALID = 12

    # Execution outcomes (20-29)
    INPUT_REJECTED = 20


def collect_results(results: list[Result[T, E]]) -> Result[list[T], list[E]]:
    """
    Collect a list of Results into a single Result.

    Returns Ok with all values if all are Ok, or Err with all errors if any are Err.
    """
    values = []
    errors = []

    for result in results:
        if result.is_ok():
            values.append(result.unwrap())
        else:
            errors.append(result.unwrap_err())

    if errors:
        return Err(errors)
    return Ok(values)


def first_err(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect a list of Results, returning the first error if any.

    Returns Ok with all values if all are Ok, or Err with the first error.
    """
    values = []

    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())

    return Ok(values)
