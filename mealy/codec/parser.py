"""Hand-written scanner for the one-line state notation.

A line looks like::

    [START] S0 :: S0: 0|a, S1: 1|b

The scanner walks the line left to right. It never raises: every entry point
returns ``Ok(State)`` or ``Err(ParseError)`` where the error carries the
character offset at which the scanner could not proceed.
"""

from __future__ import annotations

from typing import Optional

from mealy.models.state import LABEL_CHARS, MATCH_BREAKS, TOKEN_BREAKS, Role, State, Transition
from mealy.utils.result import Err, Ok, ParseError, Result

ROLE_KEYWORDS: tuple[Role, ...] = (Role.START, Role.ACCEPT)


class _Fail(Exception):
    """Internal signal carrying the failure offset out of nested scanning."""

    def __init__(self, offset: int, reason: str) -> None:
        self.offset = offset
        self.reason = reason
        super().__init__(reason)


class _Scanner:
    """Cursor over a single line."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.line)

    def peek(self) -> str:
        if self.at_end():
            return ""
        return self.line[self.pos]

    def startswith(self, text: str) -> bool:
        return self.line.startswith(text, self.pos)

    def skip_ws(self) -> None:
        while not self.at_end() and self.line[self.pos].isspace():
            self.pos += 1

    def take_label(self) -> str:
        start = self.pos
        while not self.at_end() and self.line[self.pos] in LABEL_CHARS:
            self.pos += 1
        return self.line[start:self.pos]

    def take_token(self, breaks: frozenset[str]) -> str:
        start = self.pos
        while not self.at_end():
            ch = self.line[self.pos]
            if ch.isspace() or ch in breaks:
                break
            self.pos += 1
        return self.line[start:self.pos]

    def fail(self, reason: str) -> _Fail:
        return _Fail(self.pos, reason)


def _scan_role(scanner: _Scanner) -> Role:
    """Scan an optional ``[START]`` / ``[ACCEPT]`` block."""
    if scanner.peek() != "[":
        return Role.NONE

    scanner.pos += 1
    scanner.skip_ws()
    role = Role.NONE

    while scanner.peek() != "]":
        if scanner.at_end():
            raise scanner.fail("expected ']'")

        keyword = _match_keyword(scanner)
        if keyword is None:
            raise scanner.fail("unknown role")
        if role is not Role.NONE:
            raise scanner.fail("a state cannot have more than one role")

        role = keyword
        scanner.pos += len(keyword.name)
        scanner.skip_ws()

    scanner.pos += 1
    return role


def _match_keyword(scanner: _Scanner) -> Optional[Role]:
    for role in ROLE_KEYWORDS:
        name = role.name
        chunk = scanner.line[scanner.pos:scanner.pos + len(name)]
        if chunk.upper() == name:
            return role
    return None


def _scan_transitions(scanner: _Scanner) -> tuple[list[Transition], bool]:
    """
    Scan the comma-separated clause list after ``::``.

    The first clause fixes whether the line uses the ``match|emit`` form;
    every following clause must agree.
    """
    transitions: list[Transition] = []
    with_output: Optional[bool] = None

    if scanner.at_end():
        return transitions, False

    while True:
        scanner.skip_ws()
        target = scanner.take_label()
        if not target:
            raise scanner.fail("expected destination label")

        scanner.skip_ws()
        if scanner.peek() != ":":
            raise scanner.fail("expected ':'")
        scanner.pos += 1
        scanner.skip_ws()

        match = scanner.take_token(MATCH_BREAKS)
        if not match:
            raise scanner.fail("expected input token")
        scanner.skip_ws()

        has_emit = scanner.peek() == "|"
        if with_output is None:
            with_output = has_emit
        elif has_emit != with_output:
            if has_emit:
                raise scanner.fail("unexpected output token on a state without outputs")
            raise scanner.fail("expected '|' and an output token")

        emit = None
        if has_emit:
            scanner.pos += 1
            scanner.skip_ws()
            emit = scanner.take_token(TOKEN_BREAKS)
            scanner.skip_ws()

        transitions.append(Transition(match=match, target=target, emit=emit))

        # A clause without a trailing comma ends the list
        if scanner.peek() != ",":
            break
        scanner.pos += 1

    return transitions, bool(with_output)


def _scan_state(scanner: _Scanner) -> State:
    scanner.skip_ws()
    role = _scan_role(scanner)

    scanner.skip_ws()
    label = scanner.take_label()
    if not label:
        raise scanner.fail("expected state label")

    scanner.skip_ws()
    if not scanner.startswith("::"):
        raise scanner.fail("expected '::'")
    scanner.pos += 2
    scanner.skip_ws()

    transitions, with_output = _scan_transitions(scanner)
    return State(
        label=label,
        role=role,
        transitions=tuple(transitions),
        output=with_output,
    )


def parse_state(line: str) -> Result[State, ParseError]:
    """
    Parse one line of the state notation.

    Args:
        line: A single line, without its newline

    Returns:
        Ok with the parsed State, or Err with the offset where parsing stopped
    """
    scanner = _Scanner(line)
    try:
        return Ok(_scan_state(scanner))
    except _Fail as e:
        return Err(ParseError(offset=e.offset, reason=e.reason, line=line))


def parse_lines(text: str) -> list[Result[State, ParseError]]:
    """
    Parse every non-blank line of a document.

    Errors carry the 1-based line number they came from.
    """
    results: list[Result[State, ParseError]] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        result = parse_state(line)
        if result.is_err():
            result = Err(result.unwrap_err().with_line_number(number))
        results.append(result)
    return results
