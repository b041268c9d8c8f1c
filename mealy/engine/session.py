"""Resumable, caller-driven execution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from mealy.engine.cursor import Cursor
from mealy.models.results import ExecutionResult, SessionSnapshot
from mealy.utils.logging import get_logger, new_session_id

if TYPE_CHECKING:
    from mealy.machine import Machine

logger = get_logger("engine.session")


class Session:
    """
    A run that advances one transition per call to :meth:`step`.

    Nothing is scheduled: the caller decides when to step, and simply stops
    calling to abandon the run. Attributes reflect progress after the last
    call, so a caller can render intermediate states between steps.

    Stepping to completion gives the same final state, output, transition
    count, message and history as :func:`mealy.engine.execute`.
    """

    def __init__(
        self,
        machine: Machine,
        text: str,
        record_history: bool = False,
    ) -> None:
        self._cursor = Cursor(machine, text, record_history)
        self.done = False
        self.session_id = new_session_id()
        self._logger = logger.bind(session_id=self.session_id)
        self._logger.debug(
            "session_created",
            start=self._cursor.state.label,
            length=len(text),
        )

    @property
    def state(self) -> str:
        """Label of the current state."""
        return self._cursor.state.label

    @property
    def output(self) -> str:
        return self._cursor.output

    @property
    def transitions(self) -> int:
        return self._cursor.transitions

    @property
    def position(self) -> int:
        """Offset of the next unread character."""
        return self._cursor.position

    @property
    def message(self) -> str:
        return self._cursor.message

    @property
    def history(self) -> Optional[tuple[str, ...]]:
        if self._cursor.history is None:
            return None
        return tuple(self._cursor.history)

    @property
    def accepted(self) -> bool:
        """True once the session is done in an accepting state without getting stuck."""
        return self.done and self._cursor.accepted

    def step(self) -> bool:
        """
        Take at most one transition.

        Returns:
            True if a transition fired. False when the input was already
            consumed (the session is done with "End Of Input"), when no
            transition matches (the session is done and stuck), or when the
            session was already done.
        """
        if self.done:
            return False

        cursor = self._cursor
        if cursor.exhausted:
            cursor.finish()
            self.done = True
            self._logger.debug("session_finished", final=self.state, transitions=self.transitions)
            return False

        if cursor.advance():
            self._logger.debug("session_step", state=self.state, position=self.position)
            return True

        self.done = True
        self._logger.debug("session_stuck", state=self.state, position=self.position)
        return False

    def steps(self) -> Iterator[SessionSnapshot]:
        """Step until done, yielding a snapshot after every call to step()."""
        while not self.done:
            self.step()
            yield self.snapshot()

    def run(self) -> ExecutionResult:
        """Step until done and return the final result."""
        while self.step():
            pass
        return self.result()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self.state,
            output=self.output,
            transitions=self.transitions,
            position=self.position,
            done=self.done,
            message=self.message,
            history=self.history,
        )

    def result(self) -> ExecutionResult:
        """Result of the run so far; final once the session is done."""
        result = self._cursor.result()
        if not self.done:
            return ExecutionResult(
                accepted=False,
                final=result.final,
                output=result.output,
                transitions=result.transitions,
                message=result.message,
                history=result.history,
            )
        return result


def create_session(
    machine: Machine,
    text: str,
    record_history: bool = False,
) -> Session:
    """
    Create a step session over ``text``.

    Raises:
        MissingStartError: If the machine has no starting state
    """
    return Session(machine, text, record_history)
