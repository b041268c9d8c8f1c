"""Structural validator for machines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mealy.models.results import CheckCode, CheckResult, LintWarning
from mealy.utils.logging import get_logger

if TYPE_CHECKING:
    from mealy.machine import Machine

logger = get_logger("validator")


def check(machine: Machine) -> CheckResult:
    """
    Validate a machine in a single pass over its states.

    The first violation in iteration order wins. Per state the checks run
    as: second starting state, unbalanced emit tokens, empty transition
    table, unknown target. Missing start and missing accept are reported
    after the scan.

    Args:
        machine: Machine to check

    Returns:
        CheckResult with code OK or the first violation found
    """
    met_start = False
    met_accept = False

    for state in machine:
        if state.is_start:
            if met_start:
                return _fail(CheckResult(CheckCode.MULTIPLE_START, state=state.label))
            met_start = True
        elif state.is_accept:
            met_accept = True

        if not state.is_balanced():
            return _fail(CheckResult(CheckCode.UNBALANCED, state=state.label))

        if not state.transitions:
            return _fail(CheckResult(CheckCode.NO_TRANSITIONS, state=state.label))

        for target in state.targets:
            if not machine.has_state(target):
                return _fail(CheckResult(
                    CheckCode.UNKNOWN_TARGET,
                    state=state.label,
                    target=target,
                ))

    if not met_start:
        return _fail(CheckResult(CheckCode.NO_START))
    if not met_accept:
        return _fail(CheckResult(CheckCode.NO_ACCEPT))

    logger.debug("validation_passed", states=len(machine))
    return CheckResult(CheckCode.OK)


def _fail(result: CheckResult) -> CheckResult:
    logger.debug("validation_failed", **result.to_dict())
    return result


def describe(result: CheckResult) -> str:
    """Human-readable text for a validation outcome."""
    return result.message


def lint(machine: Machine) -> list[LintWarning]:
    """
    Find transitions that can never fire.

    Matching is first-match-wins on a prefix of the remaining input, so a
    transition is dead when an earlier transition of the same state has a
    match token its own token starts with (identical tokens included).
    Such machines are still valid.
    """
    warnings: list[LintWarning] = []

    for state in machine:
        inputs = state.inputs
        for index, match in enumerate(inputs):
            for earlier in range(index):
                if match.startswith(inputs[earlier]):
                    warnings.append(LintWarning(
                        state=state.label,
                        index=index,
                        match=match,
                        shadowed_by=earlier,
                    ))
                    break

    if warnings:
        logger.info("lint_warnings", count=len(warnings))
    return warnings
