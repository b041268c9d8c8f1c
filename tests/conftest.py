"""Shared fixtures for mealy tests."""

from __future__ import annotations

import sys

import pytest

from mealy import Machine
from mealy.utils.logging import configure_logging

# Tracks the parity of '1's: S1 after an odd number of them
PARITY = """\
[START] S0 :: S0: 0, S1: 1
[ACCEPT] S1 :: S1: 0, S0: 1
"""

# Same topology, echoing every input token
PARITY_ECHO = """\
[START] S0 :: S0: 0|0, S1: 1|1
[ACCEPT] S1 :: S1: 0|0, S0: 1|1
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Point logging back at the live stderr after tests that swap streams."""
    yield
    configure_logging(level="warn", format_type="json", stream=sys.stderr)


@pytest.fixture
def parity_text() -> str:
    return PARITY


@pytest.fixture
def parity_echo_text() -> str:
    return PARITY_ECHO


@pytest.fixture
def parity() -> Machine:
    return Machine.from_text(PARITY)


@pytest.fixture
def parity_echo() -> Machine:
    return Machine.from_text(PARITY_ECHO)
