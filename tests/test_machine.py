"""Tests for the machine construction API."""

from mealy import CheckCode, Machine, Role, State


def test_add_state_refuses_duplicates() -> None:
    machine = Machine()

    assert machine.add_state(State.from_columns("S0", ["0"], ["S0"], role=Role.START))
    assert not machine.add_state(State.from_columns("S0", ["1"], ["S0"]))
    assert machine.get_state("S0").inputs == ("0",)
    assert len(machine) == 1


def test_add_state_from_line() -> None:
    machine = Machine()

    assert machine.add_state_from_line("[START] S0 :: S0: 0")
    assert not machine.add_state_from_line("S0 :: S0: 1")
    assert not machine.add_state_from_line("not a state")
    assert machine.labels == ["S0"]


def test_has_get_and_remove(parity: Machine) -> None:
    assert parity.has_state("S1")
    assert "S1" in parity
    assert parity.get_state("S9") is None
    assert parity.get_state(None) is None

    assert parity.remove_state("S1")
    assert not parity.remove_state("S1")
    assert not parity.has_state("S1")
    assert parity.validate().code is CheckCode.UNKNOWN_TARGET


def test_remove_with_prune_drops_incoming_transitions(parity: Machine) -> None:
    parity.remove_state("S1", prune=True)

    assert parity.get_state("S0").targets == ("S0",)
    assert parity.get_state("S0").role is Role.START


def test_get_start_label_returns_first_in_order() -> None:
    machine = Machine.from_text("A :: A: 0\n[START] B :: B: 0\n[START] C :: C: 0")
    assert machine.get_start_label() == "B"


def test_get_start_label_none() -> None:
    assert Machine.from_text("A :: A: 0").get_start_label() is None


def test_state_to_line(parity: Machine) -> None:
    assert parity.state_to_line("S1") == "[ACCEPT] S1 :: S1: 0, S0: 1"
    assert parity.state_to_line("S7") is None


def test_iteration_follows_insertion_order() -> None:
    machine = Machine([
        State.from_columns("Z", ["0"], ["A"]),
        State.from_columns("A", ["0"], ["Z"]),
    ])
    assert [s.label for s in machine] == ["Z", "A"]


def test_equality_compares_full_structure(parity: Machine, parity_echo: Machine) -> None:
    assert parity == Machine.from_text(parity.to_text())
    assert parity != parity_echo
    assert parity != Machine.from_text("[START] S0 :: S1: 1, S0: 0\n[ACCEPT] S1 :: S1: 0, S0: 1")
    # insertion order is not part of equality
    assert parity == Machine.from_text("[ACCEPT] S1 :: S1: 0, S0: 1\n[START] S0 :: S0: 0, S1: 1")


def test_machines_do_not_share_state() -> None:
    first = Machine()
    second = Machine()
    first.add_state_from_line("A :: A: 0")

    assert len(second) == 0
