"""Tests for the state model."""

import pytest

from mealy.models import Role, State, Transition, is_valid_label


def test_labels_use_letters_digits_dollar_and_underscore() -> None:
    assert is_valid_label("q$_0")
    assert not is_valid_label("")
    assert not is_valid_label("q-0")
    assert not is_valid_label("q 0")


def test_state_rejects_bad_label() -> None:
    with pytest.raises(ValueError):
        State(label="bad label")


def test_transition_rejects_empty_match() -> None:
    with pytest.raises(ValueError):
        Transition(match="", target="S0")


def test_transition_rejects_separator_characters_in_match() -> None:
    for match in ("a b", "a,b", "a|b"):
        with pytest.raises(ValueError):
            Transition(match=match, target="S0")


def test_transition_allows_empty_emit() -> None:
    transition = Transition(match="a", target="S0", emit="")
    assert transition.emit == ""


def test_equality_is_by_label_only() -> None:
    a = State(label="S0", role=Role.START, transitions=(Transition("0", "S0"),))
    b = State(label="S0")

    assert a == b
    assert len({a, b}) == 1
    assert not a.same_as(b)


def test_from_columns_builds_ordered_transitions() -> None:
    state = State.from_columns(
        "S0",
        inputs=["0", "1"],
        targets=["S0", "S1"],
        outputs=["a", "b"],
        role=Role.START,
    )

    assert state.output
    assert state.inputs == ("0", "1")
    assert state.targets == ("S0", "S1")
    assert state.outputs == ("a", "b")
    assert state.is_balanced()
    assert state.is_start and not state.is_accept


def test_from_columns_rejects_mismatched_targets() -> None:
    with pytest.raises(ValueError):
        State.from_columns("S0", inputs=["0", "1"], targets=["S0"])


def test_from_columns_with_short_outputs_is_unbalanced() -> None:
    state = State.from_columns("S0", inputs=["0", "1"], targets=["S0", "S1"], outputs=["a"])

    assert state.output
    assert not state.is_balanced()


def test_from_columns_with_long_outputs_is_unbalanced() -> None:
    state = State.from_columns("S0", inputs=["0"], targets=["S1"], outputs=["a", "b"])

    assert state.transitions == (Transition("0", "S1", emit="a"),)
    assert state.unmatched_outputs == ("b",)
    assert not state.is_balanced()


def test_plain_state_with_emit_is_unbalanced() -> None:
    state = State(label="S0", transitions=(Transition("0", "S0", emit="x"),))
    assert not state.is_balanced()


def test_to_dict_includes_emits_only_for_output_states() -> None:
    plain = State.from_columns("S0", ["0"], ["S0"])
    echo = State.from_columns("S0", ["0"], ["S0"], outputs=["0"])

    assert plain.to_dict()["transitions"] == [{"match": "0", "target": "S0"}]
    assert echo.to_dict()["transitions"] == [{"match": "0", "target": "S0", "emit": "0"}]
    assert echo.to_dict()["role"] == "NONE"
