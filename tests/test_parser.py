"""Tests for the line scanner."""

import pytest

from mealy.codec import parse_lines, parse_state
from mealy.models import Role, Transition


def parsed(line: str):
    result = parse_state(line)
    assert result.is_ok(), result
    return result.unwrap()


def failed_at(line: str) -> int:
    result = parse_state(line)
    assert result.is_err(), result
    return result.unwrap_err().offset


def test_parses_plain_state() -> None:
    state = parsed("[START] S0 :: S0: 0, S1: 1")

    assert state.label == "S0"
    assert state.role is Role.START
    assert not state.output
    assert state.transitions == (
        Transition("0", "S0"),
        Transition("1", "S1"),
    )


def test_parses_output_state() -> None:
    state = parsed("[ACCEPT] S1 :: S1: 0|x, S0: 1|y")

    assert state.role is Role.ACCEPT
    assert state.output
    assert state.outputs == ("x", "y")


def test_role_keywords_are_case_insensitive() -> None:
    assert parsed("[start] A :: A: 0").role is Role.START
    assert parsed("[Accept] A :: A: 0").role is Role.ACCEPT


def test_empty_role_block_means_no_role() -> None:
    assert parsed("[] A :: A: 0").role is Role.NONE
    assert parsed("A :: A: 0").role is Role.NONE


def test_whitespace_is_optional_between_tokens() -> None:
    state = parsed("  [ START ]A::B:ab,A:c  ")

    assert state.role is Role.START
    assert state.inputs == ("ab", "c")
    assert state.targets == ("B", "A")


def test_multi_character_tokens() -> None:
    state = parsed("q$_1 :: q$_1: abc|xyz")
    assert state.transitions == (Transition("abc", "q$_1", "xyz"),)


def test_empty_emit_token_is_allowed() -> None:
    state = parsed("A :: A: 0|, B: 1|b")
    assert state.outputs == ("", "b")


def test_clause_without_comma_ends_the_list() -> None:
    state = parsed("A :: A: 0 trailing words")
    assert state.inputs == ("0",)


def test_empty_transition_list() -> None:
    state = parsed("[ACCEPT] A ::")
    assert state.transitions == ()


def test_unknown_role_fails_at_its_offset() -> None:
    assert failed_at("[FINAL] A :: A: 0") == 1


def test_two_roles_fail_at_second_keyword() -> None:
    assert failed_at("[START ACCEPT] A :: A: 0") == 7


def test_unclosed_role_block_fails() -> None:
    assert failed_at("[START") == 6


def test_missing_label_fails() -> None:
    assert failed_at("[START] :: A: 0") == 8


def test_missing_separator_fails() -> None:
    result = parse_state("S0 S1: 0")
    error = result.unwrap_err()

    assert error.offset == 3
    assert error.reason == "expected '::'"
    assert error.line == "S0 S1: 0"


def test_missing_destination_fails() -> None:
    assert failed_at("S0 :: :0") == 6


def test_missing_colon_fails() -> None:
    assert failed_at("S0 :: S1 0") == 9


def test_missing_match_token_fails() -> None:
    assert failed_at("S0 :: S1:") == 9


def test_trailing_comma_fails() -> None:
    assert failed_at("S0 :: S1: 0,") == 12


def test_every_clause_needs_an_emit_once_the_first_has_one() -> None:
    assert failed_at("S0 :: S0: 0|a, S1: 1") == 20


def test_emit_after_plain_first_clause_fails() -> None:
    assert failed_at("S0 :: S0: 0, S1: 1|b") == 18


@pytest.mark.parametrize("line", ["", "   ", "::", "[ACCEPT]"])
def test_degenerate_lines_fail_without_raising(line: str) -> None:
    assert parse_state(line).is_err()


def test_caret_points_at_failure() -> None:
    error = parse_state("S0 S1: 0").unwrap_err()
    assert error.caret() == "S0 S1: 0\n   ^"


def test_parse_lines_skips_blank_lines_and_numbers_errors() -> None:
    results = parse_lines("A :: A: 0\n\n   \nbroken line\nB :: B: 1\n")

    assert len(results) == 3
    assert results[0].is_ok()
    assert results[1].unwrap_err().line_number == 4
    assert results[2].unwrap().label == "B"


def test_parse_lines_handles_crlf() -> None:
    results = parse_lines("A :: A: 0\r\nB :: B: 1\r\n")
    assert [r.unwrap().label for r in results] == ["A", "B"]
    assert results[1].unwrap().inputs == ("1",)
