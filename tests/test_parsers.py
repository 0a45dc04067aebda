"""Tests for free-text parsing helpers."""

import pytest

from macro_coach.services.parsers import (
    classify,
    classify_words,
    contains_any,
    digits_only,
    extract_measurement,
    first_number,
    match_members,
    parse_number,
    split_list,
    to_cm,
    to_kg,
)


def test_split_list_trims_and_drops_empty_tokens() -> None:
    assert split_list(" rice,  beans ,, ") == ["rice", "beans"]


def test_parse_number_returns_none_for_garbage() -> None:
    assert parse_number("12.5") == 12.5
    assert parse_number("") is None
    assert parse_number("1.2.3") is None


def test_first_number_finds_decimal() -> None:
    assert first_number("Lean mass about 62.5kg") == 62.5
    assert first_number("no idea") is None


def test_digits_only_concatenates_digits() -> None:
    assert digits_only("3 meals") == 3
    assert digits_only("3-4") == 34
    assert digits_only("a few") is None


def test_extract_measurement_uses_token_before_keyword() -> None:
    assert extract_measurement("80 kg, 180 cm", ("kg",)) == (80.0, "kg")
    assert extract_measurement("weighs 176lbs", ("kg", "lb")) == (176.0, "lb")
    assert extract_measurement("kg only", ("kg",)) is None


def test_extract_measurement_skips_keyword_without_number() -> None:
    assert extract_measurement("female, 5 ft", ("m", "ft")) == (5.0, "ft")


def test_unit_conversions() -> None:
    assert to_kg(176, "lb") == pytest.approx(79.832192)
    assert to_kg(80, "kg") == 80
    assert to_cm(1.8, "m") == pytest.approx(180.0)
    assert to_cm(5, "ft") == pytest.approx(152.4)
    assert to_cm(70, "in") == pytest.approx(177.8)
    assert to_cm(180, "cm") == 180


def test_classify_returns_first_matching_row() -> None:
    table = [(("heavy",), "heavy"), (("light",), "light")]

    assert classify("Heavy but light on cardio", table, "moderate") == "heavy"
    assert classify("steady", table, "moderate") == "moderate"


def test_classify_words_ignores_substrings() -> None:
    table = [(("female",), "f"), (("male",), "m")]

    assert classify_words("Female, 30", table) == "f"
    assert classify_words("male", table) == "m"
    assert classify_words("1.8 m", table) is None


def test_match_members_keeps_table_order() -> None:
    table = [(("gain",), "gain"), (("loss",), "loss")]

    assert match_members("loss then gain", table) == ["gain", "loss"]


def test_contains_any_is_case_insensitive() -> None:
    assert contains_any(["Evening SAUNA"], ("sauna",))
    assert not contains_any([], ("sauna",))


def test_overflowing_numbers_are_rejected() -> None:
    assert parse_number("9" * 400) is None
    assert first_number("9" * 400 + " kg") is None
    assert digits_only("9" * 5000) is None
