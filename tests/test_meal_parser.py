"""Tests for meal-text parsers."""

import asyncio
from datetime import UTC, datetime

import pytest

from macro_coach.domain.plan import MacroTargets
from macro_coach.services.meal_parser import (
    DEFAULT_ESTIMATE,
    MEAL_SCHEMA,
    RETRY_PROMPT,
    KeywordMealParser,
    LlmMealParser,
    MealParseError,
    extract_timestamp,
)
from tests.conftest import FakeMealTextClient

NOW = datetime(2026, 10, 17, 15, 0, tzinfo=UTC)


def _llm_parser(client: FakeMealTextClient) -> LlmMealParser:
    return LlmMealParser(
        client=client, model="gpt-5.2", reasoning_effort="high", store=False
    )


def test_keyword_parser_estimates_pie_at_nine() -> None:
    entry = asyncio.run(
        KeywordMealParser().parse_meal_entry("Slice of pie at 9am", NOW)
    )

    assert entry.description == "Slice of pie at 9am"
    assert entry.timestamp == datetime(2026, 10, 17, 9, 0, tzinfo=UTC)
    assert entry.macros == MacroTargets(
        calories=350, protein_g=4, carbs_g=45, fat_g=16
    )


def test_keyword_parser_defaults() -> None:
    entry = asyncio.run(KeywordMealParser().parse_meal_entry("toast", NOW))

    assert entry.timestamp == NOW
    assert entry.macros == DEFAULT_ESTIMATE


def test_keyword_parser_rejects_blank_text() -> None:
    with pytest.raises(MealParseError) as excinfo:
        asyncio.run(KeywordMealParser().parse_meal_entry("   ", NOW))

    assert excinfo.value.retry_prompt == RETRY_PROMPT


def test_extract_timestamp_handles_pm_and_midnight() -> None:
    assert extract_timestamp("shake at 7:30 pm", NOW) == datetime(
        2026, 10, 17, 19, 30, tzinfo=UTC
    )
    assert extract_timestamp("12am snack", NOW) == datetime(
        2026, 10, 17, 0, 0, tzinfo=UTC
    )
    assert extract_timestamp("13pm snack", NOW) is None
    assert extract_timestamp("lunch", NOW) is None


def test_llm_parser_builds_entry() -> None:
    client = FakeMealTextClient(
        payload={
            "description": "Chicken salad",
            "time_of_day": "08:15",
            "calories": 420,
            "protein_g": 35,
            "carbs_g": 18,
            "fat_g": 22,
        }
    )

    entry = asyncio.run(_llm_parser(client).parse_meal_entry("chicken salad", NOW))

    assert entry.description == "Chicken salad"
    assert entry.timestamp == datetime(2026, 10, 17, 8, 15, tzinfo=UTC)
    assert entry.macros == MacroTargets(
        calories=420, protein_g=35, carbs_g=18, fat_g=22
    )
    assert client.calls[0]["schema"] is MEAL_SCHEMA
    assert client.calls[0]["text"] == "chicken salad"


def test_llm_parser_out_of_range_time_falls_back_to_now() -> None:
    client = FakeMealTextClient(
        payload={
            "description": "Late snack",
            "time_of_day": "25:00",
            "calories": 100,
            "protein_g": 1,
            "carbs_g": 20,
            "fat_g": 1,
        }
    )

    entry = asyncio.run(_llm_parser(client).parse_meal_entry("late snack", NOW))

    assert entry.timestamp == NOW


def test_llm_parser_wraps_client_errors() -> None:
    client = FakeMealTextClient(error=RuntimeError("OpenAI returned an empty response"))

    with pytest.raises(MealParseError):
        asyncio.run(_llm_parser(client).parse_meal_entry("pie", NOW))


def test_llm_parser_rejects_invalid_payload() -> None:
    client = FakeMealTextClient(
        payload={"description": "Pie", "calories": -5, "protein_g": 1}
    )

    with pytest.raises(MealParseError):
        asyncio.run(_llm_parser(client).parse_meal_entry("pie", NOW))


def test_llm_parser_skips_client_for_blank_text() -> None:
    client = FakeMealTextClient()

    with pytest.raises(MealParseError):
        asyncio.run(_llm_parser(client).parse_meal_entry("", NOW))

    assert client.calls == []
