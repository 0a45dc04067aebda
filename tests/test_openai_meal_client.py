"""Tests for the OpenAI meal client."""

import asyncio
import json
from datetime import UTC, datetime

import pytest
from openai import APIConnectionError

from macro_coach.adapters.openai_meal_client import OpenAIMealClient
from macro_coach.services.meal_parser import LlmMealParser, MealParseError


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def _estimate(client: OpenAIMealClient, reasoning_effort: str | None) -> dict:
    return asyncio.run(
        client.estimate(
            model="gpt-5.2",
            reasoning_effort=reasoning_effort,
            store=False,
            text="slice of pie",
            schema={"type": "object"},
            prompt="Estimate macros",
        )
    )


def test_openai_meal_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"description": "Pie", "calories": 350}))
    client = OpenAIMealClient(client=fake)  # type: ignore[arg-type]

    result = _estimate(client, "high")

    assert result == {"description": "Pie", "calories": 350}
    payload = fake.responses.last_payload
    assert payload["text"]["format"]["name"] == "meal_estimate"
    assert payload["text"]["format"]["strict"] is True
    assert payload["reasoning"] == {"effort": "high"}
    assert payload["instructions"] == "Estimate macros"


def test_openai_meal_client_omits_empty_reasoning() -> None:
    fake = _FakeOpenAI(json.dumps({}))
    client = OpenAIMealClient(client=fake)  # type: ignore[arg-type]

    _estimate(client, None)

    assert "reasoning" not in fake.responses.last_payload


def test_openai_meal_client_rejects_empty_output() -> None:
    client = OpenAIMealClient(client=_FakeOpenAI(""))  # type: ignore[arg-type]

    with pytest.raises(RuntimeError):
        _estimate(client, "high")


class _FailingResponses:
    async def create(self, **_kwargs):  # type: ignore[no-untyped-def]
        raise APIConnectionError(request=None)  # type: ignore[arg-type]


class _UnreachableOpenAI:
    def __init__(self) -> None:
        self.responses = _FailingResponses()


def test_openai_meal_client_wraps_sdk_errors() -> None:
    client = OpenAIMealClient(client=_UnreachableOpenAI())  # type: ignore[arg-type]

    with pytest.raises(RuntimeError, match="OpenAI request failed"):
        _estimate(client, "high")


def test_connection_error_surfaces_as_parse_error() -> None:
    parser = LlmMealParser(
        client=OpenAIMealClient(client=_UnreachableOpenAI()),  # type: ignore[arg-type]
        model="gpt-5.2",
        reasoning_effort="high",
        store=False,
    )

    with pytest.raises(MealParseError):
        asyncio.run(
            parser.parse_meal_entry("pie", datetime(2026, 10, 17, tzinfo=UTC))
        )
