"""OpenAI Responses API client for meal-text estimation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from macro_coach.services.meal_parser import MealTextClient


@dataclass
class OpenAIMealClient(MealTextClient):
    """Meal text client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealClient":
        """Create an OpenAI meal client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    async def estimate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        text: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs.

        SDK failures and empty output are raised as ``RuntimeError``.
        """
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": prompt,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": text}],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise RuntimeError(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)
