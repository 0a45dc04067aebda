"""Turn free-text meal descriptions into macro estimates."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Protocol

from pydantic import ValidationError

from macro_coach.domain.estimates import MealEstimate
from macro_coach.domain.logs import Adjustment, DayContext, MealEntry
from macro_coach.domain.plan import MacroTargets
from macro_coach.services.advisor import RuleBasedAdvisor

_logger = logging.getLogger(__name__)

RETRY_PROMPT = (
    "I couldn't parse that. Try sharing what you had and when, "
    'like "Slice of pie at 9am."'
)

MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "description": {"type": "string"},
        "time_of_day": {
            "anyOf": [
                {"type": "string", "pattern": r"^\d{1,2}:\d{2}$"},
                {"type": "null"},
            ]
        },
        "calories": {"type": "number", "minimum": 0},
        "protein_g": {"type": "number", "minimum": 0},
        "carbs_g": {"type": "number", "minimum": 0},
        "fat_g": {"type": "number", "minimum": 0},
    },
    "required": [
        "description",
        "time_of_day",
        "calories",
        "protein_g",
        "carbs_g",
        "fat_g",
    ],
    "additionalProperties": False,
}

KEYWORD_ESTIMATES: list[tuple[tuple[str, ...], MacroTargets]] = [
    (("pie",), MacroTargets(calories=350, protein_g=4, carbs_g=45, fat_g=16)),
    (("shake",), MacroTargets(calories=240, protein_g=30, carbs_g=12, fat_g=6)),
    (("salad",), MacroTargets(calories=180, protein_g=12, carbs_g=14, fat_g=8)),
]
DEFAULT_ESTIMATE = MacroTargets(calories=250, protein_g=15, carbs_g=20, fat_g=10)

_TIME_OF_DAY = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s?(am|pm)\b")
HOURS_PER_HALF_DAY = 12
MINUTES_PER_HOUR = 60


class MealParseError(Exception):
    """Raised when a meal description can't be turned into an entry."""

    def __init__(self, message: str = RETRY_PROMPT) -> None:
        super().__init__(message)
        self.retry_prompt = message


class MealParser(Protocol):
    """Interface for meal-text estimation and adjustment suggestions."""

    async def parse_meal_entry(self, text: str, now: datetime) -> MealEntry:
        """Return a meal entry or raise ``MealParseError``."""

    async def suggest_adjustments(self, context: DayContext) -> list[Adjustment]:
        """Return adjustments for the day."""


class MealTextClient(Protocol):
    """Interface for LLM meal-text extraction."""

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
        """Return structured meal estimate data.

        Transport or provider failures are raised as ``RuntimeError``.
        """


@dataclass
class KeywordMealParser:
    """Offline estimator using a keyword table and the rule-based advisor."""

    advisor: RuleBasedAdvisor = field(default_factory=RuleBasedAdvisor)

    async def parse_meal_entry(self, text: str, now: datetime) -> MealEntry:
        """Estimate macros from keywords and anchor any time of day to ``now``."""
        description = text.strip()
        if not description:
            raise MealParseError()
        lowered = description.lower()
        return MealEntry(
            timestamp=extract_timestamp(lowered, now) or now,
            description=description,
            macros=estimate_macros(lowered),
        )

    async def suggest_adjustments(self, context: DayContext) -> list[Adjustment]:
        """Delegate to the rule-based advisor."""
        return await self.advisor.suggest_adjustments(context)


@dataclass
class LlmMealParser:
    """Meal parser that asks an LLM for a structured estimate."""

    client: MealTextClient
    model: str
    reasoning_effort: str | None
    store: bool
    advisor: RuleBasedAdvisor = field(default_factory=RuleBasedAdvisor)

    async def parse_meal_entry(self, text: str, now: datetime) -> MealEntry:
        """Request an estimate and validate it."""
        description = text.strip()
        if not description:
            raise MealParseError()
        prompt = (
            "Estimate the calories, protein, carbohydrate and fat of the meal "
            "described below. Return a short description and, if the text "
            "mentions when it was eaten, the 24-hour time of day as HH:MM."
        )
        try:
            raw = await self.client.estimate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                text=description,
                schema=MEAL_SCHEMA,
                prompt=prompt,
            )
            estimate = MealEstimate.model_validate(raw)
        except (ValidationError, ValueError, RuntimeError) as exc:
            _logger.warning("Meal estimate failed: %s", exc)
            raise MealParseError() from exc
        return MealEntry(
            timestamp=_anchor(estimate.time_of_day, now),
            description=estimate.description,
            macros=MacroTargets(
                calories=estimate.calories,
                protein_g=estimate.protein_g,
                carbs_g=estimate.carbs_g,
                fat_g=estimate.fat_g,
            ),
        )

    async def suggest_adjustments(self, context: DayContext) -> list[Adjustment]:
        """Delegate to the rule-based advisor."""
        return await self.advisor.suggest_adjustments(context)


def estimate_macros(text: str) -> MacroTargets:
    """Return the keyword estimate for a lowercased meal description."""
    for keywords, macros in KEYWORD_ESTIMATES:
        if any(keyword in text for keyword in keywords):
            return macros
    return DEFAULT_ESTIMATE


def extract_timestamp(text: str, now: datetime) -> datetime | None:
    """Find a time like '9am' or '7:30 pm' and place it on ``now``'s date."""
    match = _TIME_OF_DAY.search(text)
    if match is None:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if not 1 <= hour <= HOURS_PER_HALF_DAY or minute >= MINUTES_PER_HOUR:
        return None
    hour %= HOURS_PER_HALF_DAY
    if match.group(3) == "pm":
        hour += HOURS_PER_HALF_DAY
    return datetime.combine(now.date(), time(hour, minute), tzinfo=now.tzinfo)


def _anchor(time_of_day: str | None, now: datetime) -> datetime:
    if not time_of_day:
        return now
    hour, minute = (int(part) for part in time_of_day.split(":"))
    try:
        return datetime.combine(now.date(), time(hour, minute), tzinfo=now.tzinfo)
    except ValueError:
        return now
