"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from macro_coach.config import Settings
from macro_coach.domain.logs import DailyLog
from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import UserProfile
from macro_coach.services.meal_parser import MealTextClient
from macro_coach.services.storage import CoachStorage, upsert_log


@dataclass
class InMemoryStorage(CoachStorage):
    """In-memory coach storage for tests."""

    profile: UserProfile | None = None
    plan: Plan | None = None
    logs: list[DailyLog] = field(default_factory=list)

    def fetch_profile(self) -> UserProfile | None:
        return self.profile

    def save_profile(self, profile: UserProfile) -> None:
        self.profile = profile

    def fetch_plan(self) -> Plan | None:
        return self.plan

    def save_plan(self, plan: Plan) -> None:
        self.plan = plan

    def fetch_logs(self) -> list[DailyLog]:
        return list(self.logs)

    def save_log(self, log: DailyLog) -> None:
        self.logs = upsert_log(self.logs, log)


@dataclass
class FakeMealTextClient(MealTextClient):
    """Fake LLM client returning a canned payload or raising an error."""

    payload: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {
                "model": model,
                "reasoning_effort": reasoning_effort,
                "store": store,
                "text": text,
                "schema": schema,
                "prompt": prompt,
            }
        )
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="file",
        storage_dir=str(tmp_path / "coach"),
        meal_parser="keyword",
        openai_api_key="openai-key",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()
