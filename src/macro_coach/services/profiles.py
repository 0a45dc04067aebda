"""Profile lifecycle: intake ingestion and plan regeneration."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import UserProfile
from macro_coach.domain.questions import missing_required_answers
from macro_coach.services.ingestion import AnswerIngestor
from macro_coach.services.plans import PlanEngine
from macro_coach.services.storage import CoachStorage

_logger = logging.getLogger(__name__)

PlanListener = Callable[[UserProfile, Plan], None]


class OnboardingIncompleteError(Exception):
    """Raised when required intake questions are unanswered."""

    def __init__(self, missing_ids: list[int]) -> None:
        super().__init__(f"Missing required answers for questions {missing_ids}")
        self.missing_ids = missing_ids


@dataclass
class ProfileService:
    """Applies intake answers and keeps the stored plan in sync."""

    storage: CoachStorage
    ingestor: AnswerIngestor = field(default_factory=AnswerIngestor)
    plan_engine: PlanEngine = field(default_factory=PlanEngine)
    listeners: list[PlanListener] = field(default_factory=list)

    def current_profile(self) -> UserProfile | None:
        """Return the stored profile, if intake has run."""
        return self.storage.fetch_profile()

    def subscribe(self, listener: PlanListener) -> None:
        """Register a callback invoked after a profile and plan are saved."""
        self.listeners.append(listener)

    def apply_answers(
        self, answers: Mapping[int, str], now: datetime | None = None
    ) -> tuple[UserProfile, Plan]:
        """Ingest answers, then regenerate and persist the plan."""
        current = self.storage.fetch_profile() or UserProfile()
        profile = self.ingestor.apply(current, answers)
        self.storage.save_profile(profile)
        plan = self._regenerate(profile, now)
        return profile, plan

    def complete_onboarding(
        self, answers: Mapping[int, str], now: datetime | None = None
    ) -> tuple[UserProfile, Plan]:
        """Apply answers once every required question has a non-blank answer."""
        missing = missing_required_answers(answers)
        if missing:
            raise OnboardingIncompleteError(missing)
        return self.apply_answers(answers, now)

    def refresh_plan(self, now: datetime | None = None) -> Plan | None:
        """Regenerate the plan from the stored profile on demand."""
        profile = self.storage.fetch_profile()
        if profile is None:
            return None
        return self._regenerate(profile, now)

    def _regenerate(self, profile: UserProfile, now: datetime | None) -> Plan:
        plan = self.plan_engine.generate_plan(profile, now or datetime.now(tz=UTC))
        self.storage.save_plan(plan)
        for listener in self.listeners:
            listener(profile, plan)
        _logger.info("Plan regenerated: plan_id=%s", plan.id)
        return plan
