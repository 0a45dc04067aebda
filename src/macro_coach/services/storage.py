"""Persistence interface for the coach documents."""

from typing import Protocol

from macro_coach.domain.logs import DailyLog
from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import UserProfile

PROFILE_KEY = "profile"
PLAN_KEY = "plan"
LOGS_KEY = "logs"


class CoachStorage(Protocol):
    """Key-value store for the profile, the active plan and daily logs.

    Implementations serialize writes per key and log their own failures
    instead of raising them.
    """

    def fetch_profile(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save_profile(self, profile: UserProfile) -> None:
        """Replace the stored profile."""

    def fetch_plan(self) -> Plan | None:
        """Return the active plan, if any."""

    def save_plan(self, plan: Plan) -> None:
        """Replace the active plan."""

    def fetch_logs(self) -> list[DailyLog]:
        """Return every stored daily log."""

    def save_log(self, log: DailyLog) -> None:
        """Insert or replace the log for ``log.day``."""


def upsert_log(logs: list[DailyLog], log: DailyLog) -> list[DailyLog]:
    """Return logs with the entry for ``log.day`` replaced or appended."""
    if any(existing.day == log.day for existing in logs):
        return [log if existing.day == log.day else existing for existing in logs]
    return [*logs, log]
