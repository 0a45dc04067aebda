"""Meal logging and day reconciliation."""

from dataclasses import dataclass, replace
from datetime import UTC, date, datetime

from macro_coach.domain.logs import Adjustment, DailyLog, DayContext, MealEntry
from macro_coach.domain.profile import TrainingLoad
from macro_coach.services.advisor import build_day_context, recovery_flag
from macro_coach.services.meal_parser import MealParser
from macro_coach.services.storage import CoachStorage


@dataclass(frozen=True)
class MealLogResult:
    """Outcome of logging one meal."""

    entry: MealEntry
    log: DailyLog
    context: DayContext
    adjustments: list[Adjustment]


@dataclass
class MealLogService:
    """Parses meal text, stores it in the day's log and suggests adjustments."""

    storage: CoachStorage
    parser: MealParser

    async def log_meal(self, text: str, now: datetime | None = None) -> MealLogResult:
        """Log a free-text meal.

        ``MealParseError`` propagates unchanged and nothing is stored.
        """
        current = now or datetime.now(tz=UTC)
        entry = await self.parser.parse_meal_entry(text, current)
        day = current.date()
        existing = self.get_log(day)
        if existing is None:
            profile = self.storage.fetch_profile()
            log = DailyLog(
                day=day,
                training_load=(
                    profile.training.load if profile else TrainingLoad.MODERATE
                ),
                recovery_flag=recovery_flag(profile),
                entries=[entry],
            )
        else:
            entries = sorted(
                [*existing.entries, entry], key=lambda item: item.timestamp
            )
            log = replace(existing, entries=entries)
        self.storage.save_log(log)

        context = self._context(day, log)
        adjustments = await self.parser.suggest_adjustments(context)
        return MealLogResult(
            entry=entry, log=log, context=context, adjustments=adjustments
        )

    async def today(
        self, now: datetime | None = None
    ) -> tuple[DayContext, list[Adjustment]]:
        """Return the current day snapshot and its adjustments."""
        day = (now or datetime.now(tz=UTC)).date()
        context = self._context(day, self.get_log(day))
        return context, await self.parser.suggest_adjustments(context)

    def get_log(self, day: date) -> DailyLog | None:
        """Return the log for a calendar day, if present."""
        for log in self.storage.fetch_logs():
            if log.day == day:
                return log
        return None

    def history(self) -> list[DailyLog]:
        """Return stored logs, newest day first."""
        return sorted(self.storage.fetch_logs(), key=lambda log: log.day, reverse=True)

    def _context(self, day: date, log: DailyLog | None) -> DayContext:
        return build_day_context(
            self.storage.fetch_profile(), self.storage.fetch_plan(), log, day
        )
