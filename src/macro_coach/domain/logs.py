"""Domain models for daily logging and adjustments."""

from dataclasses import dataclass, field
from datetime import date, datetime

from macro_coach.domain.plan import MacroTargets
from macro_coach.domain.profile import TrainingLoad


@dataclass(frozen=True)
class MealEntry:
    """A logged meal with its estimated macros."""

    timestamp: datetime
    description: str
    macros: MacroTargets | None = None


@dataclass(frozen=True)
class DailyLog:
    """All meal entries for one calendar day."""

    day: date
    training_load: TrainingLoad
    recovery_flag: bool
    entries: list[MealEntry] = field(default_factory=list)

    @property
    def total_macros(self) -> MacroTargets:
        """Sum of the macros of every entry that has an estimate."""
        total = MacroTargets.zero()
        for entry in self.entries:
            if entry.macros is not None:
                total = total + entry.macros
        return total


@dataclass(frozen=True)
class DayContext:
    """Snapshot of a day used to drive adjustment suggestions."""

    day: date
    training_load: TrainingLoad
    recovery_flag: bool
    target_macros: MacroTargets | None = None
    consumed_macros: MacroTargets | None = None


@dataclass(frozen=True)
class Adjustment:
    """Corrective recommendation."""

    message: str
    actions: list[str]
