"""Profile domain models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID, uuid4


class TrainingLoad(str, Enum):
    """Self-reported training load."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VARIABLE = "variable"


class BiologicalSex(str, Enum):
    """Biological sex used by the resting energy formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class NutritionGoal(str, Enum):
    """Nutrition goals a profile can hold."""

    GAIN = "gain"
    LOSS = "loss"
    MAINTENANCE = "maintenance"
    PERFORMANCE = "performance"
    ENERGY = "energy"
    CONVENIENCE = "convenience"
    OTHER = "other"


class PerformanceGoal(str, Enum):
    """Training performance focus."""

    ENDURANCE = "endurance"
    SPEED = "speed"
    STRENGTH = "strength"
    POWER = "power"
    OTHER = "other"


class Weekday(str, Enum):
    """Canonical weekday names."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date) -> "Weekday":
        """Return the weekday of a calendar date."""
        return list(cls)[day.weekday()]


@dataclass(frozen=True)
class Supplement:
    """A supplement or medication the user reported."""

    name: str


@dataclass(frozen=True)
class BodyComposition:
    """Body measurements; every field is optional."""

    weight_kg: float | None = None
    height_cm: float | None = None
    body_fat_percentage: float | None = None
    lean_mass_kg: float | None = None
    biological_sex: BiologicalSex | None = None
    age_years: int | None = None


@dataclass(frozen=True)
class HealthProfile:
    """Health context that shapes recommendations."""

    supplements: list[Supplement] = field(default_factory=list)
    injuries: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TrainingProfile:
    """Training context."""

    load: TrainingLoad = TrainingLoad.MODERATE
    high_fuel_days: list[Weekday] = field(default_factory=list)
    performance_goals: list[PerformanceGoal] = field(default_factory=list)
    recovery_practices: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UserProfile:
    """Structured nutrition and training profile built from intake answers."""

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    body_composition: BodyComposition = field(default_factory=BodyComposition)
    goals: list[NutritionGoal] = field(default_factory=list)
    health: HealthProfile = field(default_factory=HealthProfile)
    training: TrainingProfile = field(default_factory=TrainingProfile)
    taste_preferences: list[str] = field(default_factory=list)
    avoidances: list[str] = field(default_factory=list)
    grocery_staples: list[str] = field(default_factory=list)
    dessert_cadence: str | None = None
    meal_cadence: int | None = None
