"""Plan domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4


@dataclass(frozen=True)
class MacroTargets:
    """Energy and macronutrient amounts for a day, meal or log."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float

    @classmethod
    def zero(cls) -> "MacroTargets":
        """Return an empty macro total."""
        return cls(calories=0, protein_g=0, carbs_g=0, fat_g=0)

    def __add__(self, other: "MacroTargets") -> "MacroTargets":
        return MacroTargets(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )


class TemplateType(str, Enum):
    """Day type a macro template applies to."""

    TRAINING = "training"
    REST = "rest"
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class MacroTemplate:
    """Named macro target for a day type."""

    name: str
    type: TemplateType
    macros: MacroTargets
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Meal:
    """A sample meal with its share of the template macros."""

    name: str
    items: list[str]
    macros: MacroTargets


@dataclass(frozen=True)
class DailyPlan:
    """Sample day built from a template."""

    label: str
    template: MacroTemplate
    meals: list[Meal]


class GroceryStorage(str, Enum):
    """Where a grocery item is kept."""

    PANTRY = "pantry"
    REFRIGERATED = "refrigerated"
    FROZEN = "frozen"
    FRESH = "fresh"


@dataclass(frozen=True)
class GroceryItem:
    """Single grocery list entry."""

    name: str
    aisle: str
    storage: GroceryStorage
    notes: str | None = None


@dataclass(frozen=True)
class GrocerySection:
    """Titled group of grocery items."""

    title: str
    items: list[GroceryItem]


@dataclass(frozen=True)
class GroceryList:
    """Ordered grocery sections."""

    sections: list[GrocerySection] = field(default_factory=list)


@dataclass(frozen=True)
class Plan:
    """Energy and macro plan derived from a profile."""

    created_at: datetime
    updated_at: datetime
    templates: list[MacroTemplate]
    daily_plans: list[DailyPlan]
    grocery_list: GroceryList
    id: UUID = field(default_factory=uuid4)
