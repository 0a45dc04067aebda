"""Plan generation: day-type templates, sample days and groceries."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime

from macro_coach.domain.plan import (
    DailyPlan,
    MacroTargets,
    MacroTemplate,
    Meal,
    Plan,
    TemplateType,
)
from macro_coach.domain.profile import TrainingLoad, UserProfile, Weekday
from macro_coach.services.calculator import (
    apply_goal_multipliers,
    estimate_maintenance_energy,
    macro_split,
    macros_from_budget,
    protein_target_g,
    round_half_up,
)
from macro_coach.services.grocery import build_grocery_list
from macro_coach.services.parsers import contains_any

_logger = logging.getLogger(__name__)

HEAVY_LOAD_NOTE = "Higher carbs to cover heavy training days."
SLEEP_RECOVERY_NOTE = (
    "Encourage evening protein + magnesium-friendly choices for recovery."
)


@dataclass(frozen=True)
class TemplateSpec:
    """Fixed definition of a day-type template."""

    name: str
    type: TemplateType
    multiplier: float
    note: str


TRAINING_DAY = TemplateSpec(
    "Training Day",
    TemplateType.TRAINING,
    1.08,
    "Add pre/intra carbs around key sessions.",
)
REST_DAY = TemplateSpec(
    "Rest Day", TemplateType.REST, 0.92, "Dial carbs down, keep protein steady."
)
HIGH_OUTPUT_DAY = TemplateSpec(
    "High Output", TemplateType.HIGH, 1.15, "Use on long or double-session days."
)
LOW_OUTPUT_DAY = TemplateSpec(
    "Low Output", TemplateType.LOW, 0.85, "Use for active recovery or off days."
)

MEAL_SHARES: list[tuple[str, float]] = [
    ("Breakfast", 0.25),
    ("Lunch", 0.30),
    ("Dinner", 0.30),
    ("Snacks", 0.15),
]
SNACK_MEAL = "Snacks"
PLACEHOLDER_ITEM = "Coach-suggested option"


@dataclass
class PlanEngine:
    """Derives a complete plan from a profile."""

    def generate_plan(self, profile: UserProfile, now: datetime | None = None) -> Plan:
        """Build templates, sample days and groceries for the profile."""
        timestamp = now or datetime.now(tz=UTC)
        calories = apply_goal_multipliers(
            estimate_maintenance_energy(profile), profile.goals
        )
        templates = build_templates(profile, calories)
        plan = Plan(
            created_at=timestamp,
            updated_at=timestamp,
            templates=templates,
            daily_plans=build_sample_days(profile, templates),
            grocery_list=build_grocery_list(profile),
        )
        _logger.info(
            "Generated plan: calories=%.0f templates=%s", calories, len(templates)
        )
        return plan


def build_templates(profile: UserProfile, calories: float) -> list[MacroTemplate]:
    """Build the day-type templates around a goal-adjusted calorie budget."""
    protein_g = protein_target_g(profile)
    split = macro_split(profile)

    def template(spec: TemplateSpec, notes: list[str]) -> MacroTemplate:
        macros = macros_from_budget(calories * spec.multiplier, protein_g, split)
        return MacroTemplate(name=spec.name, type=spec.type, macros=macros, notes=notes)

    context_notes: list[str] = []
    if profile.training.load == TrainingLoad.HEAVY:
        context_notes.append(HEAVY_LOAD_NOTE)
    if contains_any(profile.training.recovery_practices, ("sleep",)):
        context_notes.append(SLEEP_RECOVERY_NOTE)

    templates = [
        template(TRAINING_DAY, [*context_notes, TRAINING_DAY.note]),
        template(REST_DAY, [REST_DAY.note]),
    ]
    if profile.training.load == TrainingLoad.VARIABLE:
        templates.append(template(HIGH_OUTPUT_DAY, [HIGH_OUTPUT_DAY.note]))
        templates.append(template(LOW_OUTPUT_DAY, [LOW_OUTPUT_DAY.note]))
    return templates


def build_sample_days(
    profile: UserProfile, templates: list[MacroTemplate]
) -> list[DailyPlan]:
    """Split every template into four sample meals."""
    return [
        DailyPlan(
            label=template.name,
            template=template,
            meals=[
                Meal(
                    name=name,
                    items=_meal_items(profile, name),
                    macros=_scale(template.macros, share),
                )
                for name, share in MEAL_SHARES
            ],
        )
        for template in templates
    ]


def _meal_items(profile: UserProfile, meal_name: str) -> list[str]:
    items: list[str] = []
    if profile.taste_preferences:
        items.append(profile.taste_preferences[0])
    if profile.grocery_staples:
        items.append(profile.grocery_staples[0])
    if meal_name == SNACK_MEAL and profile.dessert_cadence:
        items.append(f"Treat: {profile.dessert_cadence}")
    return items or [PLACEHOLDER_ITEM]


def _scale(macros: MacroTargets, share: float) -> MacroTargets:
    return MacroTargets(
        calories=round_half_up(macros.calories * share),
        protein_g=round_half_up(macros.protein_g * share),
        carbs_g=round_half_up(macros.carbs_g * share),
        fat_g=round_half_up(macros.fat_g * share),
    )


def _first_of_type(
    plan: Plan, template_type: TemplateType
) -> MacroTemplate | None:
    for template in plan.templates:
        if template.type == template_type:
            return template
    return None


def select_template(
    plan: Plan, profile: UserProfile | None, day: date
) -> MacroTemplate | None:
    """Pick the template that applies to a calendar day."""
    load = profile.training.load if profile else TrainingLoad.MODERATE
    first = plan.templates[0] if plan.templates else None
    if load in (TrainingLoad.HEAVY, TrainingLoad.MODERATE):
        return _first_of_type(plan, TemplateType.TRAINING) or first
    if load == TrainingLoad.LIGHT:
        return _first_of_type(plan, TemplateType.REST) or first
    if profile and Weekday.from_date(day) in profile.training.high_fuel_days:
        return _first_of_type(plan, TemplateType.HIGH) or _first_of_type(
            plan, TemplateType.TRAINING
        )
    return _first_of_type(plan, TemplateType.LOW) or _first_of_type(
        plan, TemplateType.REST
    )
