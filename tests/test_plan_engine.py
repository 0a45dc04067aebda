"""Tests for plan generation and template selection."""

from datetime import UTC, date, datetime

import pytest

from macro_coach.domain.plan import TemplateType
from macro_coach.domain.profile import (
    TrainingLoad,
    TrainingProfile,
    UserProfile,
    Weekday,
)
from macro_coach.services.calculator import estimate_maintenance_energy
from macro_coach.services.ingestion import AnswerIngestor, QuestionId
from macro_coach.services.plans import (
    HEAVY_LOAD_NOTE,
    PLACEHOLDER_ITEM,
    REST_DAY,
    SLEEP_RECOVERY_NOTE,
    TRAINING_DAY,
    PlanEngine,
    select_template,
)

NOW = datetime(2026, 10, 17, 15, 0, tzinfo=UTC)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)


def _profile(load: TrainingLoad, **training: object) -> UserProfile:
    return UserProfile(training=TrainingProfile(load=load, **training))


def test_generate_plan_for_moderate_load() -> None:
    profile = UserProfile()

    plan = PlanEngine().generate_plan(profile, NOW)

    assert plan.created_at == NOW
    assert plan.updated_at == NOW
    assert [template.type for template in plan.templates] == [
        TemplateType.TRAINING,
        TemplateType.REST,
    ]
    maintenance = estimate_maintenance_energy(profile)
    assert plan.templates[0].macros.calories == 2515
    assert plan.templates[0].macros.calories > maintenance
    assert plan.templates[1].macros.calories < maintenance
    assert plan.templates[1].notes == [REST_DAY.note]


def test_variable_load_adds_high_and_low_templates() -> None:
    plan = PlanEngine().generate_plan(_profile(TrainingLoad.VARIABLE), NOW)

    assert [template.type for template in plan.templates] == [
        TemplateType.TRAINING,
        TemplateType.REST,
        TemplateType.HIGH,
        TemplateType.LOW,
    ]
    assert len(plan.daily_plans) == 4


def test_heavy_and_sleep_notes_only_on_training_day() -> None:
    profile = _profile(TrainingLoad.HEAVY, recovery_practices=["Sleep 8h"])

    plan = PlanEngine().generate_plan(profile, NOW)

    training, rest = plan.templates
    assert training.notes == [HEAVY_LOAD_NOTE, SLEEP_RECOVERY_NOTE, TRAINING_DAY.note]
    assert rest.notes == [REST_DAY.note]
    assert training.macros.carbs_g > 2 * training.macros.fat_g


def test_sample_days_split_template_into_meals() -> None:
    profile = UserProfile(
        taste_preferences=["Salmon"],
        grocery_staples=["Rice"],
        dessert_cadence="Weekly pie",
    )

    plan = PlanEngine().generate_plan(profile, NOW)

    day = plan.daily_plans[0]
    assert day.label == "Training Day"
    assert [meal.name for meal in day.meals] == [
        "Breakfast",
        "Lunch",
        "Dinner",
        "Snacks",
    ]
    assert day.meals[0].items == ["Salmon", "Rice"]
    assert day.meals[3].items == ["Salmon", "Rice", "Treat: Weekly pie"]
    assert day.meals[0].macros.calories == 629


def test_sample_meals_use_placeholder_without_preferences() -> None:
    plan = PlanEngine().generate_plan(UserProfile(), NOW)

    assert plan.daily_plans[1].meals[0].items == [PLACEHOLDER_ITEM]


def test_select_template_by_load() -> None:
    engine = PlanEngine()
    heavy = _profile(TrainingLoad.HEAVY)
    light = _profile(TrainingLoad.LIGHT)

    heavy_plan = engine.generate_plan(heavy, NOW)
    light_plan = engine.generate_plan(light, NOW)

    assert select_template(heavy_plan, heavy, MONDAY).type == TemplateType.TRAINING
    assert select_template(light_plan, light, MONDAY).type == TemplateType.REST


def test_select_template_variable_uses_high_fuel_days() -> None:
    profile = _profile(TrainingLoad.VARIABLE, high_fuel_days=[Weekday.MONDAY])
    plan = PlanEngine().generate_plan(profile, NOW)

    assert select_template(plan, profile, MONDAY).type == TemplateType.HIGH
    assert select_template(plan, profile, TUESDAY).type == TemplateType.LOW


def test_select_template_without_profile_uses_training_day() -> None:
    plan = PlanEngine().generate_plan(UserProfile(), NOW)

    assert select_template(plan, None, MONDAY).type == TemplateType.TRAINING


@pytest.mark.parametrize(
    "body_basics",
    ["0 kg, 0 cm", "1 lb, 1 in", "900 years", "9" * 300 + " kg"],
)
def test_degenerate_body_answers_never_give_negative_targets(
    body_basics: str,
) -> None:
    profile = AnswerIngestor().apply(
        UserProfile(), {QuestionId.BODY_BASICS: body_basics}
    )

    plan = PlanEngine().generate_plan(profile, NOW)

    for day in plan.daily_plans:
        for macros in [day.template.macros, *(meal.macros for meal in day.meals)]:
            assert min(
                macros.calories, macros.protein_g, macros.carbs_g, macros.fat_g
            ) >= 0
