"""Energy expenditure and macro target arithmetic."""

import math
from dataclasses import dataclass

from macro_coach.domain.plan import MacroTargets
from macro_coach.domain.profile import (
    BiologicalSex,
    NutritionGoal,
    PerformanceGoal,
    TrainingLoad,
    UserProfile,
)
from macro_coach.services.parsers import contains_any

DEFAULT_WEIGHT_KG = 75.0
DEFAULT_HEIGHT_CM = 175.0
DEFAULT_AGE_YEARS = 32

# Mifflin-St Jeor sex term. "other" and unspecified use the literal midpoint of
# the male and female terms until a clinical source is chosen.
SEX_COEFFICIENTS: dict[BiologicalSex | None, float] = {
    BiologicalSex.MALE: 5.0,
    BiologicalSex.FEMALE: -161.0,
    BiologicalSex.OTHER: -78.0,
    None: -78.0,
}

ACTIVITY_FACTORS: dict[TrainingLoad, float] = {
    TrainingLoad.LIGHT: 1.30,
    TrainingLoad.MODERATE: 1.45,
    TrainingLoad.HEAVY: 1.60,
    TrainingLoad.VARIABLE: 1.50,
}

GOAL_MULTIPLIERS: dict[NutritionGoal, float] = {
    NutritionGoal.LOSS: 0.85,
    NutritionGoal.GAIN: 1.12,
    NutritionGoal.PERFORMANCE: 1.05,
    NutritionGoal.ENERGY: 1.0,
    NutritionGoal.CONVENIENCE: 1.0,
    NutritionGoal.OTHER: 1.0,
    NutritionGoal.MAINTENANCE: 1.0,
}

PROTEIN_LOWER_RATIO = 1.6
RENAL_PROTEIN_LOWER_RATIO = 1.4
PROTEIN_UPPER_RATIO = 2.2
PROTEIN_FLOOR_WEIGHT_KG = 50.0
RENAL_KEYWORDS = ("kidney", "renal")

PROTEIN_KCAL_PER_G = 4
CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
MIN_NON_PROTEIN_SHARE = 0.4


@dataclass(frozen=True)
class MacroSplit:
    """Share of the post-protein calories given to carbs and fat."""

    carb_ratio: float
    fat_ratio: float


ENDURANCE_SPLIT = MacroSplit(carb_ratio=0.55, fat_ratio=0.25)
STRENGTH_SPLIT = MacroSplit(carb_ratio=0.50, fat_ratio=0.27)
LIGHT_SPLIT = MacroSplit(carb_ratio=0.45, fat_ratio=0.30)
DEFAULT_SPLIT = MacroSplit(carb_ratio=0.48, fat_ratio=0.27)


def estimate_resting_energy(profile: UserProfile) -> float:
    """Mifflin-St Jeor resting energy.

    Missing, non-positive or non-finite measurements fall back to the defaults.
    """
    body = profile.body_composition
    weight = _measure_or_default(body.weight_kg, DEFAULT_WEIGHT_KG)
    height = _measure_or_default(body.height_cm, DEFAULT_HEIGHT_CM)
    age = _measure_or_default(body.age_years, DEFAULT_AGE_YEARS)
    sex_term = SEX_COEFFICIENTS[body.biological_sex]
    return (10 * weight) + (6.25 * height) - (5 * age) + sex_term


def estimate_maintenance_energy(profile: UserProfile) -> float:
    """Resting energy scaled by the training load activity factor (TDEE)."""
    return estimate_resting_energy(profile) * ACTIVITY_FACTORS[profile.training.load]


def apply_goal_multipliers(calories: float, goals: list[NutritionGoal]) -> float:
    """Scale calories by the mean multiplier of the profile goals."""
    multipliers = [GOAL_MULTIPLIERS[goal] for goal in goals if goal in GOAL_MULTIPLIERS]
    if not multipliers:
        return calories
    return calories * (sum(multipliers) / len(multipliers))


def protein_lower_ratio(profile: UserProfile) -> float:
    """Grams per kg floor; lowered when kidney or renal issues are reported."""
    if contains_any(profile.health.conditions, RENAL_KEYWORDS):
        return RENAL_PROTEIN_LOWER_RATIO
    return PROTEIN_LOWER_RATIO


def protein_target_g(profile: UserProfile) -> float:
    """Daily protein target in grams, unrounded."""
    weight = _measure_or_default(profile.body_composition.weight_kg, DEFAULT_WEIGHT_KG)
    lower = protein_lower_ratio(profile)
    base = max(lower * weight, lower * PROTEIN_FLOOR_WEIGHT_KG)
    return min(max(base, lower * weight), PROTEIN_UPPER_RATIO * weight)


def macro_split(profile: UserProfile) -> MacroSplit:
    """Pick the carb/fat split from training load and performance focus."""
    training = profile.training
    if (
        training.load == TrainingLoad.HEAVY
        or PerformanceGoal.ENDURANCE in training.performance_goals
    ):
        return ENDURANCE_SPLIT
    if PerformanceGoal.STRENGTH in training.performance_goals:
        return STRENGTH_SPLIT
    if training.load == TrainingLoad.LIGHT:
        return LIGHT_SPLIT
    return DEFAULT_SPLIT


def macros_from_budget(
    calories: float, protein_g: float, split: MacroSplit
) -> MacroTargets:
    """Derive rounded macro targets from a calorie budget and protein grams.

    Negative or non-finite inputs are treated as zero so no field goes below
    zero.
    """
    calories = _non_negative(calories)
    protein_g = _non_negative(protein_g)
    protein_calories = protein_g * PROTEIN_KCAL_PER_G
    remaining = max(calories - protein_calories, calories * MIN_NON_PROTEIN_SHARE)
    carbs_g = remaining * split.carb_ratio / CARB_KCAL_PER_G
    fat_g = remaining * split.fat_ratio / FAT_KCAL_PER_G
    return MacroTargets(
        calories=round_half_up(calories),
        protein_g=round_half_up(protein_g),
        carbs_g=round_half_up(carbs_g),
        fat_g=round_half_up(fat_g),
    )


def _measure_or_default(value: float | None, default: float) -> float:
    if value is None:
        return default
    try:
        measure = float(value)
    except OverflowError:
        return default
    if not math.isfinite(measure) or measure <= 0:
        return default
    return measure


def _non_negative(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
