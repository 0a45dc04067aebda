"""Map free-text intake answers onto profile fields."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import IntEnum

from macro_coach.domain.profile import (
    BiologicalSex,
    BodyComposition,
    NutritionGoal,
    PerformanceGoal,
    Supplement,
    TrainingLoad,
    UserProfile,
    Weekday,
)
from macro_coach.services.parsers import (
    classify,
    classify_words,
    digits_only,
    extract_measurement,
    first_number,
    match_members,
    split_list,
    to_cm,
    to_kg,
)

_logger = logging.getLogger(__name__)


class QuestionId(IntEnum):
    """Catalog ids that feed profile fields."""

    MEAL_COUNT = 2
    FAVORITE_FOODS = 4
    DISLIKED_FOODS = 5
    DESSERT_CADENCE = 7
    DESSERT_TYPE = 8
    FAVORITE_CARBS = 9
    FAVORITE_PROTEINS = 10
    FAVORITE_PRODUCE = 11
    DISLIKED_PRODUCE = 12
    STAPLES = 18
    LEAN_MASS = 20
    BODY_BASICS = 21
    GOALS = 22
    SUPPLEMENTS = 24
    INJURIES = 25
    CONDITIONS = 26
    TRAINING_LOAD = 27
    HIGH_FUEL_DAYS = 28
    PERFORMANCE_FOCUS = 29
    RECOVERY_PRACTICES = 30


TRAINING_LOAD_KEYWORDS: list[tuple[tuple[str, ...], TrainingLoad]] = [
    (("heavy",), TrainingLoad.HEAVY),
    (("light",), TrainingLoad.LIGHT),
    (("variable",), TrainingLoad.VARIABLE),
]

GOAL_KEYWORDS: list[tuple[tuple[str, ...], NutritionGoal]] = [
    ((goal.value,), goal) for goal in NutritionGoal
]

PERFORMANCE_KEYWORDS: list[tuple[tuple[str, ...], PerformanceGoal]] = [
    ((goal.value,), goal) for goal in PerformanceGoal
]

SEX_KEYWORDS: list[tuple[tuple[str, ...], BiologicalSex]] = [
    (("female", "woman"), BiologicalSex.FEMALE),
    (("male", "man"), BiologicalSex.MALE),
    (("other", "non-binary", "nonbinary", "intersex"), BiologicalSex.OTHER),
]

WEIGHT_UNITS = ("kg", "lb", "lbs")
HEIGHT_UNITS = ("cm", "m", "ft", "in")
BODY_FAT_UNITS = ("%", "percent")
AGE_UNITS = ("years", "yrs", "y/o")

Handler = Callable[[UserProfile, list[str]], UserProfile]


@dataclass(frozen=True)
class FieldRule:
    """Routes the answers of one or more questions to a profile update."""

    ids: tuple[int, ...]
    handler: Handler


def _set_lean_mass(profile: UserProfile, answers: list[str]) -> UserProfile:
    lean_mass = first_number(answers[0])
    if lean_mass is None:
        return profile
    body = replace(profile.body_composition, lean_mass_kg=lean_mass)
    return replace(profile, body_composition=body)


def _set_training_load(profile: UserProfile, answers: list[str]) -> UserProfile:
    load = classify(answers[0], TRAINING_LOAD_KEYWORDS, TrainingLoad.MODERATE)
    return replace(profile, training=replace(profile.training, load=load))


def _set_supplements(profile: UserProfile, answers: list[str]) -> UserProfile:
    supplements = [Supplement(name=name) for name in split_list(answers[0])]
    return replace(profile, health=replace(profile.health, supplements=supplements))


def _set_high_fuel_days(profile: UserProfile, answers: list[str]) -> UserProfile:
    tokens = {token.lower() for token in split_list(answers[0])}
    days = [day for day in Weekday if day.value in tokens]
    return replace(profile, training=replace(profile.training, high_fuel_days=days))


def _set_performance_goals(profile: UserProfile, answers: list[str]) -> UserProfile:
    goals = match_members(answers[0], PERFORMANCE_KEYWORDS)
    return replace(
        profile, training=replace(profile.training, performance_goals=goals)
    )


def _set_recovery_practices(profile: UserProfile, answers: list[str]) -> UserProfile:
    practices = split_list(answers[0])
    return replace(
        profile, training=replace(profile.training, recovery_practices=practices)
    )


def _set_body_basics(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(
        profile,
        body_composition=parse_body_basics(profile.body_composition, answers[0]),
    )


def parse_body_basics(composition: BodyComposition, answer: str) -> BodyComposition:
    """Update body measurements from a free-text answer like '80 kg, 180 cm'."""
    text = answer.lower()
    updated = composition

    weight = extract_measurement(text, WEIGHT_UNITS)
    if weight is not None:
        updated = replace(updated, weight_kg=to_kg(*weight))

    height = extract_measurement(text, HEIGHT_UNITS)
    if height is not None:
        updated = replace(updated, height_cm=to_cm(*height))

    body_fat = extract_measurement(text, BODY_FAT_UNITS)
    if body_fat is not None:
        updated = replace(updated, body_fat_percentage=body_fat[0])

    age = extract_measurement(text, AGE_UNITS)
    if age is not None:
        updated = replace(updated, age_years=int(age[0]))

    sex = classify_words(text, SEX_KEYWORDS)
    if sex is not None:
        updated = replace(updated, biological_sex=sex)

    return updated


def _set_dessert_cadence(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(profile, dessert_cadence=answers[0])


def _append_dessert_type(profile: UserProfile, answers: list[str]) -> UserProfile:
    entry = f"Dessert: {answers[0]}"
    if entry in profile.grocery_staples:
        return profile
    return replace(profile, grocery_staples=[*profile.grocery_staples, entry])


def _set_meal_cadence(profile: UserProfile, answers: list[str]) -> UserProfile:
    count = digits_only(answers[0])
    if count is None:
        return profile
    return replace(profile, meal_cadence=count)


def _set_taste_preferences(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(profile, taste_preferences=_union(answers))


def _set_avoidances(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(profile, avoidances=_union(answers))


def _set_staples(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(profile, grocery_staples=split_list(answers[0]))


def _set_injuries(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(
        profile, health=replace(profile.health, injuries=split_list(answers[0]))
    )


def _set_conditions(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(
        profile, health=replace(profile.health, conditions=split_list(answers[0]))
    )


def _set_goals(profile: UserProfile, answers: list[str]) -> UserProfile:
    return replace(profile, goals=match_members(answers[0], GOAL_KEYWORDS))


def _union(answers: list[str]) -> list[str]:
    merged: list[str] = []
    for answer in answers:
        for token in split_list(answer):
            if token not in merged:
                merged.append(token)
    return merged


# Staples must replace the list before the dessert type is appended to it.
DEFAULT_RULES: list[FieldRule] = [
    FieldRule((QuestionId.LEAN_MASS,), _set_lean_mass),
    FieldRule((QuestionId.TRAINING_LOAD,), _set_training_load),
    FieldRule((QuestionId.SUPPLEMENTS,), _set_supplements),
    FieldRule((QuestionId.HIGH_FUEL_DAYS,), _set_high_fuel_days),
    FieldRule((QuestionId.PERFORMANCE_FOCUS,), _set_performance_goals),
    FieldRule((QuestionId.RECOVERY_PRACTICES,), _set_recovery_practices),
    FieldRule((QuestionId.BODY_BASICS,), _set_body_basics),
    FieldRule((QuestionId.DESSERT_CADENCE,), _set_dessert_cadence),
    FieldRule((QuestionId.STAPLES,), _set_staples),
    FieldRule((QuestionId.DESSERT_TYPE,), _append_dessert_type),
    FieldRule((QuestionId.MEAL_COUNT,), _set_meal_cadence),
    FieldRule(
        (
            QuestionId.FAVORITE_FOODS,
            QuestionId.FAVORITE_CARBS,
            QuestionId.FAVORITE_PROTEINS,
            QuestionId.FAVORITE_PRODUCE,
        ),
        _set_taste_preferences,
    ),
    FieldRule(
        (QuestionId.DISLIKED_FOODS, QuestionId.DISLIKED_PRODUCE),
        _set_avoidances,
    ),
    FieldRule((QuestionId.INJURIES,), _set_injuries),
    FieldRule((QuestionId.CONDITIONS,), _set_conditions),
    FieldRule((QuestionId.GOALS,), _set_goals),
]


@dataclass
class AnswerIngestor:
    """Applies a routing table of question ids to profile updates."""

    rules: Sequence[FieldRule]

    def __init__(self, rules: Sequence[FieldRule] | None = None) -> None:
        self.rules = list(DEFAULT_RULES if rules is None else rules)
        seen: set[int] = set()
        for rule in self.rules:
            overlap = seen.intersection(rule.ids)
            if overlap:
                raise ValueError(
                    f"Question ids routed more than once: {sorted(overlap)}"
                )
            seen.update(rule.ids)

    @property
    def routed_ids(self) -> set[int]:
        """Return every question id the table handles."""
        return {question_id for rule in self.rules for question_id in rule.ids}

    def apply(self, profile: UserProfile, answers: Mapping[int, str]) -> UserProfile:
        """Return the profile updated with every non-blank routed answer."""
        updated = profile
        applied: list[int] = []
        for rule in self.rules:
            present = [
                (question_id, answers[question_id])
                for question_id in rule.ids
                if (answers.get(question_id) or "").strip()
            ]
            if not present:
                continue
            updated = rule.handler(updated, [answer for _, answer in present])
            applied.extend(question_id for question_id, _ in present)
        _logger.debug("Applied intake answers for ids=%s", sorted(applied))
        return updated
