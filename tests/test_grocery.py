"""Tests for grocery list synthesis."""

from macro_coach.domain.plan import GroceryStorage
from macro_coach.domain.profile import (
    HealthProfile,
    Supplement,
    TrainingLoad,
    TrainingProfile,
    UserProfile,
)
from macro_coach.services.grocery import (
    DESSERT_NOTE,
    FALLBACK_PROTEIN,
    PANTRY_SECTION,
    PROTEIN_SECTION,
    TREATS_SECTION,
    build_grocery_list,
)


def test_defaults_for_empty_profile() -> None:
    grocery = build_grocery_list(UserProfile())

    assert [section.title for section in grocery.sections] == [
        PANTRY_SECTION,
        PROTEIN_SECTION,
    ]
    pantry, protein = grocery.sections
    assert [item.name for item in pantry.items] == ["Steel-cut oats", "Greek yogurt"]
    assert pantry.items[1].storage == GroceryStorage.REFRIGERATED
    assert protein.items[0].name == FALLBACK_PROTEIN
    assert protein.items[0].notes is None


def test_staples_replace_default_pantry() -> None:
    grocery = build_grocery_list(UserProfile(grocery_staples=["rice", "beans"]))

    assert [item.name for item in grocery.sections[0].items] == ["rice", "beans"]


def test_protein_section_uses_preferences_and_supplements() -> None:
    profile = UserProfile(
        taste_preferences=["berries", "grilled chicken"],
        health=HealthProfile(supplements=[Supplement(name="Creatine")]),
        training=TrainingProfile(load=TrainingLoad.HEAVY),
    )

    protein = build_grocery_list(profile).sections[1]

    assert protein.items[0].name == "Grilled Chicken"
    assert protein.items[0].notes == "Contains Creatine"
    assert protein.items[1].name == "Electrolyte mix"


def test_treats_section_follows_dessert_cadence() -> None:
    grocery = build_grocery_list(UserProfile(dessert_cadence="Sunday ice cream"))

    treats = grocery.sections[-1]
    assert treats.title == TREATS_SECTION
    assert treats.items[0].name == "Sunday ice cream"
    assert treats.items[0].storage == GroceryStorage.FRESH
    assert treats.items[0].notes == DESSERT_NOTE


def test_favorite_protein_capitalizes_each_word() -> None:
    profile = UserProfile(taste_preferences=["chicken's thigh"])

    protein = build_grocery_list(profile).sections[1]

    assert protein.items[0].name == "Chicken's Thigh"
