"""Grocery list synthesis from profile preferences."""

import string

from macro_coach.domain.plan import (
    GroceryItem,
    GroceryList,
    GrocerySection,
    GroceryStorage,
)
from macro_coach.domain.profile import TrainingLoad, UserProfile

PANTRY_SECTION = "Pantry & Staples"
PROTEIN_SECTION = "Protein & Recovery"
TREATS_SECTION = "Treats & Dessert"

DEFAULT_PANTRY_ITEMS = [
    GroceryItem(name="Steel-cut oats", aisle="Grains", storage=GroceryStorage.PANTRY),
    GroceryItem(
        name="Greek yogurt", aisle="Dairy", storage=GroceryStorage.REFRIGERATED
    ),
]
PROTEIN_KEYWORDS = ("chicken", "salmon")
FALLBACK_PROTEIN = "Lean protein of choice"
ELECTROLYTE_ITEM = GroceryItem(
    name="Electrolyte mix",
    aisle="Supplements",
    storage=GroceryStorage.PANTRY,
    notes="Support recovery and heavy days.",
)
DESSERT_NOTE = "Keep dessert cadence aligned with goals."


def build_grocery_list(profile: UserProfile) -> GroceryList:
    """Build the shopping list; sections without items are dropped."""
    pantry = [
        GroceryItem(name=staple, aisle="Pantry", storage=GroceryStorage.PANTRY)
        for staple in profile.grocery_staples
    ] or list(DEFAULT_PANTRY_ITEMS)

    supplement_notes = [
        f"Contains {supplement.name}" for supplement in profile.health.supplements
    ]
    protein = [
        GroceryItem(
            name=favorite_protein(profile),
            aisle="Protein",
            storage=GroceryStorage.REFRIGERATED,
            notes=supplement_notes[0] if supplement_notes else None,
        )
    ]
    if profile.training.load == TrainingLoad.HEAVY:
        protein.append(ELECTROLYTE_ITEM)

    treats: list[GroceryItem] = []
    if profile.dessert_cadence:
        treats.append(
            GroceryItem(
                name=profile.dessert_cadence,
                aisle="Treats",
                storage=GroceryStorage.FRESH,
                notes=DESSERT_NOTE,
            )
        )

    sections = [
        GrocerySection(title=PANTRY_SECTION, items=pantry),
        GrocerySection(title=PROTEIN_SECTION, items=protein),
        GrocerySection(title=TREATS_SECTION, items=treats),
    ]
    return GroceryList(sections=[section for section in sections if section.items])


def favorite_protein(profile: UserProfile) -> str:
    """Return the first chicken or salmon preference, capitalized per word."""
    for preference in profile.taste_preferences:
        lowered = preference.lower()
        if any(keyword in lowered for keyword in PROTEIN_KEYWORDS):
            return string.capwords(preference)
    return FALLBACK_PROTEIN
