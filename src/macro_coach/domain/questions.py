"""Static intake questionnaire catalog.

Question ids are referenced by the answer ingestion routing table and must stay
stable across catalog revisions. New questions take ids above 30.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Question:
    """Single intake prompt."""

    id: int
    text: str
    group_id: int
    required: bool = False
    helper: str | None = None
    quick_replies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionGroup:
    """Titled group of intake prompts."""

    id: int
    title: str
    questions: list[Question]


QUESTION_GROUPS: list[QuestionGroup] = [
    QuestionGroup(
        id=1,
        title="Daily Rhythm & Frequency",
        questions=[
            Question(
                id=1,
                text="Walk me through a usual day. When do you tend to eat meals?",
                group_id=1,
                helper="Timing helps me space energy and protein for you.",
                quick_replies=["Early breakfast", "Late breakfast", "Varies"],
            ),
            Question(
                id=2,
                text="How many meals or snacks feel right most days?",
                group_id=1,
                quick_replies=["3 meals", "3 + snacks", "4+", "It depends"],
            ),
            Question(
                id=3,
                text="Any times of day you prefer not to eat?",
                group_id=1,
                quick_replies=["Early AM", "Late PM", "Nope"],
            ),
        ],
    ),
    QuestionGroup(
        id=2,
        title="Taste & Preferences",
        questions=[
            Question(
                id=4,
                text="Foods you're loving lately?",
                group_id=2,
                quick_replies=["Savory", "Sweet", "Spicy"],
            ),
            Question(
                id=5,
                text="Foods or flavors you'd rather skip?",
                group_id=2,
                quick_replies=["Beans", "Seafood", "Spicy", "No thanks"],
            ),
            Question(
                id=11,
                text="Favorite fruits or vegetables?",
                group_id=2,
                quick_replies=["Berries", "Citrus", "Leafy greens"],
            ),
            Question(
                id=12,
                text="Any fruits or veggies you avoid?",
                group_id=2,
                quick_replies=["Cruciferous", "Nightshades", "Not picky"],
            ),
            Question(
                id=9,
                text="Carbs that make you feel great?",
                group_id=2,
                quick_replies=["Rice", "Potatoes", "Pasta", "Oats"],
            ),
            Question(
                id=10,
                text="Proteins you enjoy most?",
                group_id=2,
                quick_replies=["Chicken", "Fish", "Plant-based", "Red meat"],
            ),
        ],
    ),
    QuestionGroup(
        id=3,
        title="Dietary Constraints",
        questions=[
            Question(
                id=6,
                text="Any dietary restrictions, allergies, or cultural guidelines?",
                group_id=3,
                helper="I'll keep your plan safe and respectful.",
                quick_replies=["Gluten-free", "Dairy-free", "Halal", "Kosher", "None"],
            ),
        ],
    ),
    QuestionGroup(
        id=4,
        title="Sweets & Treats",
        questions=[
            Question(
                id=7,
                text="How often do desserts or treats pop up?",
                group_id=4,
                quick_replies=["Daily", "Few times/week", "Rarely"],
            ),
            Question(
                id=8,
                text="What kind of sweet tooth are we fueling?",
                group_id=4,
                quick_replies=["Chocolate", "Candy", "Pastry", "Ice cream"],
            ),
        ],
    ),
    QuestionGroup(
        id=5,
        title="Cooking & Time",
        questions=[
            Question(
                id=13,
                text="How do you feel about cooking?",
                group_id=5,
                quick_replies=["Love it", "Some days", "Minimal"],
            ),
            Question(
                id=14,
                text="Prep time sweet spot per meal?",
                group_id=5,
                quick_replies=["<15 min", "15-30 min", "45+ min"],
            ),
            Question(
                id=15,
                text="Any kitchen equipment limits or favorites?",
                group_id=5,
                quick_replies=["Air fryer", "Slow cooker", "No oven", "Minimal gear"],
            ),
        ],
    ),
    QuestionGroup(
        id=6,
        title="Shopping Habits",
        questions=[
            Question(
                id=16,
                text="How often do you shop for groceries?",
                group_id=6,
                quick_replies=["Daily", "2-3x/week", "Weekly"],
            ),
            Question(
                id=17,
                text="Do you follow a fixed list or shop flexibly?",
                group_id=6,
                quick_replies=["Fixed list", "Flexible", "Hybrid"],
            ),
            Question(id=18, text="Staples you always keep on hand?", group_id=6),
            Question(
                id=19, text="Seasonal favorites worth planning around?", group_id=6
            ),
        ],
    ),
    QuestionGroup(
        id=7,
        title="Body Data & Goals",
        questions=[
            Question(
                id=20,
                text="Recent DEXA/InBody values? Drop them in if you have them.",
                group_id=7,
                required=True,
                helper="Body comp helps me anchor your macros precisely.",
            ),
            Question(
                id=21,
                text=(
                    "If no scan, what's your height, weight, biological sex, "
                    "and estimated body fat %?"
                ),
                group_id=7,
                quick_replies=["Share info", "Prefer not"],
            ),
            Question(
                id=22,
                text=(
                    "Primary goals right now? "
                    "(gain, loss, performance, energy, convenience...)"
                ),
                group_id=7,
                quick_replies=[
                    "Build muscle",
                    "Lose fat",
                    "Perform",
                    "Energy",
                    "Sustain",
                ],
            ),
        ],
    ),
    QuestionGroup(
        id=8,
        title="Health & Supplements",
        questions=[
            Question(
                id=23,
                text=(
                    "Any supplements or meds affecting metabolism, nutrition, "
                    "or body comp? (creatine, GLP-1s...)"
                ),
                group_id=8,
                required=True,
                helper="This keeps recommendations safe and effective.",
                quick_replies=["Creatine", "GLP-1", "HRT", "None"],
            ),
            Question(
                id=24,
                text="List them for me so I can factor them in.",
                group_id=8,
            ),
            Question(
                id=25,
                text="Any injuries or limitations I should respect?",
                group_id=8,
                quick_replies=["Shoulder", "Back", "Knee", "None"],
            ),
            Question(
                id=26,
                text=(
                    "Any medical conditions I should keep in mind? "
                    "(diabetes, thyroid, digestive...)"
                ),
                group_id=8,
            ),
        ],
    ),
    QuestionGroup(
        id=9,
        title="Training & Recovery",
        questions=[
            Question(
                id=27,
                text=(
                    "How heavy is your current training load and recovery? "
                    "(light, moderate, heavy, variable)"
                ),
                group_id=9,
                required=True,
                helper="I periodize fuel around training and recovery.",
            ),
            Question(
                id=28,
                text="Which days need extra fuel or recovery support?",
                group_id=9,
                quick_replies=[
                    "Monday",
                    "Tuesday",
                    "Wednesday",
                    "Thursday",
                    "Friday",
                    "Saturday",
                    "Sunday",
                ],
            ),
            Question(
                id=29,
                text=(
                    "Performance focus? Endurance, speed, strength, "
                    "or something else?"
                ),
                group_id=9,
                quick_replies=["Endurance", "Speed", "Strength", "Power"],
            ),
            Question(
                id=30,
                text=(
                    "Other health practices worth noting "
                    "(hydration, fasting, sleep, stress)?"
                ),
                group_id=9,
            ),
        ],
    ),
]


def all_questions() -> list[Question]:
    """Return every question in catalog order."""
    return [question for group in QUESTION_GROUPS for question in group.questions]


def find_question(question_id: int) -> Question | None:
    """Return the question with the given id, if present."""
    for question in all_questions():
        if question.id == question_id:
            return question
    return None


def required_question_ids() -> set[int]:
    """Return ids of the questions that must be answered to finish intake."""
    return {question.id for question in all_questions() if question.required}


def missing_required_answers(answers: Mapping[int, str]) -> list[int]:
    """Return required question ids without a non-blank answer, sorted."""
    return sorted(
        question_id
        for question_id in required_question_ids()
        if not (answers.get(question_id) or "").strip()
    )
