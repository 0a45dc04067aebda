"""Rule-based comparison of consumed against target macros."""

from datetime import date

from macro_coach.domain.logs import Adjustment, DailyLog, DayContext
from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import TrainingLoad, UserProfile
from macro_coach.services.parsers import contains_any
from macro_coach.services.plans import select_template

CALORIE_TOLERANCE = 150
HEAVY_DAY_CARB_SHARE = 0.8
RECOVERY_KEYWORDS = ("sauna", "sleep", "hrv")


def suggest_adjustment(context: DayContext) -> Adjustment | None:
    """Return the first matching adjustment for the day, if any.

    Rules are evaluated in order: calorie surplus, calorie deficit, then carbs
    on a heavy training day. Nothing is suggested unless both target and
    consumed macros are known.
    """
    target = context.target_macros
    consumed = context.consumed_macros
    if target is None or consumed is None:
        return None

    calorie_delta = consumed.calories - target.calories
    if calorie_delta > CALORIE_TOLERANCE:
        return Adjustment(
            message=(
                f"You're {int(calorie_delta)} kcal over plan. "
                "Let's ease dinner carbs and add a walk."
            ),
            actions=[
                "Swap dinner starch for greens",
                "Add 10-minute walk post-meal",
            ],
        )
    if -calorie_delta > CALORIE_TOLERANCE:
        return Adjustment(
            message="Fuel is a bit low today. Add a light carb + protein snack.",
            actions=[
                "Add yogurt with berries",
                "Sip electrolytes if training felt heavy",
            ],
        )
    if (
        context.training_load == TrainingLoad.HEAVY
        and consumed.carbs_g < target.carbs_g * HEAVY_DAY_CARB_SHARE
    ):
        return Adjustment(
            message=(
                "Heavy day detected but you're light on carbs. "
                "Let's bump pre-training fuel."
            ),
            actions=[
                "Add banana + honey before next session",
                "Include electrolyte drink during training",
            ],
        )
    return None


class RuleBasedAdvisor:
    """Adjustment suggester backed by ``suggest_adjustment``."""

    async def suggest_adjustments(self, context: DayContext) -> list[Adjustment]:
        """Return zero or one adjustment for the day."""
        adjustment = suggest_adjustment(context)
        return [adjustment] if adjustment else []


def recovery_flag(profile: UserProfile | None) -> bool:
    """Return True when the profile reports a tracked recovery practice."""
    if profile is None:
        return False
    return contains_any(profile.training.recovery_practices, RECOVERY_KEYWORDS)


def build_day_context(
    profile: UserProfile | None,
    plan: Plan | None,
    log: DailyLog | None,
    day: date,
) -> DayContext:
    """Assemble the day snapshot from the active plan and the day's log."""
    target = select_template(plan, profile, day) if plan else None
    if log is not None:
        training_load = log.training_load
        flag = log.recovery_flag
    else:
        training_load = profile.training.load if profile else TrainingLoad.MODERATE
        flag = recovery_flag(profile)
    return DayContext(
        day=day,
        training_load=training_load,
        recovery_flag=flag,
        target_macros=target.macros if target else None,
        consumed_macros=log.total_macros if log else None,
    )
