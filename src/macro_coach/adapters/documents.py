"""JSON codecs for stored coach documents."""

from pydantic import TypeAdapter

from macro_coach.domain.logs import DailyLog
from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import UserProfile

PROFILE_ADAPTER = TypeAdapter(UserProfile)
PLAN_ADAPTER = TypeAdapter(Plan)
LOGS_ADAPTER = TypeAdapter(list[DailyLog])
