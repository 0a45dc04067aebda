"""Supabase-backed document storage."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError
from supabase import Client

from macro_coach.adapters.documents import LOGS_ADAPTER, PLAN_ADAPTER, PROFILE_ADAPTER
from macro_coach.domain.logs import DailyLog
from macro_coach.domain.plan import Plan
from macro_coach.domain.profile import UserProfile
from macro_coach.services.storage import (
    LOGS_KEY,
    PLAN_KEY,
    PROFILE_KEY,
    CoachStorage,
    upsert_log,
)

_logger = logging.getLogger(__name__)

T = TypeVar("T")

TABLE = "coach_documents"


@dataclass
class SupabaseStorage(CoachStorage):
    """Supabase implementation keeping one JSON payload per key."""

    client: Client
    _locks: dict[str, threading.Lock] = field(
        default_factory=lambda: {
            key: threading.Lock() for key in (PROFILE_KEY, PLAN_KEY, LOGS_KEY)
        }
    )

    def fetch_profile(self) -> UserProfile | None:
        """Return the stored profile, if present."""
        return self._read(PROFILE_KEY, PROFILE_ADAPTER)

    def save_profile(self, profile: UserProfile) -> None:
        """Upsert the profile document."""
        with self._locks[PROFILE_KEY]:
            self._write(PROFILE_KEY, PROFILE_ADAPTER, profile)

    def fetch_plan(self) -> Plan | None:
        """Return the active plan, if present."""
        return self._read(PLAN_KEY, PLAN_ADAPTER)

    def save_plan(self, plan: Plan) -> None:
        """Upsert the plan document."""
        with self._locks[PLAN_KEY]:
            self._write(PLAN_KEY, PLAN_ADAPTER, plan)

    def fetch_logs(self) -> list[DailyLog]:
        """Return all stored logs."""
        return self._read(LOGS_KEY, LOGS_ADAPTER) or []

    def save_log(self, log: DailyLog) -> None:
        """Upsert the log for its calendar day."""
        with self._locks[LOGS_KEY]:
            logs = self._read(LOGS_KEY, LOGS_ADAPTER) or []
            self._write(LOGS_KEY, LOGS_ADAPTER, upsert_log(logs, log))

    def _read(self, key: str, adapter: TypeAdapter[T]) -> T | None:
        try:
            response = (
                self.client.table(TABLE)
                .select("payload")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception:
            _logger.exception("Failed to fetch %s from Supabase", key)
            return None
        if not response.data:
            return None
        try:
            return adapter.validate_python(response.data[0]["payload"])
        except (KeyError, ValidationError):
            _logger.warning("Ignoring unreadable Supabase document %s", key)
            return None

    def _write(self, key: str, adapter: TypeAdapter[T], value: T) -> None:
        payload = adapter.dump_python(value, mode="json")
        try:
            self.client.table(TABLE).upsert(
                {
                    "key": key,
                    "payload": payload,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            ).execute()
        except Exception:
            _logger.exception("Failed to persist %s to Supabase", key)
