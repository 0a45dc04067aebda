"""JSON file storage for the profile, plan and daily logs."""

import contextlib
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from pydantic import TypeAdapter, ValidationError

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


@dataclass
class JsonFileStorage(CoachStorage):
    """Stores each key as a pretty-printed JSON document in a directory."""

    directory: Path
    _locks: dict[str, threading.Lock] = field(
        default_factory=lambda: {
            key: threading.Lock() for key in (PROFILE_KEY, PLAN_KEY, LOGS_KEY)
        }
    )

    @classmethod
    def create(cls, directory: str | Path) -> "JsonFileStorage":
        """Create the storage directory if needed and return the storage."""
        path = Path(directory)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError:
            _logger.exception("Failed to create storage directory %s", path)
        return cls(directory=path)

    def fetch_profile(self) -> UserProfile | None:
        """Return the stored profile, if readable."""
        return self._read(PROFILE_KEY, PROFILE_ADAPTER)

    def save_profile(self, profile: UserProfile) -> None:
        """Write the profile document."""
        with self._locks[PROFILE_KEY]:
            self._write(PROFILE_KEY, PROFILE_ADAPTER, profile)

    def fetch_plan(self) -> Plan | None:
        """Return the stored plan, if readable."""
        return self._read(PLAN_KEY, PLAN_ADAPTER)

    def save_plan(self, plan: Plan) -> None:
        """Write the plan document."""
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

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _read(self, key: str, adapter: TypeAdapter[T]) -> T | None:
        path = self._path(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError:
            _logger.exception("Failed to read %s", path)
            return None
        try:
            return adapter.validate_json(data)
        except ValidationError:
            _logger.warning("Ignoring unreadable document %s", path)
            return None

    def _write(self, key: str, adapter: TypeAdapter[T], value: T) -> None:
        path = self._path(key)
        payload = adapter.dump_json(value, indent=2)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        except OSError:
            _logger.exception("Failed to persist %s", path)
            return
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            tmp_path.replace(path)
        except OSError:
            _logger.exception("Failed to persist %s", path)
            with contextlib.suppress(OSError):
                tmp_path.unlink()
