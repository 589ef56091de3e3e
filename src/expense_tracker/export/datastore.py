#!/usr/bin/env python3
"""
Export DataStore Implementations

Backends (a JSON file per key, or process memory) and the typed collection
stores for expenses, export history, scheduled backups and integration flags.
"""

import json
import logging
from copy import deepcopy
from datetime import datetime
from pathlib import Path
from typing import Any

from ..core.datastore_mixin import DataStoreMixin
from ..core.errors import StorageReadError, StorageWriteError
from ..core.json_utils import read_json, write_json
from ..core.models import Expense
from .history import DEFAULT_HISTORY_LIMIT, ExportHistoryEntry
from .schedules import ScheduledBackup

logger = logging.getLogger(__name__)

EXPENSES_KEY = "expense-tracker-data"
HISTORY_KEY = "expense-tracker-export-history"
SCHEDULES_KEY = "expense-tracker-export-schedules"
INTEGRATIONS_KEY = "expense-tracker-integrations"


class JsonFileStore:
    """
    KeyValueStore keeping each key in `<directory>/<key>.json`.

    Writes are atomic (temp file + rename).
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Any | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return read_json(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageReadError(f"Cannot read {path}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        try:
            write_json(path, value)
        except (OSError, TypeError, ValueError) as e:
            raise StorageWriteError(f"Cannot write {path}: {e}") from e
        logger.debug("Saved %s", path)

    def last_modified(self, key: str) -> datetime | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return datetime.fromtimestamp(path.stat().st_mtime)


class MemoryStore:
    """KeyValueStore held in process memory (tests, ephemeral sessions)."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = {}
        self._modified: dict[str, datetime] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> Any | None:
        return deepcopy(self._data.get(key))

    def save(self, key: str, value: Any) -> None:
        try:
            # Same serializability contract as the file backend
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageWriteError(f"Cannot store {key}: {e}") from e
        self._data[key] = deepcopy(value)
        self._modified[key] = datetime.now()

    def last_modified(self, key: str) -> datetime | None:
        return self._modified.get(key)


class ExpenseStore(DataStoreMixin[list[Expense]]):
    """The expense collection."""

    def __init__(self, backend, key: str = EXPENSES_KEY):
        super().__init__(backend, key)

    def empty(self) -> list[Expense]:
        return []

    def decode(self, raw: Any) -> list[Expense]:
        return [Expense.from_dict(item) for item in raw]

    def encode(self, data: list[Expense]) -> Any:
        return [e.to_dict() for e in data]

    def add(self, expense: Expense) -> list[Expense]:
        """Prepend a new expense (newest entries first, as entered)."""
        return self.update(lambda expenses: [expense, *expenses])

    def remove(self, expense_id: str) -> bool:
        removed = False

        def drop(expenses: list[Expense]) -> list[Expense]:
            nonlocal removed
            kept = [e for e in expenses if e.id != expense_id]
            removed = len(kept) != len(expenses)
            return kept

        self.update(drop)
        return removed

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No expenses recorded"
        return f"Expenses: {count} records"


class HistoryStore(DataStoreMixin[list[ExportHistoryEntry]]):
    """Export history, truncated to the most recent `limit` entries on every save."""

    def __init__(self, backend, key: str = HISTORY_KEY, limit: int = DEFAULT_HISTORY_LIMIT):
        super().__init__(backend, key)
        self.limit = limit

    def empty(self) -> list[ExportHistoryEntry]:
        return []

    def decode(self, raw: Any) -> list[ExportHistoryEntry]:
        return [ExportHistoryEntry.from_dict(item) for item in raw]

    def encode(self, data: list[ExportHistoryEntry]) -> Any:
        return [entry.to_dict() for entry in data[: self.limit]]

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No export history"
        return f"Export history: {count} entries"


class ScheduleStore(DataStoreMixin[list[ScheduledBackup]]):
    """Scheduled backups."""

    def __init__(self, backend, key: str = SCHEDULES_KEY):
        super().__init__(backend, key)

    def empty(self) -> list[ScheduledBackup]:
        return []

    def decode(self, raw: Any) -> list[ScheduledBackup]:
        return [ScheduledBackup.from_dict(item) for item in raw]

    def encode(self, data: list[ScheduledBackup]) -> Any:
        return [backup.to_dict() for backup in data]

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No scheduled backups"
        return f"Scheduled backups: {count}"


class IntegrationStateStore(DataStoreMixin[dict[str, bool]]):
    """Integration id -> connected flag."""

    raw_type = dict

    def __init__(self, backend, key: str = INTEGRATIONS_KEY):
        super().__init__(backend, key)

    def empty(self) -> dict[str, bool]:
        return {}

    def decode(self, raw: Any) -> dict[str, bool]:
        return {str(k): bool(v) for k, v in raw.items()}

    def encode(self, data: dict[str, bool]) -> Any:
        return dict(data)

    def summary_text(self) -> str:
        connected = sorted(k for k, v in self.load().items() if v)
        return f"Connected integrations: {', '.join(connected) if connected else 'none'}"
