#!/usr/bin/env python3
"""
Scheduled Backups

Recurring exports kept in a persisted list. Nothing runs in the background:
a caller (the CLI `schedule run` command, or a cron job invoking it) asks the
scheduler to run whatever is due, and each run goes through the export engine
like any other recorded export.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..core.errors import StorageWriteError, ValidationError
from ..core.models import Expense, generate_id
from .generators import ExportFormat
from .history import ExportHistoryEntry
from .integrations import LOCAL_DESTINATION, destination_label

if TYPE_CHECKING:
    from .datastore import ScheduleStore
    from .engine import ExportEngine

logger = logging.getLogger(__name__)

BACKUP_HOUR = 2


class ScheduleFrequency(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


def compute_next_run(frequency: ScheduleFrequency, now: datetime | None = None) -> datetime:
    """
    Next 02:00 run time after now for a frequency.

    - daily: tomorrow
    - weekly: the coming Sunday (a full week ahead when today is Sunday)
    - monthly: the first of next month
    """
    now = now or datetime.now()
    at_backup_hour = now.replace(hour=BACKUP_HOUR, minute=0, second=0, microsecond=0)

    if frequency is ScheduleFrequency.DAILY:
        return at_backup_hour + timedelta(days=1)
    if frequency is ScheduleFrequency.WEEKLY:
        days_since_sunday = (now.weekday() + 1) % 7
        return at_backup_hour + timedelta(days=7 - days_since_sunday)

    year, month = (now.year + 1, 1) if now.month == 12 else (now.year, now.month + 1)
    return at_backup_hour.replace(year=year, month=month, day=1)


def parse_run_time(value: str) -> datetime:
    """
    Parse a stored run time into an aware UTC datetime.

    Naive values are local wall-clock times (what compute_next_run produces);
    a trailing "Z" is accepted for timestamps written as UTC.

    Raises:
        ValueError: If the value is not an ISO 8601 timestamp
    """
    if not isinstance(value, str):
        raise ValueError(f"Run time must be a string: {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(value))


def _as_utc(moment: datetime) -> datetime:
    # astimezone() reads naive datetimes as local time
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class ScheduledBackup:
    """One recurring export."""

    id: str
    frequency: ScheduleFrequency
    destination: str  # integration id or "local"
    format: ExportFormat
    enabled: bool
    next_run: str
    created_at: str
    last_run: str | None = None

    def is_due(self, now: datetime) -> bool:
        return self.enabled and parse_run_time(self.next_run) <= _as_utc(now)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "frequency": self.frequency.value,
            "destination": self.destination,
            "format": self.format.value,
            "enabled": self.enabled,
            "nextRun": self.next_run,
        }
        if self.last_run is not None:
            data["lastRun"] = self.last_run
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduledBackup":
        parse_run_time(data["nextRun"])
        if data.get("lastRun") is not None:
            parse_run_time(data["lastRun"])
        return cls(
            id=str(data["id"]),
            frequency=ScheduleFrequency(data["frequency"]),
            destination=data["destination"],
            format=ExportFormat.parse(data["format"]),
            enabled=bool(data["enabled"]),
            next_run=data["nextRun"],
            created_at=data["createdAt"],
            last_run=data.get("lastRun"),
        )


class BackupScheduler:
    """Manage and run scheduled backups."""

    def __init__(self, store: "ScheduleStore", engine: "ExportEngine"):
        self.store = store
        self.engine = engine

    def backups(self) -> list[ScheduledBackup]:
        return self.store.load()

    def add(
        self,
        frequency: ScheduleFrequency,
        destination: str = LOCAL_DESTINATION,
        export_format: ExportFormat = ExportFormat.CSV,
        now: datetime | None = None,
    ) -> ScheduledBackup:
        """Create an enabled backup whose first run is the next slot after now."""
        now = now or datetime.now()
        destination_label(destination)  # rejects unknown destinations
        backup = ScheduledBackup(
            id=generate_id(),
            frequency=frequency,
            destination=destination,
            format=export_format,
            enabled=True,
            next_run=compute_next_run(frequency, now).isoformat(),
            created_at=now.isoformat(),
        )
        self.store.update(lambda backups: [*backups, backup])
        logger.info("Scheduled %s %s backup to %s", frequency.value, export_format.value, destination)
        return backup

    def remove(self, backup_id: str) -> bool:
        """Delete a backup; returns False if it did not exist."""
        removed = False

        def drop(backups: list[ScheduledBackup]) -> list[ScheduledBackup]:
            nonlocal removed
            kept = [b for b in backups if b.id != backup_id]
            removed = len(kept) != len(backups)
            return kept

        self.store.update(drop)
        return removed

    def set_enabled(self, backup_id: str, enabled: bool) -> ScheduledBackup:
        """
        Enable or disable a backup.

        Raises:
            ValidationError: If no backup has this id
        """
        changed: list[ScheduledBackup] = []

        def toggle(backups: list[ScheduledBackup]) -> list[ScheduledBackup]:
            result = []
            for b in backups:
                if b.id == backup_id:
                    b = replace(b, enabled=enabled)
                    changed.append(b)
                result.append(b)
            return result

        self.store.update(toggle)
        if not changed:
            raise ValidationError(f"No scheduled backup with id {backup_id}", field="id")
        return changed[0]

    def run_due(self, expenses: Sequence[Expense], now: datetime | None = None) -> list[ExportHistoryEntry]:
        """
        Export every enabled backup that is due and advance its next run.

        Each backup is advanced and saved as soon as its export finishes, so a
        later failure never reruns the backups that already ran. An export
        whose history entry could not be saved still counts as run.

        Returns:
            History entries of the exports that ran
        """
        now = now or datetime.now()
        entries: list[ExportHistoryEntry] = []

        with self.store.lock:
            for backup in [b for b in self.store.load() if b.is_due(now)]:
                try:
                    _, entry = self.engine.run_recorded_export(
                        expenses,
                        backup.format,
                        filename=f"backup-{now.date().isoformat()}",
                        destination=destination_label(backup.destination),
                        template_id=None,
                    )
                except StorageWriteError as e:
                    if e.result is None:
                        raise
                    logger.error("History for scheduled backup %s was not saved: %s", backup.id, e)
                    _, entry = e.result
                entries.append(entry)
                self._advance(backup.id, now)

        logger.info("Ran %d scheduled backups", len(entries))
        return entries

    def _advance(self, backup_id: str, now: datetime) -> None:
        def advance(backups: list[ScheduledBackup]) -> list[ScheduledBackup]:
            return [
                replace(
                    b,
                    last_run=now.isoformat(),
                    next_run=compute_next_run(b.frequency, now).isoformat(),
                )
                if b.id == backup_id
                else b
                for b in backups
            ]

        self.store.update(advance)
