#!/usr/bin/env python3
"""
Export History

Every export attempt made through the recorded path leaves an entry in a
persisted, newest-first history capped at the most recent 50 entries.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..core.models import generate_id, utc_timestamp
from ..core.money import Money
from .generators import ExportFormat, json_amount

if TYPE_CHECKING:
    from .datastore import HistoryStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class ExportStatus(Enum):
    """Lifecycle state of a recorded export."""

    COMPLETED = "completed"
    PROCESSING = "processing"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportHistoryEntry:
    """Persisted record of one export attempt."""

    id: str
    timestamp: str
    format: ExportFormat
    destination: str
    record_count: int
    total_amount: Money
    status: ExportStatus
    filename: str
    template_name: str | None = None

    @classmethod
    def new(
        cls,
        format: ExportFormat,
        destination: str,
        record_count: int,
        total_amount: Money,
        filename: str,
        status: ExportStatus = ExportStatus.COMPLETED,
        template_name: str | None = None,
        timestamp: str | None = None,
    ) -> "ExportHistoryEntry":
        """Create an entry with a fresh id and timestamp."""
        return cls(
            id=generate_id(),
            timestamp=timestamp or utc_timestamp(),
            format=format,
            destination=destination,
            record_count=record_count,
            total_amount=total_amount,
            status=status,
            filename=filename,
            template_name=template_name,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted dictionary shape (templateName omitted when unset)."""
        data: dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "format": self.format.value,
            "destination": self.destination,
            "recordCount": self.record_count,
            "totalAmount": json_amount(self.total_amount),
            "status": self.status.value,
        }
        if self.template_name is not None:
            data["templateName"] = self.template_name
        data["filename"] = self.filename
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExportHistoryEntry":
        """Create entry from its persisted dictionary shape."""
        return cls(
            id=str(data["id"]),
            timestamp=data["timestamp"],
            format=ExportFormat.parse(data["format"]),
            destination=data["destination"],
            record_count=int(data["recordCount"]),
            total_amount=Money.from_dollars(data["totalAmount"]),
            status=ExportStatus(data["status"]),
            filename=data["filename"],
            template_name=data.get("templateName"),
        )


class ExportHistory:
    """
    Newest-first export log over a HistoryStore.

    Each mutation is a full read-modify-write of the persisted list, serialized
    by the store's collection lock.
    """

    def __init__(self, store: "HistoryStore", limit: int = DEFAULT_HISTORY_LIMIT):
        self.store = store
        self.limit = limit

    def entries(self) -> list[ExportHistoryEntry]:
        """Current history, newest first (empty if unreadable)."""
        return self.store.load()[: self.limit]

    def record(self, entry: ExportHistoryEntry) -> list[ExportHistoryEntry]:
        """
        Prepend an entry, truncate to the limit and persist.

        Raises:
            StorageWriteError: If the history cannot be written
        """

        def prepend(history: list[ExportHistoryEntry]) -> list[ExportHistoryEntry]:
            return [entry, *history][: self.limit]

        updated = self.store.update(prepend)
        logger.info(
            "Recorded %s export to %s (%d records, %s)",
            entry.format.value,
            entry.destination,
            entry.record_count,
            entry.total_amount,
        )
        return updated

    def record_failure(
        self, format: ExportFormat, destination: str, filename: str, template_name: str | None = None
    ) -> ExportHistoryEntry:
        """Record an export that did not produce output."""
        entry = ExportHistoryEntry.new(
            format=format,
            destination=destination,
            record_count=0,
            total_amount=Money.zero(),
            filename=filename,
            status=ExportStatus.FAILED,
            template_name=template_name,
        )
        self.record(entry)
        return entry

    def clear(self) -> None:
        """Remove every entry."""
        self.store.save([])
        logger.info("Cleared export history")

    def summary(self) -> dict[str, Any]:
        """Aggregate figures over the current history."""
        entries = self.entries()
        completed = [e for e in entries if e.status is ExportStatus.COMPLETED]
        return {
            "exports": len(entries),
            "completed": len(completed),
            "failed": sum(1 for e in entries if e.status is ExportStatus.FAILED),
            "records_exported": sum(e.record_count for e in completed),
            "by_format": dict(Counter(e.format.value for e in entries)),
            "last_export": entries[0].timestamp if entries else None,
        }
