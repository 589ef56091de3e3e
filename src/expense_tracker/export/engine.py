#!/usr/bin/env python3
"""
Export Orchestrator

Ties filtering, sorting, format generation and result metadata into one export
operation, and optionally records each export in the persisted history.

Pipeline:
1. Normalize the requested filename
2. Narrow the expenses (date/category filter, or a template predicate)
3. Sort most recent first
4. Generate the document for the requested format
5. Count and total the exported records
6. Package an ExportResult (and, on the recorded path, a history entry)
"""

import logging
import re
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Protocol, Union

from ..analysis.aggregation import total_spending
from ..core.errors import StorageWriteError
from ..core.models import Category, Expense, utc_timestamp
from ..core.money import Money
from .filters import filter_for_export, sort_for_export
from .generators import ExportFormat, generate
from .history import ExportHistory, ExportHistoryEntry, ExportStatus
from .templates import get_template

logger = logging.getLogger(__name__)

DEFAULT_BASENAME = "expenses"

_TRAILING_EXTENSION = re.compile(r"\.[^.]+$")


def build_filename(requested: str, export_format: Union[str, ExportFormat]) -> str:
    """
    Derive the output filename for a format.

    Surrounding whitespace is trimmed and one trailing extension stripped from
    the request. An empty base falls back to "expenses", and the format's
    extension is appended.

    Examples:
        build_filename("report.old", "csv") -> "report.csv"
        build_filename("", "json") -> "expenses.json"
        build_filename("q3", "pdf") -> "q3.html"
    """
    fmt = ExportFormat.parse(export_format)
    base = _TRAILING_EXTENSION.sub("", requested.strip()) or DEFAULT_BASENAME
    return f"{base}.{fmt.extension}"


def build_default_filename(today: date | None = None) -> str:
    """Default extension-less export name, e.g. "expenses-2024-02-10"."""
    return f"{DEFAULT_BASENAME}-{(today or date.today()).isoformat()}"


class DelayProvider(Protocol):
    """Source of artificial latency around slow-looking operations."""

    def wait(self) -> None: ...


class NoDelay:
    def wait(self) -> None:
        return None


@dataclass(frozen=True)
class SleepDelay:
    """Blocks for a fixed number of milliseconds."""

    milliseconds: int

    def wait(self) -> None:
        if self.milliseconds > 0:
            time.sleep(self.milliseconds / 1000)


@dataclass(frozen=True)
class ExportOptions:
    """Inputs of one export operation."""

    format: Union[str, ExportFormat]
    filename: str = ""
    date_from: str = ""
    date_to: str = ""
    categories: Sequence[Union[Category, str]] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExportResult:
    """Output of one export operation."""

    content: str
    media_type: str
    filename: str
    format: ExportFormat
    record_count: int
    total_amount: Money

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")

    def write_to(self, directory: Path) -> Path:
        """Write the document into directory (the "download"); returns its path."""
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.to_bytes())
        logger.info("Wrote %s (%d bytes)", path, len(self.content))
        return path


class ExportEngine:
    """
    Runs exports.

    Args:
        history: Export history to record into (recorded exports only)
        delay: Artificial latency applied before each export
        clock: Wall-clock source for embedded generation timestamps
    """

    def __init__(
        self,
        history: ExportHistory | None = None,
        delay: DelayProvider | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.history = history
        self.delay: DelayProvider = delay or NoDelay()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def _package(self, expenses: Sequence[Expense], fmt: ExportFormat, requested_filename: str) -> ExportResult:
        ordered = sort_for_export(expenses)
        document = generate(fmt, ordered, now=self.clock())
        return ExportResult(
            content=document.content,
            media_type=document.media_type,
            filename=build_filename(requested_filename, fmt),
            format=fmt,
            record_count=len(ordered),
            total_amount=total_spending(ordered),
        )

    def run_export(self, expenses: Sequence[Expense], options: ExportOptions) -> ExportResult:
        """
        Filter, sort and serialize expenses according to options.

        Empty input (or an empty selection) still produces a document.

        Raises:
            UnsupportedFormatError: If options.format is unknown; nothing is generated
        """
        fmt = ExportFormat.parse(options.format)
        self.delay.wait()

        selected = filter_for_export(
            expenses,
            date_from=options.date_from,
            date_to=options.date_to,
            categories=options.categories,
        )
        result = self._package(selected, fmt, options.filename)
        logger.info(
            "Exported %d of %d expenses as %s (%s)",
            result.record_count,
            len(expenses),
            result.filename,
            result.total_amount,
        )
        return result

    def run_recorded_export(
        self,
        expenses: Sequence[Expense],
        export_format: Union[str, ExportFormat],
        filename: str = "",
        destination: str = "Local Download",
        template_id: str | None = None,
    ) -> tuple[ExportResult, ExportHistoryEntry]:
        """
        Export expenses and record the attempt in history.

        When template_id is given the template's predicate selects the expenses;
        otherwise every expense is exported.

        Raises:
            UnsupportedFormatError: If the format is unknown; nothing is recorded
            UnknownTemplateError: If template_id is not registered
            StorageWriteError: If the history write fails; `error.result` holds
                the finished (ExportResult, ExportHistoryEntry)
        """
        fmt = ExportFormat.parse(export_format)
        template = get_template(template_id) if template_id else None
        self.delay.wait()

        selected = template.select(expenses) if template else list(expenses)
        result = self._package(selected, fmt, filename)

        entry = ExportHistoryEntry.new(
            format=fmt,
            destination=destination,
            record_count=result.record_count,
            total_amount=result.total_amount,
            filename=result.filename,
            status=ExportStatus.COMPLETED,
            template_name=template.name if template else None,
            timestamp=utc_timestamp(self.clock()),
        )

        if self.history is not None:
            try:
                self.history.record(entry)
            except StorageWriteError as e:
                logger.error("Export %s succeeded but history was not saved: %s", result.filename, e)
                raise StorageWriteError(str(e), result=(result, entry)) from e

        return result, entry
