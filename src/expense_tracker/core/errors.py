#!/usr/bin/env python3
"""
Expense Tracker Exceptions

Typed errors raised by the core. Callers (the CLI, or any UI) own the
user-facing messaging; the core only guarantees which error is raised when.
"""

from typing import Any


class ExpenseTrackerError(Exception):
    """Base class for all expense tracker errors."""

    pass


class ValidationError(ExpenseTrackerError):
    """Raised when expense input is malformed at data-entry time."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnsupportedFormatError(ExpenseTrackerError):
    """Raised when an export format identifier is not recognized."""

    def __init__(self, format_id: Any):
        super().__init__(f"Unsupported export format: {format_id!r}")
        self.format_id = format_id


class UnknownTemplateError(ExpenseTrackerError, KeyError):
    """Raised when an export template id is not registered."""

    def __init__(self, template_id: str):
        super().__init__(f"Unknown export template: {template_id!r}")
        self.template_id = template_id

    def __str__(self) -> str:
        return str(self.args[0])


class StorageReadError(ExpenseTrackerError):
    """Raised by strict loads when persisted data is missing or corrupt."""

    pass


class StorageWriteError(ExpenseTrackerError):
    """
    Raised when persisted state cannot be written.

    When the failed write belonged to an otherwise successful export, the
    finished export is attached as ``result`` so it is never lost.
    """

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class IntegrationNotConnectedError(ExpenseTrackerError):
    """Raised when syncing through an integration that is not connected."""

    def __init__(self, integration_id: str):
        super().__init__(f"Integration is not connected: {integration_id}")
        self.integration_id = integration_id
