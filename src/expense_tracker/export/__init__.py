"""
Export Package

Everything between an expense list and a finished export file.

Key Components:
- filters: export and list-view selection
- generators: CSV, JSON and HTML ("pdf") documents
- engine: the export orchestrator and filename rules
- templates: named selection presets
- history: persisted log of recorded exports
- schedules / integrations: recurring backups and simulated destinations
- share: shareable-link tokens
- datastore: persistence backends and collection stores
"""

from .datastore import (
    ExpenseStore,
    HistoryStore,
    IntegrationStateStore,
    JsonFileStore,
    MemoryStore,
    ScheduleStore,
)
from .engine import (
    ExportEngine,
    ExportOptions,
    ExportResult,
    NoDelay,
    SleepDelay,
    build_default_filename,
    build_filename,
)
from .filters import ExpenseFilters, filter_expenses, filter_for_export, sort_for_export
from .generators import ExportFormat, generate, generate_csv, generate_html_report, generate_json
from .history import ExportHistory, ExportHistoryEntry, ExportStatus
from .integrations import INTEGRATIONS, IntegrationHub, SimulatedSink, send_email
from .schedules import BackupScheduler, ScheduledBackup, ScheduleFrequency, compute_next_run
from .share import build_share_url, decode_share_token, encode_share_token
from .templates import ExportTemplate, get_template, list_templates, register_template

__all__ = [
    "INTEGRATIONS",
    "BackupScheduler",
    "ExpenseFilters",
    "ExpenseStore",
    "ExportEngine",
    "ExportFormat",
    "ExportHistory",
    "ExportHistoryEntry",
    "ExportOptions",
    "ExportResult",
    "ExportStatus",
    "ExportTemplate",
    "HistoryStore",
    "IntegrationHub",
    "IntegrationStateStore",
    "JsonFileStore",
    "MemoryStore",
    "NoDelay",
    "ScheduleFrequency",
    "ScheduleStore",
    "ScheduledBackup",
    "SimulatedSink",
    "SleepDelay",
    "build_default_filename",
    "build_filename",
    "build_share_url",
    "compute_next_run",
    "decode_share_token",
    "encode_share_token",
    "filter_expenses",
    "filter_for_export",
    "generate",
    "generate_csv",
    "generate_html_report",
    "generate_json",
    "get_template",
    "list_templates",
    "register_template",
    "send_email",
    "sort_for_export",
]
