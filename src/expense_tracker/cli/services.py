#!/usr/bin/env python3
"""
Service wiring for CLI commands.

Builds the stores, history, engine and schedulers over the configured data
directory. Everything is constructed explicitly and passed down; there is no
process-wide store.
"""

from dataclasses import dataclass

from ..core.config import Config, get_config
from ..export.datastore import (
    ExpenseStore,
    HistoryStore,
    IntegrationStateStore,
    JsonFileStore,
    ScheduleStore,
)
from ..export.engine import ExportEngine, SleepDelay
from ..export.history import ExportHistory
from ..export.integrations import IntegrationHub
from ..export.schedules import BackupScheduler


@dataclass
class Services:
    config: Config
    expenses: ExpenseStore
    history: ExportHistory
    engine: ExportEngine
    scheduler: BackupScheduler
    integrations: IntegrationHub


def load_services(config: Config | None = None) -> Services:
    """Wire every collaborator over the configured data directory."""
    config = config or get_config()
    backend = JsonFileStore(config.data_dir)

    history = ExportHistory(
        HistoryStore(backend, limit=config.export.history_limit), limit=config.export.history_limit
    )
    engine = ExportEngine(history=history, delay=SleepDelay(config.export.delay_ms))

    return Services(
        config=config,
        expenses=ExpenseStore(backend),
        history=history,
        engine=engine,
        scheduler=BackupScheduler(ScheduleStore(backend), engine),
        integrations=IntegrationHub(IntegrationStateStore(backend), engine),
    )
