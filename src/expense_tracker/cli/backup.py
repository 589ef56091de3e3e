#!/usr/bin/env python3
"""
Backup CLI - Scheduled Backup and Integration Commands
"""

import click

from ..core.errors import ExpenseTrackerError
from ..export.generators import ExportFormat
from ..export.integrations import INTEGRATIONS, LOCAL_DESTINATION
from ..export.schedules import ScheduleFrequency
from .services import load_services

DESTINATION_CHOICE = click.Choice([LOCAL_DESTINATION, *(i.id for i in INTEGRATIONS)])
INTEGRATION_CHOICE = click.Choice([i.id for i in INTEGRATIONS])


@click.group()
def schedule() -> None:
    """Scheduled backup commands."""
    pass


@schedule.command("add")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in ScheduleFrequency]),
    default="weekly",
    help="How often to back up (default: weekly)",
)
@click.option("--destination", type=DESTINATION_CHOICE, default=LOCAL_DESTINATION, help="Where backups go")
@click.option(
    "--format", "export_format", type=click.Choice([f.value for f in ExportFormat]), default="csv", help="Format"
)
def schedule_add(frequency: str, destination: str, export_format: str) -> None:
    """Schedule a recurring backup."""
    services = load_services()
    try:
        backup = services.scheduler.add(ScheduleFrequency(frequency), destination, ExportFormat(export_format))
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Scheduled {frequency} backup {backup.id}; next run {backup.next_run}")


@schedule.command("list")
def schedule_list() -> None:
    """List scheduled backups."""
    services = load_services()
    backups = services.scheduler.backups()
    if not backups:
        click.echo("No scheduled backups")
        return
    for b in backups:
        state = "enabled" if b.enabled else "disabled"
        click.echo(
            f"{b.id}  {b.frequency.value:<8} {b.format.value:<5} {b.destination:<14} {state:<9} "
            f"next {b.next_run}  last {b.last_run or 'never'}"
        )


@schedule.command("remove")
@click.argument("backup_id")
def schedule_remove(backup_id: str) -> None:
    """Delete a scheduled backup."""
    services = load_services()
    if not services.scheduler.remove(backup_id):
        raise click.ClickException(f"No scheduled backup with id {backup_id}")
    click.echo(f"✅ Removed backup {backup_id}")


@schedule.command("enable")
@click.argument("backup_id")
@click.option("--off", is_flag=True, help="Disable instead of enable")
def schedule_enable(backup_id: str, off: bool) -> None:
    """Enable (or with --off, disable) a scheduled backup."""
    services = load_services()
    try:
        backup = services.scheduler.set_enabled(backup_id, not off)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Backup {backup.id} {'enabled' if backup.enabled else 'disabled'}")


@schedule.command("run")
def schedule_run() -> None:
    """Run every enabled backup that is due."""
    services = load_services()
    try:
        entries = services.scheduler.run_due(services.expenses.load())
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e

    if not entries:
        click.echo("No backups due")
        return
    for entry in entries:
        click.echo(f"✅ {entry.destination}: {entry.filename} ({entry.record_count} expenses)")


@click.group()
def integrations() -> None:
    """Export integration commands."""
    pass


@integrations.command("list")
def integrations_list() -> None:
    """Show integrations and whether each is connected."""
    services = load_services()
    for integration, connected in services.integrations.status():
        marker = "connected" if connected else "not connected"
        click.echo(f"{integration.id:<14} {integration.name:<14} {marker:<14} {integration.description}")


@integrations.command("connect")
@click.argument("integration_id", type=INTEGRATION_CHOICE)
def integrations_connect(integration_id: str) -> None:
    """Connect an integration."""
    services = load_services()
    try:
        services.integrations.sink(integration_id).connect()
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Connected {integration_id}")


@integrations.command("disconnect")
@click.argument("integration_id", type=INTEGRATION_CHOICE)
def integrations_disconnect(integration_id: str) -> None:
    """Disconnect an integration."""
    services = load_services()
    try:
        services.integrations.sink(integration_id).disconnect()
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Disconnected {integration_id}")


@integrations.command("sync")
@click.argument("integration_id", type=INTEGRATION_CHOICE)
@click.option(
    "--format", "export_format", type=click.Choice([f.value for f in ExportFormat]), default="csv", help="Format"
)
def integrations_sync(integration_id: str, export_format: str) -> None:
    """Sync all expenses to a connected integration."""
    services = load_services()
    try:
        entry = services.integrations.sink(integration_id).sync(services.expenses.load(), export_format)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Synced {entry.record_count} expenses to {entry.destination}")
