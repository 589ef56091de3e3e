#!/usr/bin/env python3
"""
Export CLI - Export, Template, History, Share and Email Commands
"""

from pathlib import Path

import click

from ..core.errors import ExpenseTrackerError, StorageWriteError
from ..core.models import CATEGORY_ORDER
from ..export.engine import ExportOptions, ExportResult, build_default_filename
from ..export.filters import filter_for_export
from ..export.generators import ExportFormat
from ..export.integrations import send_email
from ..export.share import build_share_url, encode_share_token
from ..export.templates import get_template, list_templates
from .services import load_services

FORMAT_CHOICE = click.Choice([f.value for f in ExportFormat])
FORMAT_HELP = "Output format; 'pdf' writes a printable .html report"


def _write(result: ExportResult, output_dir: str | None, default_dir: Path) -> Path:
    return result.write_to(Path(output_dir) if output_dir else default_dir)


def _unrecorded_result(e: StorageWriteError) -> tuple:
    """Recover the finished export from a failed history write, or fail the command."""
    if e.result is None:
        raise click.ClickException(str(e)) from e
    click.echo(f"⚠️  Export history was not saved: {e}", err=True)
    return e.result


@click.command()
@click.option("--format", "export_format", type=FORMAT_CHOICE, default="csv", help=FORMAT_HELP)
@click.option("--filename", default="", help="Base filename; any extension is replaced")
@click.option("--from", "date_from", default="", help="Earliest date to include (YYYY-MM-DD)")
@click.option("--to", "date_to", default="", help="Latest date to include (YYYY-MM-DD)")
@click.option(
    "--category",
    "categories",
    multiple=True,
    type=click.Choice([c.value for c in CATEGORY_ORDER], case_sensitive=False),
    help="Category to include (repeatable; none means all)",
)
@click.option("--output-dir", help="Override output directory")
@click.option("--record", is_flag=True, help="Record this export in the export history")
def export(
    export_format: str,
    filename: str,
    date_from: str,
    date_to: str,
    categories: tuple,
    output_dir: str | None,
    record: bool,
) -> None:
    """
    Export expenses to a file.

    Examples:
      expense-tracker export --format csv
      expense-tracker export --format pdf --from 2024-01-01 --to 2024-03-31
      expense-tracker export --format json --category Food --category Bills --filename food-and-bills
    """
    services = load_services()
    expenses = services.expenses.load()
    requested = filename or build_default_filename()

    click.echo(f"[EXPORT] Generating {export_format} export...")
    try:
        if record:
            selected = filter_for_export(expenses, date_from, date_to, categories)
            result, _ = services.engine.run_recorded_export(selected, export_format, filename=requested)
        else:
            options = ExportOptions(
                format=export_format,
                filename=requested,
                date_from=date_from,
                date_to=date_to,
                categories=categories,
            )
            result = services.engine.run_export(expenses, options)
    except StorageWriteError as e:
        result, _ = _unrecorded_result(e)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e

    if result.record_count == 0:
        click.echo("⚠️  No expenses matched; writing an empty export")

    path = _write(result, output_dir, services.config.output_dir)
    click.echo(f"✅ Exported {result.record_count} expenses ({result.total_amount}) to: {path}")


@click.group()
def template() -> None:
    """Export template commands."""
    pass


@template.command("list")
def template_list() -> None:
    """List available export templates."""
    for t in list_templates():
        click.echo(f"{t.id:<20} {t.name:<20} {t.format.value:<5} {t.description}")


@template.command("run")
@click.argument("template_id")
@click.option("--format", "export_format", type=FORMAT_CHOICE, help="Override the template's format")
@click.option("--filename", default="", help="Base filename; defaults to the template id")
@click.option("--output-dir", help="Override output directory")
def template_run(template_id: str, export_format: str | None, filename: str, output_dir: str | None) -> None:
    """Run an export template and record it in history."""
    services = load_services()
    try:
        chosen = get_template(template_id)
        result, entry = services.engine.run_recorded_export(
            services.expenses.load(),
            export_format or chosen.format,
            filename=filename or chosen.id,
            template_id=chosen.id,
        )
    except StorageWriteError as e:
        result, entry = _unrecorded_result(e)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e

    path = _write(result, output_dir, services.config.output_dir)
    click.echo(f"✅ {entry.template_name}: {result.record_count} expenses ({result.total_amount}) to: {path}")


@click.group()
def history() -> None:
    """Export history commands."""
    pass


@history.command("list")
@click.option("--limit", type=int, default=10, help="Number of entries to show (default: 10)")
def history_list(limit: int) -> None:
    """Show recent exports, newest first."""
    services = load_services()
    entries = services.history.entries()
    if not entries:
        click.echo("No exports recorded yet")
        return

    for entry in entries[:limit]:
        template_note = f" [{entry.template_name}]" if entry.template_name else ""
        click.echo(
            f"{entry.timestamp}  {entry.status.value:<10} {entry.format.value:<5} "
            f"{entry.record_count:>5} records {str(entry.total_amount):>12}  "
            f"{entry.destination} -> {entry.filename}{template_note}"
        )

    summary = services.history.summary()
    click.echo(f"\n{summary['exports']} exports, {summary['records_exported']} records exported")


@history.command("clear")
@click.confirmation_option(prompt="Delete the whole export history?")
def history_clear() -> None:
    """Delete every export history entry."""
    services = load_services()
    try:
        services.history.clear()
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo("✅ Export history cleared")


@click.command()
@click.option("--show-token", is_flag=True, help="Print the full token as well as the link")
def share(show_token: bool) -> None:
    """Create a shareable link for all expenses."""
    services = load_services()
    token = encode_share_token(services.expenses.load())
    click.echo(build_share_url(token, services.config.export.share_origin))
    if show_token:
        click.echo(token)


@click.command()
@click.argument("recipient")
@click.option("--format", "export_format", type=FORMAT_CHOICE, default="pdf", help=FORMAT_HELP)
def email(recipient: str, export_format: str) -> None:
    """Send an export to RECIPIENT (simulated; recorded in history)."""
    services = load_services()
    try:
        entry = send_email(services.engine, services.expenses.load(), recipient, export_format)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"✅ Sent {entry.filename} ({entry.record_count} expenses) to {recipient}")
