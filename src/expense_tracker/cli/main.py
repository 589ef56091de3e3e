#!/usr/bin/env python3
"""
Main CLI Entry Point for the Expense Tracker

Provides a unified command-line interface for recording, summarizing and
exporting expenses.
"""

import logging
import os

import click

from ..analysis.aggregation import category_totals, dashboard_summary, monthly_totals
from ..analysis.frames import weekly_totals
from ..core.config import Config, get_config, reload_config
from ..core.errors import ExpenseTrackerError
from ..core.models import CATEGORY_ORDER, Expense
from .services import load_services


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Expense Tracker - Personal Expense Export Engine

    Record expenses, review spending rollups, and export them as CSV, JSON or a
    printable HTML report.
    """
    overrides = {}
    if config_env:
        overrides["EXPENSES_ENV"] = config_env
    if debug:
        overrides["LOG_LEVEL"] = "DEBUG"

    try:
        cfg = _load_config(overrides)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger("expense_tracker").setLevel(logging.DEBUG)

    ctx.obj = {"verbose": verbose, "debug": debug, "config": cfg}

    if verbose:
        click.echo(f"Environment: {cfg.environment.value}")
        click.echo(f"Data directory: {cfg.data_dir}")


def _load_config(overrides: dict[str, str]) -> Config:
    """Apply command-line environment overrides, then (re)load configuration."""
    if not overrides:
        return get_config()
    os.environ.update(overrides)
    return reload_config()


@main.command()
def version() -> None:
    """Show version information."""
    from expense_tracker import __author__, __version__

    click.echo(f"Expense Tracker v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Export Delay: {config_obj.export.delay_ms} ms")
    click.echo(f"  History Limit: {config_obj.export.history_limit}")
    click.echo(f"  Share Origin: {config_obj.export.share_origin}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.option("--amount", required=True, help="Amount in dollars, e.g. 12.50")
@click.option(
    "--category",
    required=True,
    type=click.Choice([c.value for c in CATEGORY_ORDER], case_sensitive=False),
    help="Expense category",
)
@click.option("--description", required=True, help="What the money was spent on (1-200 characters)")
@click.option("--date", "date_str", required=True, help="Expense date (YYYY-MM-DD), not in the future")
def add(amount: str, category: str, description: str, date_str: str) -> None:
    """
    Record a new expense.

    Example:
      expense-tracker add --amount 12.50 --category Food --description Lunch --date 2024-01-05
    """
    services = load_services()
    try:
        expense = Expense.create(amount, category, description, date_str)
        services.expenses.add(expense)
    except ExpenseTrackerError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Added {expense.category.value} expense {expense.amount} on {expense.date} ({expense.id})")


@main.command()
@click.option("--weekly", is_flag=True, help="Include a week-by-week breakdown")
def stats(weekly: bool) -> None:
    """Show dashboard figures: totals, category breakdown and recent months."""
    services = load_services()
    expenses = services.expenses.load()
    summary = dashboard_summary(expenses)

    click.echo("[SUMMARY]")
    click.echo(f"   Total Spending: {summary['total_spending']}")
    click.echo(f"   This Month: {summary['current_month_spending']}")
    click.echo(f"   Average Expense: ${summary['average_expense']:,.2f}")
    click.echo(f"   Expenses: {summary['expense_count']}")

    click.echo("\n[CATEGORIES]")
    for ct in category_totals(expenses):
        click.echo(f"   {ct.category.value:<15} {str(ct.total):>14}  {ct.count:>4}  {ct.percentage:5.1f}%")

    click.echo("\n[MONTHS]")
    for mt in monthly_totals(expenses):
        click.echo(f"   {mt.label:<10} {str(mt.total):>14}")

    if weekly:
        click.echo("\n[WEEKS]")
        for wt in weekly_totals(expenses):
            click.echo(f"   {wt.week_start}  {str(wt.total):>14}  {wt.count:>4}")


from .backup import integrations, schedule  # noqa: E402
from .export import email, export, history, share, template  # noqa: E402

main.add_command(export)
main.add_command(template)
main.add_command(history)
main.add_command(share)
main.add_command(email)
main.add_command(schedule)
main.add_command(integrations)


if __name__ == "__main__":
    main()
