#!/usr/bin/env python3
"""
Export Format Generators

Pure functions that serialize an already-filtered, already-sorted (most recent
first) expense sequence into a text document.

Formats:
- csv: header plus one row per expense, minimal RFC4180 quoting on descriptions
- json: pretty-printed metadata block plus an array of four-field records
- pdf: self-contained, print-ready HTML report (saved as .html, not a real PDF)
"""

import html
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from ..analysis.aggregation import category_totals, total_spending
from ..core.dates import ExpenseDate
from ..core.errors import UnsupportedFormatError
from ..core.json_utils import format_json
from ..core.models import Expense, utc_timestamp
from ..core.money import Money


class ExportFormat(Enum):
    """
    Supported export formats.

    PDF exports are an HTML report meant to be printed to PDF from a browser;
    the file extension is therefore ``.html``.
    """

    CSV = "csv"
    JSON = "json"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: Union[str, "ExportFormat"]) -> "ExportFormat":
        """
        Parse a format identifier.

        Raises:
            UnsupportedFormatError: If the identifier is not a known format
        """
        if isinstance(value, ExportFormat):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedFormatError(value) from None

    @property
    def extension(self) -> str:
        return _FORMAT_EXTENSIONS[self]

    @property
    def media_type(self) -> str:
        return _FORMAT_MEDIA_TYPES[self]


_FORMAT_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.JSON: "json",
    ExportFormat.PDF: "html",
}

_FORMAT_MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.JSON: "application/json;charset=utf-8",
    ExportFormat.PDF: "text/html;charset=utf-8",
}


@dataclass(frozen=True)
class GeneratedDocument:
    """Serialized export output."""

    content: str
    media_type: str
    extension: str

    def to_bytes(self) -> bytes:
        return self.content.encode("utf-8")


# CSV

CSV_HEADER = ("Date", "Category", "Amount", "Description")


def escape_csv_field(field: str) -> str:
    """Quote a field only when it contains a comma, double quote or newline."""
    if "," in field or '"' in field or "\n" in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def generate_csv(expenses: Sequence[Expense]) -> str:
    """
    Serialize expenses as CSV.

    Rows are joined with "\\n" and there is no trailing newline. Only the
    description is ever quoted; dates and categories never need it.
    """
    rows = [",".join(CSV_HEADER)]
    rows.extend(
        ",".join([e.date, e.category.value, e.amount.to_fixed(), escape_csv_field(e.description)])
        for e in expenses
    )
    return "\n".join(rows)


# JSON


def json_amount(amount: Money) -> int | float:
    """Whole-dollar amounts serialize as integers (100, not 100.0)."""
    cents = amount.to_cents()
    return cents // 100 if cents % 100 == 0 else amount.to_float()


def generate_json(expenses: Sequence[Expense], exported_at: datetime | None = None) -> str:
    """
    Serialize expenses as a pretty-printed JSON document.

    Key order is fixed: exportedAt, recordCount, totalAmount, expenses.
    """
    document: dict[str, Any] = {
        "exportedAt": utc_timestamp(exported_at),
        "recordCount": len(expenses),
        "totalAmount": json_amount(total_spending(expenses)),
        "expenses": [
            {
                "date": e.date,
                "category": e.category.value,
                "amount": json_amount(e.amount),
                "description": e.description,
            }
            for e in expenses
        ],
    }
    return format_json(document)


# HTML report

REPORT_STYLE = """\
  @media print { body { print-color-adjust: exact; -webkit-print-color-adjust: exact; } }
  body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; color: #1e293b; max-width: 800px; margin: 0 auto; padding: 40px 24px; }
  h1 { font-size: 24px; margin: 0 0 4px; }
  .subtitle { color: #64748b; font-size: 14px; margin-bottom: 32px; }
  .summary-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 16px; margin-bottom: 32px; }
  .summary-card { background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 8px; padding: 16px; }
  .summary-card .label { font-size: 12px; color: #64748b; text-transform: uppercase; letter-spacing: 0.05em; }
  .summary-card .value { font-size: 22px; font-weight: 700; margin-top: 4px; }
  .summary-card .value.small { font-size: 14px; }
  h2 { font-size: 16px; margin: 32px 0 12px; padding-bottom: 8px; border-bottom: 2px solid #10b981; }
  table { width: 100%; border-collapse: collapse; font-size: 13px; }
  th { text-align: left; padding: 8px 12px; background: #f1f5f9; border-bottom: 2px solid #cbd5e1; font-weight: 600; }
  td { padding: 6px 12px; border-bottom: 1px solid #e2e8f0; }
  .right { text-align: right; }
  .center { text-align: center; }
  .total-row td { font-weight: 700; border-top: 2px solid #1e293b; border-bottom: none; padding: 10px 12px; }
  .footer { margin-top: 40px; padding-top: 16px; border-top: 1px solid #e2e8f0; font-size: 11px; color: #94a3b8; text-align: center; }
"""

EMPTY_RANGE_PLACEHOLDER = "N/A"


def report_date_range(expenses: Sequence[Expense]) -> str:
    """
    "oldest — newest" for a most-recent-first sequence.

    Reads the last and first elements, so callers must pass the export order;
    an empty sequence yields the placeholder.
    """
    if not expenses:
        return EMPTY_RANGE_PLACEHOLDER
    return f"{expenses[-1].date} — {expenses[0].date}"


def _summary_card(label: str, value: str, small: bool = False) -> str:
    value_class = "value small" if small else "value"
    return (
        f'    <div class="summary-card"><div class="label">{label}</div>'
        f'<div class="{value_class}">{value}</div></div>'
    )


def generate_html_report(expenses: Sequence[Expense], generated_on: datetime | None = None) -> str:
    """
    Render a self-contained HTML expense report.

    The document has no external resources and prints cleanly, so "Print ->
    Save as PDF" in any browser yields the PDF copy.
    """
    esc = html.escape
    generated_on = generated_on or datetime.now(timezone.utc)
    total = total_spending(expenses)

    category_rows = "\n".join(
        f"      <tr><td>{esc(ct.category.value)}</td><td class=\"center\">{ct.count}</td>"
        f"<td class=\"right\">{ct.total.to_display()}</td></tr>"
        for ct in category_totals(expenses)
    )
    expense_rows = "\n".join(
        f"      <tr><td>{esc(e.date)}</td><td>{esc(e.category.value)}</td>"
        f"<td>{esc(e.description)}</td><td class=\"right\">{e.amount.to_display()}</td></tr>"
        for e in expenses
    )

    cards = "\n".join(
        [
            _summary_card("Total Expenses", total.to_display()),
            _summary_card("Records", str(len(expenses))),
            _summary_card("Date Range", esc(report_date_range(expenses)), small=True),
        ]
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>Expense Report</title>
<style>
{REPORT_STYLE}</style>
</head>
<body>
  <h1>Expense Report</h1>
  <p class="subtitle">Generated on {ExpenseDate(date=generated_on.date()).long_label}</p>

  <div class="summary-grid">
{cards}
  </div>

  <h2>Category Summary</h2>
  <table>
    <thead><tr><th>Category</th><th class="center">Count</th><th class="right">Total</th></tr></thead>
    <tbody>
{category_rows}
    </tbody>
  </table>

  <h2>All Expenses</h2>
  <table>
    <thead><tr><th>Date</th><th>Category</th><th>Description</th><th class="right">Amount</th></tr></thead>
    <tbody>
{expense_rows}
      <tr class="total-row"><td colspan="3">Total</td><td class="right">{total.to_display()}</td></tr>
    </tbody>
  </table>

  <div class="footer">ExpenseTracker &mdash; Exported report. Open in a browser and use Print &rarr; Save as PDF for a PDF copy.</div>
</body>
</html>
"""


def generate(
    export_format: Union[str, ExportFormat], expenses: Sequence[Expense], now: datetime | None = None
) -> GeneratedDocument:
    """
    Dispatch to the generator for export_format.

    Raises:
        UnsupportedFormatError: If the format is unknown
    """
    fmt = ExportFormat.parse(export_format)

    if fmt is ExportFormat.CSV:
        content = generate_csv(expenses)
    elif fmt is ExportFormat.JSON:
        content = generate_json(expenses, exported_at=now)
    else:
        content = generate_html_report(expenses, generated_on=now)

    return GeneratedDocument(content=content, media_type=fmt.media_type, extension=fmt.extension)
