#!/usr/bin/env python3
"""
DataFrame adapters for expense analysis.

Calendar-based rollups (weeks, day-of-week) are easier to express with pandas
resampling than with hand-written date arithmetic.
"""

import logging
from collections.abc import Sequence

import pandas as pd

from ..core.models import Expense, WeeklyTotal
from ..core.money import Money

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["id", "date", "category", "description", "amount_cents"]


def expenses_to_dataframe(expenses: Sequence[Expense]) -> pd.DataFrame:
    """
    Convert Expense domain models to a DataFrame.

    Amounts stay in integer cents; `date` is parsed to datetime64.

    Args:
        expenses: Expense records

    Returns:
        DataFrame sorted by date ascending (empty frame with the same columns
        when there are no expenses)
    """
    records = [
        {
            "id": e.id,
            "date": e.date,
            "category": e.category.value,
            "description": e.description,
            "amount_cents": e.amount.to_cents(),
        }
        for e in expenses
    ]
    df = pd.DataFrame(records, columns=FRAME_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], format="%Y-%m-%d")
    df["amount_cents"] = df["amount_cents"].astype("int64")

    if not df.empty:
        df = df.sort_values("date", kind="stable").reset_index(drop=True)

    logger.debug("Converted %d expenses to DataFrame", len(df))
    return df


def weekly_totals(expenses: Sequence[Expense]) -> list[WeeklyTotal]:
    """
    Roll expenses up by Monday-started week.

    Weeks without expenses inside the covered span are kept with a zero total,
    so the series can be charted directly.
    """
    df = expenses_to_dataframe(expenses)
    if df.empty:
        return []

    # W-SUN periods run Monday through Sunday
    df["week_start"] = df["date"].dt.to_period("W-SUN").dt.start_time
    grouped = df.groupby("week_start")["amount_cents"].agg(["sum", "count"])

    span = pd.date_range(grouped.index.min(), grouped.index.max(), freq="7D")
    grouped = grouped.reindex(span, fill_value=0)

    return [
        WeeklyTotal(
            week_start=week_start.date().isoformat(),
            total=Money.from_cents(int(row["sum"])),
            count=int(row["count"]),
        )
        for week_start, row in grouped.iterrows()
    ]
