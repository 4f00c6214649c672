"""
Utilities for turning ledger entries into continuous daily series,
with zero-filled values on days without records.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

import pandas as pd


def records_to_frame(records: Iterable, value_attr: str, value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Build a two-column DataFrame (``date``, value) from ledger entries, one row
    per entry. Entries are expected to expose ``fecha``.
    """
    value_col = value_col or value_attr
    rows = [{"date": r.fecha, value_col: getattr(r, value_attr)} for r in records]
    if not rows:
        return pd.DataFrame(columns=["date", value_col])
    return pd.DataFrame(rows)


def make_daily_index(
    df: pd.DataFrame,
    start: date,
    end: date,
    value_cols: List[str],
) -> pd.DataFrame:
    """
    Reindex DataFrame to a continuous daily date range [start, end] inclusive.
    Rows sharing a day are summed; missing dates are added with zeros.

    Args:
        df: Input DataFrame expected to have a 'date' column (date-like)
        start: Start date (inclusive)
        end: End date (inclusive)
        value_cols: Columns to aggregate and zero-fill

    Returns:
        DataFrame indexed by day with one column per value column.
    """
    full_range = pd.date_range(pd.to_datetime(start), pd.to_datetime(end), freq="D")

    if df is None or df.empty:
        return pd.DataFrame({c: 0 for c in value_cols}, index=full_range)

    if "date" not in df.columns:
        raise ValueError("make_daily_index expects a 'date' column in the DataFrame")

    data = df.copy()
    data["date"] = pd.to_datetime(data["date"]).dt.normalize()
    data = data[(data["date"] >= full_range[0]) & (data["date"] <= full_range[-1])]
    grouped = data.groupby("date")[value_cols].sum()
    return grouped.reindex(full_range, fill_value=0)
