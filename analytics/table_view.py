"""
analytics/table_view.py
-----------------------

Pure helpers behind the searchable / sortable / paginated record table.

Design
------
- No Streamlit imports; ui/pages/data_table.py owns the widget state
  (search text, sort column, current page) and passes it in.
- Every helper returns a new DataFrame; the input is left untouched.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict

TABLE_COLUMNS: List[str] = [
    "Name",
    "Platform",
    "Year",
    "Genre",
    "Publisher",
    "NA_Sales",
    "EU_Sales",
    "JP_Sales",
    "Other_Sales",
    "Global_Sales",
]

SORT_DIRECTIONS = ("asc", "desc")


class GameRecord(BaseModel):
    """Typed, read-only view of one row (record detail panel)."""
    model_config = ConfigDict(frozen=True)

    Rank: Optional[int] = None
    Name: Optional[str] = None
    Platform: Optional[str] = None
    Year: Optional[int] = None
    Genre: Optional[str] = None
    Publisher: Optional[str] = None
    NA_Sales: Optional[float] = None
    EU_Sales: Optional[float] = None
    JP_Sales: Optional[float] = None
    Other_Sales: Optional[float] = None
    Global_Sales: Optional[float] = None

    @classmethod
    def from_row(cls, row: pd.Series) -> "GameRecord":
        data = {}
        for field in cls.model_fields:
            value: Any = row.get(field)
            if value is None or (np.ndim(value) == 0 and pd.isna(value)):
                continue
            data[field] = value.item() if isinstance(value, np.generic) else value
        return cls(**data)


@dataclass(frozen=True)
class Page:
    rows: pd.DataFrame
    page: int
    total_pages: int
    total_rows: int


def search_records(records: pd.DataFrame, term: Optional[str]) -> pd.DataFrame:
    """
    Case-insensitive substring search over every field's text form.
    A blank term matches everything.
    """
    if term is None or not term.strip() or records.empty:
        return records.copy()

    needle = term.strip().lower()
    mask = np.zeros(len(records), dtype=bool)
    for col in records.columns:
        text = records[col].astype("string").str.lower()
        mask |= text.str.contains(needle, regex=False).fillna(False).to_numpy(dtype=bool)
    return records.loc[mask].copy()


def sort_records(records: pd.DataFrame, column: Optional[str], direction: str = "asc") -> pd.DataFrame:
    """Stable sort by one column; absent values always last."""
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"direction must be one of {SORT_DIRECTIONS}, got {direction!r}")
    if column is None:
        return records.copy()
    if column not in records.columns:
        raise ValueError(f"Unknown sort column: {column!r}")
    return records.sort_values(
        column,
        ascending=(direction == "asc"),
        kind="stable",
        na_position="last",
    )


def paginate(records: pd.DataFrame, page: int = 1, page_size: int = 25) -> Page:
    """
    Slice one 1-based page. ``page`` is clamped into [1, total_pages];
    an empty table still has one (empty) page.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive.")

    total_rows = len(records)
    total_pages = max(1, math.ceil(total_rows / page_size))
    page = min(max(1, int(page)), total_pages)
    start = (page - 1) * page_size
    return Page(
        rows=records.iloc[start:start + page_size].copy(),
        page=page,
        total_pages=total_pages,
        total_rows=total_rows,
    )
