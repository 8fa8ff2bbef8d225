"""
analytics/derivations.py
------------------------

Derivation Engine for the sales dashboard.

This module must remain pure:
- Input: the record table (pd.DataFrame from analytics.record_source)
  plus FilterCriteria.
- Output: new DataFrames or JSON-serializable dicts. Inputs are never mutated,
  no I/O is performed, and empty input yields empty / zero aggregates.

Keys and values may be given as a column name or as a callable
``DataFrame -> Series`` aligned with the input rows.

Used by ui/app.py and ui/pages/data_table.py.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

ALL = "all"

REGIONS: Dict[str, str] = {
    "NA": "NA_Sales",
    "EU": "EU_Sales",
    "JP": "JP_Sales",
    "Other": "Other_Sales",
}

Selector = Union[str, Callable[[pd.DataFrame], pd.Series]]


# --------------------------------------------------------------------------- #
# Models
# --------------------------------------------------------------------------- #

class FilterCriteria(BaseModel):
    """
    Active year / platform constraint pair.

    Both sides are normalized before comparison: ``year`` becomes an int
    ("2008", 2008 and 2008.0 are the same constraint) and ``platform`` a
    stripped string. ``"all"`` (or None / blank) disables a constraint.
    """
    model_config = ConfigDict(frozen=True)

    year: Union[int, str] = Field(default=ALL, description="Release year or 'all'")
    platform: str = Field(default=ALL, description="Platform name or 'all'")

    @field_validator("year", mode="before")
    @classmethod
    def _normalize_year(cls, v: Any) -> Union[int, str]:
        if v is None:
            return ALL
        if isinstance(v, str):
            v = v.strip()
            if not v or v.lower() == ALL:
                return ALL
        try:
            as_float = float(v)
        except (TypeError, ValueError):
            raise ValueError(f"year must be an integer or '{ALL}', got {v!r}")
        if not as_float.is_integer():
            raise ValueError(f"year must be an integer or '{ALL}', got {v!r}")
        return int(as_float)

    @field_validator("platform", mode="before")
    @classmethod
    def _normalize_platform(cls, v: Any) -> str:
        if v is None:
            return ALL
        v = str(v).strip()
        return ALL if not v or v.lower() == ALL else v


class SummaryMetrics(BaseModel):
    """Headline numbers for the summary cards."""
    total_count: int = 0
    total_sales: float = 0.0
    average_sales: Optional[float] = Field(default=None, description="None when there are no records")
    top_group_key: Optional[Any] = None
    top_group_value: Optional[float] = None
    regional_share: Dict[str, float] = Field(default_factory=lambda: {r: 0.0 for r in REGIONS})


# --------------------------------------------------------------------------- #
# Internal helpers
# --------------------------------------------------------------------------- #

def _scalar(value: Any) -> Any:
    """Plain Python scalar for dict keys (None for absent)."""
    if value is None or value is pd.NA:
        return None
    if isinstance(value, (float, np.floating)) and np.isnan(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def _resolve(records: pd.DataFrame, selector: Selector) -> pd.Series:
    if callable(selector):
        series = selector(records)
        if not isinstance(series, pd.Series):
            series = pd.Series(series, index=records.index)
        return series
    if selector not in records.columns:
        raise KeyError(f"Unknown column: {selector!r}")
    return records[selector]


def _numeric(series: pd.Series) -> pd.Series:
    """Numeric view with absent / unreadable values as 0.0."""
    return pd.to_numeric(series, errors="coerce").astype(float).fillna(0.0)


def _column_total(records: pd.DataFrame, column: str) -> float:
    if records.empty or column not in records.columns:
        return 0.0
    return float(_numeric(records[column]).sum())


# --------------------------------------------------------------------------- #
# Core operations
# --------------------------------------------------------------------------- #

def apply_filters(records: pd.DataFrame, criteria: Optional[FilterCriteria] = None) -> pd.DataFrame:
    """
    Keep rows matching every active constraint, in input order.

    Records with an absent year / platform never match a specific constraint.
    """
    criteria = criteria or FilterCriteria()
    if records.empty:
        return records.copy()

    mask = np.ones(len(records), dtype=bool)

    if criteria.year != ALL:
        years = pd.to_numeric(records["Year"], errors="coerce")
        mask &= (years == criteria.year).fillna(False).to_numpy(dtype=bool)

    if criteria.platform != ALL:
        platforms = records["Platform"].astype("string").str.strip()
        mask &= (platforms == criteria.platform).fillna(False).to_numpy(dtype=bool)

    return records.loc[mask].copy()


def group_sum_by(records: pd.DataFrame, key: Selector, value: Selector) -> Dict[Any, float]:
    """
    Sum ``value`` per distinct ``key``.

    Keys appear once each, in first-seen order. Absent values contribute 0.
    Rows with an absent key are grouped under ``None`` so that the group
    totals always add up to the column total.
    """
    if records.empty:
        return {}

    keys = _resolve(records, key)
    values = _numeric(_resolve(records, value))
    sums = values.groupby(keys, sort=False, dropna=False).sum()
    return {_scalar(k): float(v) for k, v in sums.items()}


def average_by(records: pd.DataFrame, key: Selector, value: Selector) -> Dict[Any, float]:
    """
    Mean of ``value`` per ``key``: group sum divided by the number of rows
    sharing the key (rows with an absent value still count). Keys without
    rows never appear.
    """
    if records.empty:
        return {}

    keys = _resolve(records, key)
    values = _numeric(_resolve(records, value))
    means = values.groupby(keys, sort=False, dropna=False).mean()
    return {_scalar(k): float(v) for k, v in means.items()}


def regional_totals(records: pd.DataFrame) -> Dict[str, float]:
    """Sum of each tracked region's sales (absent as 0)."""
    return {region: _column_total(records, col) for region, col in REGIONS.items()}


def top_n(records: pd.DataFrame, value: Selector = "Global_Sales", n: int = 10) -> pd.DataFrame:
    """
    Rows ranked by ``value`` descending, first ``n`` kept.

    Stable: ties keep their input order. Absent values rank as 0.
    """
    if records.empty or n <= 0:
        return records.iloc[0:0].copy()

    values = _numeric(_resolve(records, value)).to_numpy(dtype=float)
    order = np.argsort(-values, kind="stable")[:n]
    return records.iloc[order].copy()


def summary_metrics(
    records: pd.DataFrame,
    grouped: Optional[Dict[Any, float]] = None,
) -> SummaryMetrics:
    """
    Headline metrics for the current record selection.

    Parameters
    ----------
    records : pd.DataFrame
        Usually the filtered record table.
    grouped : dict, optional
        A grouped aggregate (e.g. platform_sales). Its highest group is
        reported; ties go to the first key in the mapping's order.

    Returns
    -------
    SummaryMetrics
        ``average_sales`` is None for an empty selection, regional shares
        are 0.0 when the global total is 0.
    """
    count = len(records)
    total = _column_total(records, "Global_Sales")

    top_key, top_value = None, None
    for k, v in (grouped or {}).items():
        if v is None or pd.isna(v):
            continue
        if top_value is None or v > top_value:
            top_key, top_value = k, float(v)

    regional = regional_totals(records)
    share = {
        region: (amount / total * 100.0 if total else 0.0)
        for region, amount in regional.items()
    }

    return SummaryMetrics(
        total_count=count,
        total_sales=total,
        average_sales=(total / count) if count else None,
        top_group_key=top_key,
        top_group_value=top_value,
        regional_share=share,
    )


# --------------------------------------------------------------------------- #
# Dashboard aggregates
# --------------------------------------------------------------------------- #

def platform_sales(records: pd.DataFrame) -> Dict[Any, float]:
    return group_sum_by(records, "Platform", "Global_Sales")


def genre_sales(records: pd.DataFrame) -> Dict[Any, float]:
    return group_sum_by(records, "Genre", "Global_Sales")


def average_sales_by_genre(records: pd.DataFrame) -> Dict[Any, float]:
    return average_by(records, "Genre", "Global_Sales")


def yearly_trend(records: pd.DataFrame) -> Dict[int, float]:
    """Global sales per release year, ascending; rows without a year are skipped."""
    if records.empty:
        return {}
    sums = group_sum_by(records, lambda df: pd.to_numeric(df["Year"], errors="coerce"), "Global_Sales")
    return {int(year): total for year, total in sorted((k, v) for k, v in sums.items() if k is not None)}


def filter_options(records: pd.DataFrame) -> Tuple[List[int], List[str]]:
    """Sorted distinct years and platforms for the filter selectors."""
    if records.empty:
        return [], []
    years = pd.to_numeric(records["Year"], errors="coerce").dropna().unique()
    platforms = records["Platform"].dropna().astype(str).str.strip()
    return sorted({int(y) for y in years}), sorted({p for p in platforms if p})
