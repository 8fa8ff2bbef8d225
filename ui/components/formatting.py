"""Display formatting for metric cards and table cells."""

from __future__ import annotations

import math
from typing import Optional


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def format_sales(value: Optional[float]) -> str:
    """Sales figures are in millions: 12.345 -> '$12.35M'; absent -> 'N/A'."""
    if _is_missing(value):
        return "N/A"
    return f"${float(value):,.2f}M"


def format_percent(value: Optional[float]) -> str:
    if _is_missing(value):
        return "N/A"
    return f"{float(value):.1f}%"
