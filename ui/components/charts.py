"""
Sales Dashboard — Chart Component
---------------------------------

Purpose
-------
Reusable helpers that turn Derived Aggregates into Plotly figures:
- Trend line (sales per year).
- Category bars (platform / genre / average by genre / top games).
- Share pies (genre distribution, regional distribution).

Design
------
- Pure functions, no Streamlit imports (pages call these).
- Inputs are the dicts / DataFrames returned by analytics.derivations.
- Values are rounded to 2 decimals for display only.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

# Palette shared by every categorical chart
VIBRANT_COLORS: List[str] = [
    "#FF7E7E",
    "#7EBAFF",
    "#FFB67E",
    "#7EFF8E",
    "#D17EFF",
    "#FF7EC5",
    "#FFE57E",
    "#7EFFD4",
    "#FF9B7E",
    "#7EFFFF",
]


# --------------------------------------------------------------------------- #
# Data shaping
# --------------------------------------------------------------------------- #
def aggregate_to_frame(aggregate: Dict[Any, float], key_label: str, value_label: str) -> pd.DataFrame:
    """
    Convert a key -> value mapping into a two-column frame (mapping order kept).

    Absent keys (None) are shown as "Unknown".
    """
    rows = [
        {key_label: "Unknown" if k is None else k, value_label: round(float(v), 2)}
        for k, v in aggregate.items()
    ]
    return pd.DataFrame(rows, columns=[key_label, value_label])


# --------------------------------------------------------------------------- #
# Figure builders
# --------------------------------------------------------------------------- #
def build_trend_figure(trend: Dict[int, float], title: str = "Sales Trend Over Years") -> go.Figure:
    """Line chart of global sales per year (expects ascending years)."""
    data = aggregate_to_frame(trend, "Year", "Sales")
    fig = px.line(data, x="Year", y="Sales", title=title, markers=True)
    fig.update_traces(line_color=VIBRANT_COLORS[0])
    return fig


def build_bar_figure(
    aggregate: Dict[Any, float],
    key_label: str,
    value_label: str = "Sales",
    title: str = "",
    color: str = VIBRANT_COLORS[1],
) -> go.Figure:
    """Bar chart keyed by category, in the aggregate's order."""
    data = aggregate_to_frame(aggregate, key_label, value_label)
    fig = px.bar(data, x=key_label, y=value_label, title=title)
    fig.update_traces(marker_color=color)
    fig.update_xaxes(type="category", tickangle=-45)
    return fig


def build_pie_figure(aggregate: Dict[Any, float], key_label: str, title: str = "") -> go.Figure:
    """Pie chart of each category's share of the total."""
    data = aggregate_to_frame(aggregate, key_label, "Sales")
    fig = px.pie(
        data,
        names=key_label,
        values="Sales",
        title=title,
        color_discrete_sequence=VIBRANT_COLORS,
    )
    fig.update_traces(textinfo="percent+label")
    return fig


def build_top_games_figure(top: pd.DataFrame, value: str = "Global_Sales", title: str = "") -> go.Figure:
    """Bar chart of ranked records (output of derivations.top_n)."""
    if top.empty:
        data = pd.DataFrame({"Name": [], value: []})
    else:
        data = pd.DataFrame(
            {
                "Name": top["Name"].fillna("Unknown").astype(str).to_numpy(),
                value: pd.to_numeric(top[value], errors="coerce").fillna(0.0).round(2).to_numpy(),
            }
        )
    fig = px.bar(data, x="Name", y=value, title=title or f"Top {len(data)} Games by {value}")
    fig.update_traces(marker_color=VIBRANT_COLORS[3])
    fig.update_xaxes(type="category", tickangle=-45)
    return fig


# --------------------------------------------------------------------------- #
# End of File
# --------------------------------------------------------------------------- #
