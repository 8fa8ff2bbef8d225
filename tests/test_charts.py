# tests/test_charts.py
"""Plotly figure builders and display formatting."""

import math

import pytest

from analytics import derivations as dv
from analytics.record_source import empty_records
from ui.components.charts import (
    aggregate_to_frame,
    build_bar_figure,
    build_pie_figure,
    build_top_games_figure,
    build_trend_figure,
)
from ui.components.formatting import format_percent, format_sales


def test_aggregate_to_frame_keeps_order_and_rounds():
    frame = aggregate_to_frame({"Wii": 13.456, None: 1.0, "DS": 5.0}, "Platform", "Sales")
    assert frame.columns.tolist() == ["Platform", "Sales"]
    assert frame["Platform"].tolist() == ["Wii", "Unknown", "DS"]
    assert frame["Sales"].tolist() == [13.46, 1.0, 5.0]


def test_trend_figure(messy_records):
    fig = build_trend_figure(dv.yearly_trend(messy_records))
    trace = fig.data[0]
    assert list(trace.x) == [2004, 2008]
    assert list(trace.y) == [0.0, 17.0]
    assert fig.layout.title.text == "Sales Trend Over Years"


def test_bar_figure(scenario_records):
    fig = build_bar_figure(dv.platform_sales(scenario_records), "Platform", title="Sales by Platform")
    assert list(fig.data[0].x) == ["Wii", "DS"]
    assert list(fig.data[0].y) == [13.0, 5.0]


def test_pie_figure(scenario_records):
    fig = build_pie_figure(dv.regional_totals(scenario_records), "Region", title="Regional Sales Distribution")
    trace = fig.data[0]
    assert list(trace.labels) == ["NA", "EU", "JP", "Other"]
    assert list(trace.values) == [7.0, 5.0, 2.5, 1.75]


def test_top_games_figure(messy_records):
    fig = build_top_games_figure(dv.top_n(messy_records, "Global_Sales", 3))
    assert list(fig.data[0].x) == ["Alpha", "Bravo", "Charlie"]
    assert fig.layout.title.text == "Top 3 Games by Global_Sales"


def test_figures_accept_empty_aggregates():
    build_top_games_figure(dv.top_n(empty_records(), "Global_Sales", 5))
    build_trend_figure({})
    build_bar_figure({}, "Platform")
    build_pie_figure({}, "Genre")


@pytest.mark.parametrize(
    "value, expected",
    [(12.345, "$12.35M"), (0, "$0.00M"), (1234.5, "$1,234.50M"), (None, "N/A"), (math.nan, "N/A")],
)
def test_format_sales(value, expected):
    assert format_sales(value) == expected


def test_format_percent():
    assert format_percent(38.8888) == "38.9%"
    assert format_percent(None) == "N/A"
