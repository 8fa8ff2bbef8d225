"""
VGSales Insights — Dashboard
----------------------------
Main entrypoint for the multipage app (`streamlit run ui/app.py`).

- Loads the sales dataset once (cached) and on explicit reload.
- Year / platform filters shared with the Data Table page via session state.
- Summary cards and charts computed by analytics.derivations.
"""

import os
import sys

import streamlit as st

# --- Ensure the project root is in Python's import path ---
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from analytics import derivations as dv
from core.metadata import get_metadata
from core.ui_config import DATA_SOURCE, TOP_N
from core.ui_helpers import (
    UPLOAD_STATE_KEY,
    get_filter_criteria,
    load_dataset,
    reload_dataset,
    set_filter_criteria,
)
from ui.components.charts import (
    aggregate_to_frame,
    build_bar_figure,
    build_pie_figure,
    build_top_games_figure,
    build_trend_figure,
)
from ui.components.formatting import format_percent, format_sales

st.set_page_config(
    page_title="Video Game Sales Analytics",
    layout="wide",
    page_icon="🎮",
)

# ---------------------------------------------------------------------------
# Sidebar — Data source
# ---------------------------------------------------------------------------
st.sidebar.header("📂 Data")
uploaded = st.sidebar.file_uploader("Upload CSV (optional)", type=["csv"])
if uploaded is not None:
    st.session_state[UPLOAD_STATE_KEY] = uploaded.getvalue().decode("utf-8-sig", errors="replace")
elif UPLOAD_STATE_KEY in st.session_state:
    del st.session_state[UPLOAD_STATE_KEY]

if uploaded is None:
    st.sidebar.caption(f"Using default: {DATA_SOURCE}")

if st.sidebar.button("🔄 Reload data"):
    reload_dataset()
    st.rerun()

records = load_dataset()

# ---------------------------------------------------------------------------
# Sidebar — Filters
# ---------------------------------------------------------------------------
st.sidebar.header("🔎 Filters")
years, platforms = dv.filter_options(records)
current = get_filter_criteria()

year_options = [dv.ALL] + years
platform_options = [dv.ALL] + platforms
year_choice = st.sidebar.selectbox(
    "Year",
    year_options,
    index=year_options.index(current.year) if current.year in year_options else 0,
    format_func=lambda y: "All Years" if y == dv.ALL else str(y),
)
platform_choice = st.sidebar.selectbox(
    "Platform",
    platform_options,
    index=platform_options.index(current.platform) if current.platform in platform_options else 0,
    format_func=lambda p: "All Platforms" if p == dv.ALL else p,
)
criteria = set_filter_criteria(year_choice, platform_choice)

# ---------------------------------------------------------------------------
# Derived aggregates
# ---------------------------------------------------------------------------
filtered = dv.apply_filters(records, criteria)
platform_totals = dv.platform_sales(filtered)
genre_totals = dv.genre_sales(filtered)
trend = dv.yearly_trend(filtered)
genre_averages = dv.average_sales_by_genre(filtered)
regions = dv.regional_totals(filtered)
top_games = dv.top_n(filtered, "Global_Sales", TOP_N)
metrics = dv.summary_metrics(filtered, platform_totals)

# ---------------------------------------------------------------------------
# Header & summary cards
# ---------------------------------------------------------------------------
st.title("🎮 Video Game Sales Analytics")

if records.empty:
    st.info("No records loaded. Upload a CSV or check the configured data source.")
    st.stop()

c1, c2, c3 = st.columns(3)
c1.metric("Total Sales", format_sales(metrics.total_sales))
c2.metric("Total Games", f"{metrics.total_count:,}")
c3.metric("Avg Sales/Game", format_sales(metrics.average_sales))

c4, c5, c6, c7, c8 = st.columns(5)
top_label = "N/A" if metrics.top_group_key is None else str(metrics.top_group_key)
c4.metric("Top Platform", top_label, format_sales(metrics.top_group_value), delta_color="off")
for col, (region, pct) in zip((c5, c6, c7, c8), metrics.regional_share.items()):
    col.metric(f"{region} Share", format_percent(pct), format_sales(regions[region]), delta_color="off")

if filtered.empty:
    st.warning("No games match the selected filters.")

st.divider()

# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------
charts = {
    "Sales Trend Over Years": (
        build_trend_figure(trend),
        aggregate_to_frame(trend, "Year", "Sales"),
    ),
    "Sales by Platform": (
        build_bar_figure(platform_totals, "Platform", title="Sales by Platform"),
        aggregate_to_frame(platform_totals, "Platform", "Sales"),
    ),
    "Sales by Genre": (
        build_pie_figure(genre_totals, "Genre", title="Sales by Genre"),
        aggregate_to_frame(genre_totals, "Genre", "Sales"),
    ),
    "Regional Sales Distribution": (
        build_pie_figure(regions, "Region", title="Regional Sales Distribution"),
        aggregate_to_frame(regions, "Region", "Sales"),
    ),
    "Average Sales by Genre": (
        build_bar_figure(
            genre_averages, "Genre", "Average", title="Average Sales by Genre", color="#FFB67E"
        ),
        aggregate_to_frame(genre_averages, "Genre", "Average"),
    ),
    f"Top {TOP_N} Games by Global Sales": (
        build_top_games_figure(top_games, title=f"Top {TOP_N} Games by Global Sales"),
        top_games[["Name", "Platform", "Year", "Global_Sales"]],
    ),
}

names = list(charts)
st.plotly_chart(charts[names[0]][0], use_container_width=True)

left, right = st.columns(2)
with left:
    st.plotly_chart(charts[names[1]][0], use_container_width=True)
    st.plotly_chart(charts[names[3]][0], use_container_width=True)
with right:
    st.plotly_chart(charts[names[2]][0], use_container_width=True)
    st.plotly_chart(charts[names[4]][0], use_container_width=True)

st.plotly_chart(charts[names[5]][0], use_container_width=True)

# ---------------------------------------------------------------------------
# Chart details
# ---------------------------------------------------------------------------
with st.expander("🔍 Chart details", expanded=False):
    selected = st.selectbox("Chart", names)
    fig, data = charts[selected]
    fig.update_layout(height=600)
    st.plotly_chart(fig, use_container_width=True)
    st.dataframe(data, use_container_width=True, hide_index=True)

# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------
st.markdown("---")
with st.expander("ℹ️ About"):
    meta = get_metadata()
    st.markdown(f"**{meta['project']}** v{meta['version']}")
    st.write(meta["description"])
    st.caption(meta["data_credit"])
st.caption("Use the sidebar to switch to the Data Table page.")
