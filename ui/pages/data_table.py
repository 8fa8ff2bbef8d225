"""
VGSales Insights — Data Table
-----------------------------

Searchable, sortable, paginated view of the records selected by the
dashboard's year / platform filters, plus a record detail panel.
"""

import os
import sys

import streamlit as st

# --- Ensure the project root is in Python's import path ---
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from analytics.derivations import ALL, apply_filters
from analytics.table_view import (
    TABLE_COLUMNS,
    GameRecord,
    paginate,
    search_records,
    sort_records,
)
from core.ui_config import PAGE_SIZE
from core.ui_helpers import get_filter_criteria, load_dataset
from ui.components.formatting import format_sales

st.set_page_config(page_title="Data Table — Video Game Sales", layout="wide", page_icon="📋")

st.title("📋 Video Game Sales Data")

records = load_dataset()
criteria = get_filter_criteria()
active = [
    f"Year = {criteria.year}" if criteria.year != ALL else None,
    f"Platform = {criteria.platform}" if criteria.platform != ALL else None,
]
active = [a for a in active if a]
st.caption("Filters: " + (", ".join(active) if active else "none (set them on the dashboard)"))

# ---------------------------------------------------------------------------
# Search & sort controls
# ---------------------------------------------------------------------------
c1, c2, c3 = st.columns([3, 2, 1])
term = c1.text_input("Search any field...", value="")
sort_column = c2.selectbox("Sort by", [None] + TABLE_COLUMNS, format_func=lambda c: "—" if c is None else c)
direction = c3.radio("Order", ["asc", "desc"], format_func=lambda d: "↑" if d == "asc" else "↓", horizontal=True)

view = search_records(apply_filters(records, criteria), term)
view = sort_records(view, sort_column, direction)

st.markdown(f"Found **{len(view):,}** games")

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
total_pages = paginate(view, 1, PAGE_SIZE).total_pages
page_number = st.number_input("Page", min_value=1, max_value=total_pages, value=1, step=1)
page = paginate(view, page_number, PAGE_SIZE)

st.dataframe(
    page.rows[TABLE_COLUMNS].style.format(
        {c: "{:.2f}" for c in TABLE_COLUMNS if c.endswith("_Sales")},
        na_rep="",
    ),
    use_container_width=True,
    hide_index=True,
)
st.caption(f"Page {page.page} of {page.total_pages}")

# ---------------------------------------------------------------------------
# Record detail
# ---------------------------------------------------------------------------
if not page.rows.empty:
    st.subheader("🎮 Game Overview")
    labels = {
        idx: f"{row['Name']} ({row['Platform']})"
        for idx, row in page.rows.iterrows()
    }
    chosen = st.selectbox("Select a game", list(labels), format_func=lambda i: labels[i])
    game = GameRecord.from_row(page.rows.loc[chosen])

    d1, d2 = st.columns(2)
    with d1:
        st.markdown(f"**{game.Name or 'Unknown'}**")
        st.write(f"Platform: {game.Platform or 'N/A'}")
        st.write(f"Year: {game.Year if game.Year is not None else 'N/A'}")
        st.write(f"Genre: {game.Genre or 'N/A'}")
        st.write(f"Publisher: {game.Publisher or 'N/A'}")
    with d2:
        st.write(f"North America: {format_sales(game.NA_Sales)}")
        st.write(f"Europe: {format_sales(game.EU_Sales)}")
        st.write(f"Japan: {format_sales(game.JP_Sales)}")
        st.write(f"Other: {format_sales(game.Other_Sales)}")
        st.write(f"Global: {format_sales(game.Global_Sales)}")
