# tests/test_ui_app.py
"""
Headless runs of the Streamlit pages against the bundled dataset.
"""

import os

from streamlit.testing.v1 import AppTest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
APP = os.path.join(ROOT_DIR, "ui", "app.py")
TABLE_PAGE = os.path.join(ROOT_DIR, "ui", "pages", "data_table.py")


def _metric(at, label):
    return next(m for m in at.metric if m.label == label)


def test_dashboard_renders_summary_cards():
    at = AppTest.from_file(APP, default_timeout=60).run()
    assert not at.exception
    assert _metric(at, "Total Games").value == "21"
    assert _metric(at, "Top Platform").value == "Wii"
    assert _metric(at, "Total Sales").value.startswith("$")


def test_dashboard_year_filter():
    at = AppTest.from_file(APP, default_timeout=60).run()
    at.sidebar.selectbox[0].set_value(2006).run()
    assert not at.exception
    # Wii Sports, New Super Mario Bros., Wii Play
    assert _metric(at, "Total Games").value == "3"


def test_table_page_lists_records():
    at = AppTest.from_file(TABLE_PAGE, default_timeout=60).run()
    assert not at.exception
    assert any("Found **21** games" in md.value for md in at.markdown)


def _app_with_missing_dataset():
    import streamlit as st

    from core.ui_helpers import load_dataset

    records = load_dataset("/nonexistent/vgsales.csv")
    st.write(f"rows={len(records)}")


def test_load_failure_shows_error_and_empty_table():
    at = AppTest.from_function(_app_with_missing_dataset, default_timeout=60).run()
    assert not at.exception
    assert "Dataset unavailable" in at.error[0].value
    assert any("rows=0" in md.value for md in at.markdown)
