"""
core/ui_helpers.py
------------------
Shared dataset loading helpers for all Streamlit pages.
Ensures consistent error handling and caching.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import streamlit as st

from analytics.derivations import FilterCriteria
from analytics.record_source import RecordSourceError, empty_records, load_records, parse_records
from core.ui_config import CACHE_TTL, DATA_SOURCE

FILTER_STATE_KEY = "filter_criteria"
UPLOAD_STATE_KEY = "uploaded_csv"


@st.cache_data(ttl=CACHE_TTL, show_spinner="Loading sales data…")
def _cached_load(source: str) -> pd.DataFrame:
    return load_records(source)


@st.cache_data(ttl=CACHE_TTL, show_spinner="Parsing uploaded file…")
def _cached_parse(text: str) -> pd.DataFrame:
    return parse_records(text)


def load_dataset(source: Optional[str] = None) -> pd.DataFrame:
    """
    Unified safe loader for the record table.

    Uses the uploaded CSV stored in session state when present, else the
    given source (default: DATA_SOURCE). On LoadError / ParseError shows a
    visible error and returns the empty table instead of raising.
    """
    uploaded: Optional[str] = st.session_state.get(UPLOAD_STATE_KEY)
    try:
        if uploaded is not None:
            return _cached_parse(uploaded)
        return _cached_load(source or DATA_SOURCE)
    except RecordSourceError as e:
        st.error(f"Dataset unavailable: {e}")
        return empty_records()


def reload_dataset() -> None:
    """Drop cached tables so the next load starts from scratch (last load wins)."""
    _cached_load.clear()
    _cached_parse.clear()


def get_filter_criteria() -> FilterCriteria:
    """Current filter pair for this session (shared by every page)."""
    criteria = st.session_state.get(FILTER_STATE_KEY)
    if not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria()
        st.session_state[FILTER_STATE_KEY] = criteria
    return criteria


def set_filter_criteria(year: Any, platform: Any) -> FilterCriteria:
    criteria = FilterCriteria(year=year, platform=platform)
    st.session_state[FILTER_STATE_KEY] = criteria
    return criteria
