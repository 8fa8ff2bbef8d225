"""
analytics/record_source.py
--------------------------

Record Source for the sales dashboard.

Acquires raw CSV text (local path, http(s) URL, or an uploaded buffer)
and parses it into a typed pandas DataFrame with one row per game.

Contract
--------
- Header row defines the fields; columns are looked up by name, order is free.
- Numeric cells are coerced with pd.to_numeric(errors="coerce"): a bad cell
  becomes absent (NaN / <NA>), it never aborts the parse.
- Retrieval failures raise LoadError, untabular text raises ParseError.

Used by core.ui_helpers.load_dataset.
"""

from __future__ import annotations

import io
import os
from typing import Any, IO, List, Union

import numpy as np
import pandas as pd
import requests

from core.ui_config import HTTP_TIMEOUT

# --------------------------------------------------------------------------- #
# Schema
# --------------------------------------------------------------------------- #

TEXT_COLUMNS: List[str] = ["Name", "Platform", "Genre", "Publisher"]
REGION_COLUMNS: List[str] = ["NA_Sales", "EU_Sales", "JP_Sales", "Other_Sales"]
SALES_COLUMNS: List[str] = REGION_COLUMNS + ["Global_Sales"]
INTEGER_COLUMNS: List[str] = ["Rank", "Year"]

CANONICAL_COLUMNS: List[str] = [
    "Rank",
    "Name",
    "Platform",
    "Year",
    "Genre",
    "Publisher",
    *SALES_COLUMNS,
]

# Alternate header names seen in other exports of the dataset
COLUMN_ALIASES = {"Year_of_Release": "Year"}

Source = Union[str, "os.PathLike[str]", IO[bytes], IO[str]]


# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #

class RecordSourceError(RuntimeError):
    """Base class for dataset acquisition failures."""


class LoadError(RecordSourceError):
    """The raw text could not be retrieved (file / network failure)."""


class ParseError(RecordSourceError):
    """The retrieved text is not a usable CSV table."""


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #

def empty_records() -> pd.DataFrame:
    """Zero-row frame with the canonical schema (empty dashboard state)."""
    return _coerce_types(pd.DataFrame({c: pd.Series(dtype=object) for c in CANONICAL_COLUMNS}))


def _is_url(source: Any) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _clean_text(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        # Blank cells carry no information
        return value if value else np.nan
    return value


def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    for col in TEXT_COLUMNS:
        df[col] = df[col].map(_clean_text).astype(object)

    for col in INTEGER_COLUMNS:
        numeric = pd.to_numeric(df[col], errors="coerce")
        # Non-integral years / ranks are treated as unreadable
        numeric = numeric.where(numeric.isna() | (numeric % 1 == 0))
        df[col] = numeric.astype("Int64")

    for col in SALES_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    return df


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #

def fetch_text(source: Source, debug: bool = True) -> str:
    """
    Retrieve raw CSV text from a path, an http(s) URL, or a file-like object.

    Raises
    ------
    LoadError
        When the text cannot be retrieved or decoded.
    """
    if source is None or (isinstance(source, str) and not source.strip()):
        raise LoadError("No data source given.")

    try:
        if _is_url(source):
            if debug:
                print(f"[RecordSource] → Fetching {source}")
            resp = requests.get(source, timeout=HTTP_TIMEOUT)
            resp.raise_for_status()
            return resp.text

        if hasattr(source, "read"):
            if debug:
                print(f"[RecordSource] → Reading uploaded buffer {getattr(source, 'name', '<buffer>')}")
            if hasattr(source, "seek"):
                source.seek(0)
            raw = source.read()
            return raw.decode("utf-8-sig") if isinstance(raw, bytes) else raw

        path = os.fspath(source)
        if debug:
            print(f"[RecordSource] → Reading file {path}")
        with open(path, "r", encoding="utf-8-sig") as fh:
            return fh.read()

    except requests.exceptions.RequestException as e:
        raise LoadError(f"Could not fetch {source}: {e.__class__.__name__}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {source}: {e}") from e


def parse_records(text: str, debug: bool = True) -> pd.DataFrame:
    """
    Parse CSV text into the canonical record table.

    Parameters
    ----------
    text : str
        Delimited text with a header row.

    Returns
    -------
    pd.DataFrame
        One row per game, columns in CANONICAL_COLUMNS order.

    Raises
    ------
    ParseError
        Empty text, no header row, or a header sharing no column with the
        expected schema.
    """
    if text is None or not str(text).strip():
        raise ParseError("Dataset is empty.")

    text = str(text).lstrip("\ufeff")
    try:
        # index_col=False: a trailing delimiter on every row must not turn the
        # first column into the index; the extra trailing field is dropped.
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            index_col=False,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise ParseError(f"Dataset is not a readable CSV table: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]
    df = df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if v not in df.columns})

    known = [c for c in df.columns if c in CANONICAL_COLUMNS]
    if not known:
        raise ParseError(
            f"Header row has none of the expected fields ({', '.join(CANONICAL_COLUMNS)})."
        )

    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = float("nan")

    records = _coerce_types(df[CANONICAL_COLUMNS].copy()).reset_index(drop=True)

    if debug:
        missing = [c for c in CANONICAL_COLUMNS if c not in known]
        print(f"[RecordSource] ✅ Parsed {len(records)} records")
        if missing:
            print(f"[RecordSource] ⚠️ Missing columns treated as absent: {missing}")

    return records


def load_records(source: Source, debug: bool = True) -> pd.DataFrame:
    """Fetch then parse; the one-shot load used at startup and on reload."""
    return parse_records(fetch_text(source, debug=debug), debug=debug)
