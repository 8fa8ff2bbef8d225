"""
core/ui_config.py
-----------------
Central configuration hub for the dashboard pages.

- Reads the default dataset location and UI knobs from environment variables.
- Provides global constants shared by the Record Source and Streamlit pages.
"""

from __future__ import annotations
import os

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

ROOT_DIR: str = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DEFAULT_DATA_SOURCE: str = os.path.join(ROOT_DIR, "data", "vgsales.csv")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    """Read a positive integer setting; fall back to the default when unset or invalid."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"[Config] ⚠️ {name}={raw!r} is not an integer; using {default}")
        return default
    return value if value >= minimum else default


# ---------------------------------------------------------------------------
# Dataset & UI configuration
# ---------------------------------------------------------------------------

# Path or http(s) URL of the dataset loaded at startup
DATA_SOURCE: str = os.getenv("VGSALES_DATA_SOURCE", DEFAULT_DATA_SOURCE)

CACHE_TTL: int = _env_int("VGSALES_CACHE_TTL", 600)  # seconds
PAGE_SIZE: int = _env_int("VGSALES_PAGE_SIZE", 25)
TOP_N: int = _env_int("VGSALES_TOP_N", 10)
HTTP_TIMEOUT: int = _env_int("VGSALES_HTTP_TIMEOUT", 10)  # seconds
