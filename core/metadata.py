"""
Sales Insights Core Metadata
----------------------------
Houses global metadata for versioning and the dataset credit.
Shown in the dashboard "About" panel.
"""

__project__ = "VGSales Insights"
__version__ = "1.0.0"
__maintainer__ = "VGSales Insights contributors"

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "maintainer": __maintainer__,
    "description": (
        "Interactive analytics for video game sales: filter by year and "
        "platform, compare regions, genres and platforms, and browse every record."
    ),
    "data_credit": "Video game sales dataset (vgsales.csv, sourced from VGChartz).",
}


def get_metadata() -> dict:
    """Return current project metadata as a dict."""
    return dict(CORE_METADATA)
