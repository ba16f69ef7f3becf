"""LLM-facing tool implementations."""

from .parks import fetch_all_park_codes, fetch_park_details, fetch_parks_list
from .projections import (
    project_listing_entries,
    project_listing_entry,
    project_park_summaries,
    project_park_summary,
)

__all__ = [
    "fetch_all_park_codes",
    "fetch_park_details",
    "fetch_parks_list",
    "project_listing_entries",
    "project_listing_entry",
    "project_park_summaries",
    "project_park_summary",
]
