"""Field-subset projections of raw NPS park records."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List


def project_park_summary(record: Dict[str, Any]) -> Dict[str, Any]:
    # States are split literally; "CA, NV" keeps the leading space on " NV".
    return {
        "parkCode": record.get("parkCode"),
        "fullName": record.get("fullName"),
        "states": record["states"].split(","),
    }


def project_listing_entry(record: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "fullName": record.get("fullName"),
        "description": record.get("description"),
        "parkCode": record.get("parkCode"),
    }


def project_park_summaries(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Project every record to ``{parkCode, fullName, states}``."""
    return [project_park_summary(record) for record in records]


def project_listing_entries(records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Project every record to ``{fullName, description, parkCode}``."""
    return [project_listing_entry(record) for record in records]
