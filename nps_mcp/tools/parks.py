"""Park lookups built on the paginated ``parks`` endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from nps_mcp.config import PARKS_ENDPOINT
from nps_mcp.nps_api import NpsApiClient, default_client, fetch_all_pages

from .projections import project_listing_entries, project_park_summaries

logger = logging.getLogger(__name__)


async def fetch_all_park_codes(client: NpsApiClient = default_client) -> List[Dict[str, Any]]:
    """
    List every national park as ``{parkCode, fullName, states}``.

    The codes can be fed to ``fetch_park_details``; ``states`` is the record's
    comma-separated state list split into codes.

    Args:
        client: NPS API client (override for testing).

    Raises:
        PageUnavailableError: when any page of the listing could not be fetched.
    """
    records = await fetch_all_pages(client, PARKS_ENDPOINT)
    logger.debug("park codes aggregated count=%s", len(records))
    return project_park_summaries(records)


async def fetch_park_details(park_code: str, client: NpsApiClient = default_client) -> List[Dict[str, Any]]:
    """Return the full, unprojected records matching ``park_code``."""
    return await fetch_all_pages(client, PARKS_ENDPOINT, parkCode=park_code)


async def fetch_parks_list(state_code: str, client: NpsApiClient = default_client) -> List[Dict[str, Any]]:
    """Return ``{fullName, description, parkCode}`` for every park in ``state_code``."""
    records = await fetch_all_pages(client, PARKS_ENDPOINT, stateCode=state_code)
    return project_listing_entries(records)
