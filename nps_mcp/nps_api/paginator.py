"""Offset pagination over NPS list endpoints."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from nps_mcp.config import PARKS_ENDPOINT, default_config
from nps_mcp.nps_api.client import NpsApiClient, PageUnavailableError, default_client

logger = logging.getLogger(__name__)


def build_page_params(start: int, limit: int, **filters: Optional[str]) -> Dict[str, Any]:
    """Return the query for one page; filters left as ``None`` are omitted entirely."""
    params: Dict[str, Any] = {"start": start, "limit": limit}
    for key, value in filters.items():
        if value is not None:
            params[key] = value
    return params


async def iter_pages(
    client: NpsApiClient = default_client,
    endpoint: str = PARKS_ENDPOINT,
    *,
    page_size: Optional[int] = None,
    **filters: Optional[str],
) -> AsyncIterator[List[Any]]:
    """
    Yield the ``data`` list of each page, in ascending ``start`` order.

    Pages are requested one at a time. After each page ``start`` advances by
    ``page_size`` and iteration stops once the reported ``total`` is less than
    the next ``start``. A total that is an exact multiple of the page size
    therefore costs one trailing request for an empty page.

    Raises:
        PageUnavailableError: when the client could not produce a page.
    """
    limit = page_size or client.config.page_size or default_config.page_size
    start = 0
    while True:
        params = build_page_params(start, limit, **filters)
        body = await client.fetch_data(endpoint, params)
        if body is None:
            raise PageUnavailableError(f"Page at start={start} of '{endpoint}' could not be fetched.")
        data = body["data"]
        total = int(body["total"])
        logger.debug("endpoint=%s start=%s fetched=%s total=%s", endpoint, start, len(data), total)
        yield data
        start += limit
        if total < start:
            break


async def fetch_all_pages(
    client: NpsApiClient = default_client,
    endpoint: str = PARKS_ENDPOINT,
    *,
    page_size: Optional[int] = None,
    **filters: Optional[str],
) -> List[Any]:
    """Concatenate every page of ``endpoint`` into one list; any failed page aborts the call."""
    records: List[Any] = []
    async for page in iter_pages(client, endpoint, page_size=page_size, **filters):
        records.extend(page)
    return records
