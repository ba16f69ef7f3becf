"""HTTP client and pagination helpers for the NPS API."""

from .client import (
    FetchResult,
    NpsApiClient,
    NpsApiError,
    NpsHttpError,
    NpsUnreachableError,
    PageUnavailableError,
    default_client,
)
from .paginator import build_page_params, fetch_all_pages, iter_pages

__all__ = [
    "FetchResult",
    "NpsApiClient",
    "NpsApiError",
    "NpsHttpError",
    "NpsUnreachableError",
    "PageUnavailableError",
    "default_client",
    "build_page_params",
    "fetch_all_pages",
    "iter_pages",
]
