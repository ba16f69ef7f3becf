"""
Thin HTTP client for the National Park Service API.

Every NPS endpoint used here is a GET. ``fetch`` reports failures as an explicit
``FetchResult``; ``fetch_data`` keeps the swallow-and-log contract the park
operations are built on and hands back ``None`` when anything goes wrong.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from nps_mcp.config import NpsConfig, default_config
from nps_mcp.metrics import default_metrics

logger = logging.getLogger(__name__)


class NpsApiError(Exception):
    """Base exception for NPS API errors."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NpsHttpError(NpsApiError):
    """Raised when the API answers with a non-2xx status."""


class NpsUnreachableError(NpsApiError):
    """Raised when the API cannot be reached."""


class PageUnavailableError(NpsApiError):
    """Raised when a page in a paginated sequence could not be fetched."""


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a single fetch: either a decoded body or the error that stopped it."""

    value: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


def _normalize_url(url: str) -> str:
    return url.rstrip("/")


def _stringify_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    if not params:
        return {}
    return {key: str(value) for key, value in params.items()}


class NpsApiClient:
    """Async client for the NPS API surface."""

    def __init__(
        self,
        config: NpsConfig | None = None,
        *,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_config
        self._client: Optional[httpx.AsyncClient] = async_client
        self._owns_client = async_client is None

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Api-Key": self.config.api_key,
        }

    def build_url(self, endpoint: str) -> str:
        return f"{_normalize_url(self.config.base_url)}/{endpoint.lstrip('/')}"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(self, endpoint: str, params: Optional[Mapping[str, Any]]) -> Any:
        client = await self._get_client()
        url = self.build_url(endpoint)
        try:
            response = await client.get(url, params=_stringify_params(params), headers=self.headers)
        except httpx.RequestError as exc:
            raise NpsUnreachableError(f"NPS API unreachable: {exc}") from exc
        if not response.is_success:
            raise NpsHttpError(
                f"HTTP error! Status: {response.status_code}", status_code=response.status_code
            )
        return response.json()

    async def fetch(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> FetchResult:
        """
        Perform a GET against ``{base_url}/{endpoint}``.

        Args:
            endpoint: Endpoint name relative to the base URL, e.g. ``"parks"``.
            params: Query parameters; values are sent in their plain string form.

        Returns:
            A ``FetchResult`` holding the decoded JSON body, or the error when the
            request failed, returned a non-2xx status or carried an undecodable body.
        """
        try:
            return FetchResult(value=await self._request(endpoint, params))
        except (NpsApiError, httpx.HTTPError, ValueError) as exc:
            return FetchResult(error=exc)

    async def fetch_data(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch ``endpoint`` and return the decoded body, or ``None`` after logging a failure."""
        result = await self.fetch(endpoint, params)
        default_metrics.record_upstream(endpoint, success=result.ok)
        if not result.ok:
            logger.error("Error fetching data: endpoint=%s error=%s", endpoint, result.error)
            return None
        return result.value


default_client = NpsApiClient()
