import os
import sys
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from nps_mcp import server  # noqa: E402
from nps_mcp.config import NpsConfig  # noqa: E402
from nps_mcp.metrics import default_metrics  # noqa: E402
from nps_mcp.nps_api import default_client  # noqa: E402
from nps_mcp.rate_limiter import PerKeyRateLimiter  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture(autouse=True)
def generous_rate_limiter(monkeypatch):
    monkeypatch.setattr(server, "rate_limiter", PerKeyRateLimiter(rate_per_sec=1000))


def make_parks(count: int, *, offset: int = 0) -> List[Dict[str, Any]]:
    return [
        {
            "parkCode": f"p{offset + i:03d}",
            "fullName": f"Park {offset + i}",
            "states": "CA,NV",
            "description": f"Description {offset + i}",
            "designation": "National Park",
        }
        for i in range(count)
    ]


class StubClient:
    """Stands in for NpsApiClient and serves ``total`` records, ``limit`` at a time."""

    def __init__(self, total: int, *, total_as_str: bool = False, fail_at: Optional[int] = None) -> None:
        self.config = NpsConfig(api_key="test-key")
        self.total = total
        self.total_as_str = total_as_str
        self.fail_at = fail_at
        self.calls: List[Dict[str, Any]] = []

    async def fetch_data(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        params = dict(params or {})
        self.calls.append({"endpoint": endpoint, **params})
        start, limit = params["start"], params["limit"]
        if self.fail_at is not None and start >= self.fail_at:
            return None
        count = max(0, min(limit, self.total - start))
        total: Any = str(self.total) if self.total_as_str else self.total
        return {"data": make_parks(count, offset=start), "total": total}


@pytest.fixture
def stub_client_factory() -> Callable[..., StubClient]:
    return StubClient


@pytest.fixture
def mock_nps(monkeypatch):
    """Route the shared default client through an ``httpx.MockTransport``."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        mock_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        monkeypatch.setattr(default_client, "_client", mock_client)
        monkeypatch.setattr(default_client, "_owns_client", False)

    return install
