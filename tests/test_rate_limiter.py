import asyncio

import pytest

from nps_mcp.rate_limiter import PerKeyRateLimiter


@pytest.mark.asyncio
async def test_per_key_rate_limiter_allows_then_blocks():
    limiter = PerKeyRateLimiter(rate_per_sec=1, burst=1)
    assert await limiter.allow("park-list")
    assert not await limiter.allow("park-list")
    # Buckets are independent per tool.
    assert await limiter.allow("park-details")
    await asyncio.sleep(1.05)
    assert await limiter.allow("park-list")


@pytest.mark.asyncio
async def test_per_tool_override():
    limiter = PerKeyRateLimiter(rate_per_sec=10, burst=5, per_tool={"park-codes": 0.1})
    assert await limiter.allow("park-codes")
    assert not await limiter.allow("park-codes")
    assert await limiter.allow("park-list")
    assert limiter._buckets["park-codes"].rate == pytest.approx(0.1)
    assert limiter._buckets["park-list"].rate == pytest.approx(10)
    assert limiter._buckets["park-list"].capacity == 5
