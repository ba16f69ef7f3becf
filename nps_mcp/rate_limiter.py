"""In-memory token-bucket throttling of tool calls (per-process, best-effort)."""

from __future__ import annotations

import asyncio
import time
from typing import Dict, Optional


class TokenBucket:
    def __init__(self, rate: float, capacity: float) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = capacity
        self.timestamp = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.timestamp) * self.rate)
        self.timestamp = now

    async def consume(self, amount: float = 1.0) -> bool:
        async with self._lock:
            self._refill()
            if self.tokens < amount:
                return False
            self.tokens -= amount
            return True


class PerKeyRateLimiter:
    """One bucket per tool name; ``per_tool`` overrides the shared rate."""

    def __init__(
        self,
        rate_per_sec: float,
        burst: Optional[float] = None,
        per_tool: Optional[Dict[str, float]] = None,
    ) -> None:
        self.rate = rate_per_sec
        self.burst = burst
        self.per_tool = dict(per_tool or {})
        self._buckets: Dict[str, TokenBucket] = {}
        self._lock = asyncio.Lock()

    def _new_bucket(self, key: str) -> TokenBucket:
        rate = self.per_tool.get(key, self.rate)
        capacity = self.burst if self.burst is not None else max(rate, 1.0)
        # Overridden tools burst no higher than their own rate.
        if key in self.per_tool:
            capacity = max(min(capacity, rate), 1.0)
        return TokenBucket(rate, capacity)

    async def allow(self, key: str) -> bool:
        async with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = self._buckets[key] = self._new_bucket(key)
        return await bucket.consume()
