"""In-process counters for the gateway and upstream fetches (single process only)."""

from __future__ import annotations

from collections import Counter, deque
from threading import Lock
from typing import Deque, Dict, Tuple

RECENT_DURATIONS = 100


class MetricsRecorder:
    def __init__(self, recent: int = RECENT_DURATIONS) -> None:
        self._lock = Lock()
        self._requests = 0
        self._rate_limited = 0
        self._durations: Deque[Tuple[str, float]] = deque(maxlen=recent)
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._upstream: Counter[str] = Counter()

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        with self._lock:
            self._durations.append((request_id, duration_ms))

    def incr_rate_limited(self) -> None:
        with self._lock:
            self._rate_limited += 1

    def record_tool(self, tool: str, *, success: bool) -> None:
        with self._lock:
            (self._tool_success if success else self._tool_error)[tool] += 1

    def record_upstream(self, endpoint: str, *, success: bool) -> None:
        with self._lock:
            self._upstream[f"{endpoint}:{'ok' if success else 'failed'}"] += 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "rate_limited": self._rate_limited,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "upstream_fetches": dict(self._upstream),
                "recent_request_durations_ms": dict(self._durations),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._rate_limited = 0
            self._durations.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._upstream.clear()


default_metrics = MetricsRecorder()
