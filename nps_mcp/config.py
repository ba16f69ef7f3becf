"""
Configuration helpers for the NPS MCP server.

This module centralizes base URL selection, API key loading, the optional HTTP
timeout, pagination size and server limits. No secrets are stored in the
repository; the API key is read from the environment, a local ``.env`` file or
a key file if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# Default connection settings
DEFAULT_BASE_URL = os.getenv("NPS_BASE_URL", "https://developer.nps.gov/api/v1")


def _load_timeout() -> Optional[float]:
    # Unset means no timeout; a hung request blocks until the caller gives up.
    raw_timeout = os.getenv("NPS_HTTP_TIMEOUT")
    if raw_timeout:
        try:
            return float(raw_timeout)
        except ValueError:
            return None
    return None


def _load_positive_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _load_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


DEFAULT_TIMEOUT = _load_timeout()


def _parse_tool_rate_limits(raw: Optional[str]) -> dict[str, float]:
    """Parse ``"park-codes=0.2,park-list=2"`` into per-tool rates; malformed entries are skipped."""
    limits: dict[str, float] = {}
    for entry in (raw or "").split(","):
        name, sep, value = entry.partition("=")
        if not sep or not name.strip():
            continue
        try:
            rate = float(value)
        except ValueError:
            continue
        if rate > 0:
            limits[name.strip()] = rate
    return limits


# API key handling
API_KEY_ENV_VAR = "NPS_API_KEY"
LEGACY_API_KEY_ENV_VAR = "API_KEY"
API_KEY_FILE_ENV_VAR = "NPS_API_KEY_FILE"
DEFAULT_API_KEY_FILE = "apikey.txt"
API_KEY_PLACEHOLDER = "Key Not Supplied"

# Pagination and server limits
PARKS_ENDPOINT = "parks"
DEFAULT_PAGE_SIZE = _load_positive_int("NPS_PAGE_SIZE", 50)
DEFAULT_RATE_LIMIT_QPS = _load_float("NPS_MCP_RATE_LIMIT_QPS", 5)
LOG_LEVEL = os.getenv("NPS_MCP_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("NPS_MCP_LOG_FORMAT", "json")  # json or plain
PER_TOOL_RATE_LIMITS = _parse_tool_rate_limits(os.getenv("NPS_MCP_TOOL_RATE_LIMITS"))


def load_api_key() -> str:
    """
    Load the NPS API key from environment or a local file.

    Returns:
        The API key string if available, otherwise the visible placeholder
        ``"Key Not Supplied"``. A missing key never blocks startup; the
        upstream API rejects the placeholder instead. The key is never logged.
    """
    for env_var in (API_KEY_ENV_VAR, LEGACY_API_KEY_ENV_VAR):
        env_key = os.getenv(env_var)
        if env_key and env_key.strip():
            return env_key.strip()

    key_path = os.getenv(API_KEY_FILE_ENV_VAR, DEFAULT_API_KEY_FILE)
    if key_path:
        path = Path(key_path)
        if path.is_file():
            return path.read_text(encoding="utf-8").strip() or API_KEY_PLACEHOLDER

    return API_KEY_PLACEHOLDER


@dataclass(frozen=True, slots=True)
class NpsConfig:
    """Runtime configuration for NPS API access, built once at process start."""

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    api_key: str = field(default_factory=load_api_key)
    page_size: int = DEFAULT_PAGE_SIZE
    rate_limit_qps: float = DEFAULT_RATE_LIMIT_QPS
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT
    per_tool_rate_limits: dict[str, float] = field(default_factory=lambda: dict(PER_TOOL_RATE_LIMITS))


default_config = NpsConfig()
