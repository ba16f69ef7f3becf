"""Minimal sanity checks against the live NPS API."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from nps_mcp.nps_api import default_client  # noqa: E402
from nps_mcp.tools import fetch_all_park_codes, fetch_park_details, fetch_parks_list  # noqa: E402

SAMPLE_PARK_CODE = os.getenv("NPS_SAMPLE_PARK_CODE", "yose")
SAMPLE_STATE_CODE = os.getenv("NPS_SAMPLE_STATE_CODE", "CA")
# Opt-in to the full park code sweep (roughly ten requests).
RUN_ALL_CODES = os.getenv("RUN_ALL_CODES_SANITY", "false").lower() in {"1", "true", "yes"}


async def main() -> None:
    try:
        details = await fetch_park_details(SAMPLE_PARK_CODE)
        print("Park details:", [record.get("fullName") for record in details])

        listing = await fetch_parks_list(SAMPLE_STATE_CODE)
        print(f"Parks in {SAMPLE_STATE_CODE}:", len(listing))
        for entry in listing[:5]:
            print("  ", entry["parkCode"], entry["fullName"])

        if RUN_ALL_CODES:
            codes = await fetch_all_park_codes()
            print("All park codes:", len(codes))
    finally:
        await default_client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
