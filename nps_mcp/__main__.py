"""Run the gateway with ``python -m nps_mcp``."""

from __future__ import annotations

import os


def main() -> None:
    import uvicorn

    uvicorn.run(
        "nps_mcp.server:app",
        host=os.getenv("NPS_MCP_HOST", "127.0.0.1"),
        port=int(os.getenv("NPS_MCP_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
