"""
Lightweight JSON-RPC surface for MCP-style tooling.

This keeps a minimal mapping of MCP tool names to the park operations. Tool
arguments arrive under their wire names (``parkCode``) and are renamed to the
Python keyword arguments before dispatch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from nps_mcp.nps_api import NpsApiError
from nps_mcp.tools import fetch_all_park_codes, fetch_park_details, fetch_parks_list

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Awaitable[Any]] | Callable[..., Any]


@dataclass(slots=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    callable: ToolCallable
    arguments: Dict[str, str] = field(default_factory=dict)

    def bind(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return {self.arguments.get(key, key): value for key, value in params.items()}


TOOL_REGISTRY: Dict[str, ToolDefinition] = {
    "park-details": ToolDefinition(
        name="park-details",
        description="Get details for a specific national park",
        input_schema={
            "type": "object",
            "properties": {
                "parkCode": {"type": "string", "description": "National Park lookup code"},
            },
            "required": ["parkCode"],
            "additionalProperties": False,
        },
        callable=fetch_park_details,
        arguments={"parkCode": "park_code"},
    ),
    "park-list": ToolDefinition(
        name="park-list",
        description="Get list of parks for a given state",
        input_schema={
            "type": "object",
            "properties": {
                "stateCode": {"type": "string", "description": "Two-letter state code"},
            },
            "required": ["stateCode"],
            "additionalProperties": False,
        },
        callable=fetch_parks_list,
        arguments={"stateCode": "state_code"},
    ),
    "park-codes": ToolDefinition(
        name="park-codes",
        description="List every national park with its park code, full name, and states",
        input_schema={
            "type": "object",
            "properties": {},
            "required": [],
            "additionalProperties": False,
        },
        callable=fetch_all_park_codes,
    ),
}


def list_tools() -> List[Dict[str, Any]]:
    """Return the MCP tool descriptors."""
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.input_schema,
        }
        for tool in TOOL_REGISTRY.values()
    ]


async def call_tool(tool_name: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """Dispatch to a tool by name; a failing call is reported in-band as an error dict."""
    params = params or {}
    tool = TOOL_REGISTRY.get(tool_name)
    if tool is None:
        return {"error": f"Unknown tool: {tool_name}"}

    schema = tool.input_schema
    if any(key not in schema["properties"] for key in params) or any(
        not isinstance(params.get(key), str) for key in schema["required"]
    ):
        return {"error": "Invalid parameters."}

    try:
        result = tool.callable(**tool.bind(params))
        if isinstance(result, Awaitable):
            return await result  # type: ignore[return-value]
        return result
    except NpsApiError:
        logger.exception("tool=%s failed fetching from the NPS API", tool_name)
        return {"error": "NPS API request failed."}
    except Exception:
        logger.exception("tool=%s raised an unexpected error", tool_name)
        return {"error": "Unexpected error while calling tool."}
