"""FastAPI application wiring the NPS MCP tools and prompts to HTTP routes."""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from nps_mcp import mcp, prompts
from nps_mcp.config import default_config
from nps_mcp.metrics import default_metrics
from nps_mcp.nps_api import default_client
from nps_mcp.rate_limiter import PerKeyRateLimiter

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in ("tool", "request_id", "error"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(log_level: str, log_format: str) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    if log_format.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler])
    else:
        logging.basicConfig(level=level)


configure_logging(default_config.log_level, default_config.log_format)
rate_limiter = PerKeyRateLimiter(
    rate_per_sec=default_config.rate_limit_qps,
    per_tool=default_config.per_tool_rate_limits,
)
HEALTH_STATUS = {"status": "ok"}
APP_VERSION = "1.0.0"
MCP_SERVER_NAME = "nps"
MCP_SERVER_VERSION = APP_VERSION


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await default_client.aclose()


app = FastAPI(
    title="NPS MCP Server",
    description="National Park Service tool surface for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    default_metrics.record_duration(request_id, (time.time() - start) * 1000)
    response.headers["X-Request-ID"] = request_id
    return response


def _log_tool_result(tool_name: str, result: Any, request_id: Optional[str] = None) -> None:
    if isinstance(result, dict) and result.get("error"):
        logger.warning(
            "tool=%s outcome=error error=%s request_id=%s",
            tool_name,
            result.get("error"),
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": result.get("error")},
        )
        default_metrics.record_tool(tool_name, success=False)
    else:
        logger.info(
            "tool=%s outcome=success request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id},
        )
        default_metrics.record_tool(tool_name, success=True)


async def _enforce_rate_limit(tool_name: str, *, rpc: bool = False, rpc_id: Any = None) -> Optional[JSONResponse]:
    allowed = await rate_limiter.allow(tool_name)
    if not allowed:
        logger.warning("tool=%s outcome=rate_limited", tool_name)
        default_metrics.incr_rate_limited()
        content: Dict[str, Any] = {"jsonrpc": "2.0", "error": {"code": 429, "message": "Rate limit exceeded"}}
        if rpc:
            content["id"] = rpc_id
        return JSONResponse(status_code=429, content=content)
    return None


async def _run_tool_route(request: Request, tool_name: str, params: Dict[str, Any]) -> JSONResponse:
    limited = await _enforce_rate_limit(tool_name)
    if limited:
        return limited
    result = await mcp.call_tool(tool_name, params)
    _log_tool_result(tool_name, result, getattr(request.state, "request_id", None))
    status_code = 502 if isinstance(result, dict) and "error" in result else 200
    return JSONResponse(status_code=status_code, content=result)


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.get("/tools/park_details/{park_code}")
async def park_details(park_code: str, request: Request) -> JSONResponse:
    """Proxy for the park-details tool."""
    return await _run_tool_route(request, "park-details", {"parkCode": park_code})


@app.get("/tools/park_list/{state_code}")
async def park_list(state_code: str, request: Request) -> JSONResponse:
    """Proxy for the park-list tool."""
    return await _run_tool_route(request, "park-list", {"stateCode": state_code})


@app.get("/tools/park_codes")
async def park_codes(request: Request) -> JSONResponse:
    """Proxy for the park-codes tool."""
    return await _run_tool_route(request, "park-codes", {})


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    Minimal JSON-RPC gateway for MCP integrations.

    Supported methods:
      - initialize
      - list_tools / tools/list
      - call_tool / tools/call
      - prompts/list
      - prompts/get
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(
        payload: Dict[str, Any],
        status_code: int = 200,
        *,
        outcome: str,
        method_label: Optional[str] = None,
        tool_label: Optional[str] = None,
        error_code: Optional[int] = None,
    ) -> JSONResponse:
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id"),
            status_code,
            (time.time() - start_time) * 1000,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    def _error(rpc_id: Any, code: int, message: str, *, status_code: int = 200, method_label: Optional[str] = None, tool_label: Optional[str] = None) -> JSONResponse:
        return _respond(
            _jsonrpc_error_payload(rpc_id, code, message),
            status_code=status_code,
            outcome="error",
            method_label=method_label,
            tool_label=tool_label,
            error_code=code,
        )

    try:
        body = await request.json()
    except ValueError:
        return _error(None, -32700, "Parse error", status_code=400)

    if not isinstance(body, dict):
        return _error(None, -32600, "Invalid request", status_code=400)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return _error(rpc_id, -32602, "Invalid params", method_label=method)

    if not method:
        return _error(rpc_id, -32600, "Invalid request")

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {
                "tools": {"listChanged": False},
                "prompts": {"listChanged": False},
            },
        }
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method)

    if method in ("list_tools", "tools/list"):
        limited = await _enforce_rate_limit("list_tools", rpc=True, rpc_id=rpc_id)
        if limited:
            return limited
        return _respond(
            _jsonrpc_success_payload(rpc_id, {"tools": mcp.list_tools()}),
            outcome="success",
            method_label=method,
        )

    if method in ("call_tool", "tools/call"):
        tool_name = params.get("tool") or params.get("name")
        tool_params = params.get("params")
        if tool_params is None:
            tool_params = params.get("arguments") or {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        if not isinstance(tool_params, dict):
            return _error(rpc_id, -32602, "Invalid params", method_label=method, tool_label=tool_name)
        if tool_name not in mcp.TOOL_REGISTRY:
            # Unknown names stay out of rate limiter buckets and metrics keys.
            return _respond(
                _jsonrpc_success_payload(rpc_id, _wrap_tool_result({"error": f"Unknown tool: {tool_name}"})),
                outcome="error",
                method_label=method,
                tool_label=None,
            )
        limited = await _enforce_rate_limit(tool_name, rpc=True, rpc_id=rpc_id)
        if limited:
            return limited
        result = await mcp.call_tool(tool_name, tool_params)
        _log_tool_result(tool_name, result, request_id)
        return _respond(
            _jsonrpc_success_payload(rpc_id, _wrap_tool_result(result)),
            outcome="success",
            method_label=method,
            tool_label=tool_name,
        )

    if method == "prompts/list":
        return _respond(
            _jsonrpc_success_payload(rpc_id, {"prompts": prompts.list_prompts()}),
            outcome="success",
            method_label=method,
        )

    if method == "prompts/get":
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(name, str) or not isinstance(arguments, dict):
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        try:
            rendered = prompts.get_prompt(name, arguments)
        except prompts.PromptError as exc:
            return _error(rpc_id, -32602, str(exc), method_label=method)
        return _respond(_jsonrpc_success_payload(rpc_id, rendered), outcome="success", method_label=method)

    if method in ("notifications/initialized", "initialized"):
        # Notifications carry no JSON-RPC response body.
        logger.debug("mcp initialized notification received", extra={"request_id": request_id})
        return Response(status_code=204)

    return _error(rpc_id, -32601, "Method not found", method_label=method)


# Run with: uvicorn nps_mcp.server:app --reload


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


def _wrap_tool_result(result: Any) -> Dict[str, Any]:
    """
    Shape tool outputs into a single MCP text content item.

    Successful results are JSON-serialized into the text; tool errors are
    returned in-band with the ``isError`` flag.
    """
    if isinstance(result, dict) and "error" in result:
        return {
            "content": [{"type": "text", "text": str(result.get("error") or "Error")}],
            "isError": True,
        }
    return {"content": [{"type": "text", "text": json.dumps(result, ensure_ascii=False)}]}
