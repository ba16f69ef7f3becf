import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_parks
from nps_mcp import server as server_mod
from nps_mcp.server import _log_tool_result, _wrap_tool_result, app


@pytest.fixture
def client():
    return TestClient(app)


def test_health_route(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers.get("X-Request-ID")


def test_metrics_counts_requests(client):
    client.get("/health")
    data = client.get("/metrics").json()
    assert data["requests"] >= 2


def test_park_list_route(client, mock_nps):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["stateCode"] == "UT"
        return httpx.Response(200, json={"data": make_parks(5), "total": "5"})

    mock_nps(handler)
    resp = client.get("/tools/park_list/UT")
    assert resp.status_code == 200
    assert [entry["parkCode"] for entry in resp.json()] == [f"p{i:03d}" for i in range(5)]
    metrics = client.get("/metrics").json()
    assert metrics["tool_success"] == {"park-list": 1}
    assert metrics["upstream_fetches"] == {"parks:ok": 1}


def test_park_codes_route(client, mock_nps):
    mock_nps(lambda request: httpx.Response(200, json={"data": make_parks(2), "total": 2}))
    resp = client.get("/tools/park_codes")
    assert resp.json()[1] == {"parkCode": "p001", "fullName": "Park 1", "states": ["CA", "NV"]}


def test_park_details_route_upstream_failure(client, mock_nps):
    mock_nps(lambda request: httpx.Response(503))
    resp = client.get("/tools/park_details/yose")
    assert resp.status_code == 502
    assert resp.json() == {"error": "NPS API request failed."}
    assert client.get("/metrics").json()["tool_error"] == {"park-details": 1}


def test_rate_limit_response(monkeypatch, client):
    class DenyLimiter:
        async def allow(self, _tool):
            return False

    monkeypatch.setattr(server_mod, "rate_limiter", DenyLimiter())
    resp = client.get("/tools/park_list/CA")
    assert resp.status_code == 429
    assert resp.json()["error"]["message"] == "Rate limit exceeded"
    assert client.get("/metrics").json()["rate_limited"] == 1


def test_rate_limit_mcp_list_tools(monkeypatch, client):
    async def deny(*_args, **_kwargs):
        return False

    monkeypatch.setattr(server_mod.rate_limiter, "allow", deny)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": "list_tools"})
    assert resp.status_code == 429


def test_wrap_tool_result_shapes():
    assert _wrap_tool_result([{"a": 1}]) == {"content": [{"type": "text", "text": '[{"a": 1}]'}]}
    wrapped = _wrap_tool_result({"error": "nope"})
    assert wrapped["isError"] is True
    assert wrapped["content"][0]["text"] == "nope"


def test_log_tool_result_handles_non_dict():
    _log_tool_result("dummy", [{"ok": True}])
    _log_tool_result("dummy", {"error": "fail"})
    _log_tool_result("dummy", None)
