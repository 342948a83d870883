"""Tests for the Quartzy request executor."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from quartzy_mcp.client import QuartzyClient
from quartzy_mcp.config import QuartzyConfig
from quartzy_mcp.errors import ConfigurationError, UpstreamError

from .conftest import BASE_URL, TOKEN


def test_get_sends_auth_headers_and_returns_json(client, fake_quartzy):
    fake_quartzy.respond(200, {"id": "lab-1"})

    result = asyncio.run(client.execute("/labs/lab-1"))

    assert result == {"id": "lab-1"}
    request = fake_quartzy.last
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}/labs/lab-1"
    assert request.headers["Access-Token"] == TOKEN
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b""


def test_path_query_string_is_kept(client, fake_quartzy):
    asyncio.run(client.execute("/labs?organization_id=abc&page=2"))

    assert fake_quartzy.last_path == "/labs?organization_id=abc&page=2"


@pytest.mark.parametrize("method", ["POST", "PUT"])
def test_body_sent_for_mutating_methods(client, fake_quartzy, method):
    asyncio.run(client.execute("/webhooks/w-1", method, {"is_enabled": True}))

    assert fake_quartzy.last.method == method
    assert fake_quartzy.last_json() == {"is_enabled": True}


def test_body_ignored_for_get(client, fake_quartzy):
    asyncio.run(client.execute("/labs", "GET", {"ignored": True}))

    assert fake_quartzy.last.content == b""


def test_no_content_returns_none(client, fake_quartzy):
    fake_quartzy.respond(204)

    assert asyncio.run(client.execute("/webhooks/w-1", "PUT", {"is_enabled": False})) is None


def test_zero_content_length_returns_none(client, fake_quartzy):
    fake_quartzy.handler = lambda request: httpx.Response(200, headers={"Content-Length": "0"})

    assert asyncio.run(client.execute("/healthz")) is None


def test_non_2xx_raises_upstream_error_with_body(client, fake_quartzy):
    fake_quartzy.respond(404, text='{"error":"not found"}')

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.execute("/labs/missing"))

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == '{"error":"not found"}'
    assert str(excinfo.value) == 'HTTP 404: {"error":"not found"}'


def test_missing_token_fails_before_any_request(fake_quartzy):
    client = QuartzyClient(
        QuartzyConfig(access_token="", base_url=BASE_URL),
        transport=httpx.MockTransport(fake_quartzy),
    )

    with pytest.raises(ConfigurationError, match="QUARTZY_ACCESS_TOKEN environment variable is required"):
        asyncio.run(client.execute("/user"))

    assert fake_quartzy.requests == []


def test_transport_failure_raises_upstream_error(config):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = QuartzyClient(config, transport=httpx.MockTransport(refuse))

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.execute("/healthz"))

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)
    assert f"{BASE_URL}/healthz" in str(excinfo.value)


def test_exactly_one_attempt_per_call(client, fake_quartzy):
    fake_quartzy.respond(503, text="unavailable")

    with pytest.raises(UpstreamError):
        asyncio.run(client.execute("/healthz"))

    assert len(fake_quartzy.requests) == 1
