"""Shared fixtures: a fake Quartzy upstream built on httpx.MockTransport."""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from quartzy_mcp.client import QuartzyClient
from quartzy_mcp.config import QuartzyConfig
from quartzy_mcp.dispatcher import ToolDispatcher

BASE_URL = "https://quartzy.test"
TOKEN = "test-token"


class FakeQuartzy:
    """Records every request and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"ok": True}
        self.text: Optional[str] = None
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def respond(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        if self.status_code == 204:
            return httpx.Response(204)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    @property
    def last_path(self) -> str:
        return self.last.url.raw_path.decode()

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def fake_quartzy() -> FakeQuartzy:
    return FakeQuartzy()


@pytest.fixture
def config() -> QuartzyConfig:
    return QuartzyConfig(access_token=TOKEN, base_url=BASE_URL)


@pytest.fixture
def client(config: QuartzyConfig, fake_quartzy: FakeQuartzy) -> QuartzyClient:
    return QuartzyClient(config, transport=httpx.MockTransport(fake_quartzy))


@pytest.fixture
def dispatcher(client: QuartzyClient) -> ToolDispatcher:
    return ToolDispatcher(client)
