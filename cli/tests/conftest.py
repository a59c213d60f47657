from __future__ import annotations

import httpx
import pytest

from gumroad_client import ClientConfig, GumroadClient
from gumroad_client.transport import HttpxTransport

TOKEN = "test-token"
BASE_PATH = "https://api.gumroad.test/v2"


class FakeGumroad:
    """Records requests and answers from a queue of (status, json) pairs."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[tuple[int, object]] = []

    def reply(self, status: int = 200, body: object = None) -> "FakeGumroad":
        self.responses.append((status, body if body is not None else {"success": True}))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.pop(0) if self.responses else (200, {"success": True})
        if isinstance(body, (bytes, str)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_api() -> FakeGumroad:
    return FakeGumroad()


@pytest.fixture
def make_client():
    def _make(handler, *, token: str = TOKEN, base_path: str = BASE_PATH) -> GumroadClient:
        cfg = ClientConfig(access_token=token, base_path=base_path)
        transport = HttpxTransport(cfg, http_transport=httpx.MockTransport(handler))
        return GumroadClient.from_config(cfg, transport=transport)

    return _make
