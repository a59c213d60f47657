from __future__ import annotations

import asyncio

import httpx
import pytest

from gumroad_client import ApiError, GumroadClient, GumroadError, NetworkError, RequestOptions

from conftest import BASE_PATH, TOKEN


@pytest.mark.asyncio
async def test_request_shape_on_the_wire(make_client, fake_api) -> None:
    fake_api.reply(200, {"success": True, "user": {"name": "Sam"}})
    async with make_client(fake_api) as client:
        user = await client.get_user()

    assert user == {"name": "Sam"}
    req = fake_api.last
    assert req.method == "GET"
    assert str(req.url).startswith(BASE_PATH + "/user?")
    assert req.url.params["access_token"] == TOKEN
    assert req.headers["Content-type"] == "application/json"
    assert req.headers["User-Agent"].startswith("gumroad-client/")


@pytest.mark.asyncio
async def test_timeout_becomes_network_error(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_client(handler) as client:
        with pytest.raises(GumroadError) as exc:
            await client.get_products()

    err = exc.value
    assert isinstance(err, NetworkError)
    assert "timed out" in err.message
    assert err.status_code is None
    assert isinstance(err.__cause__, httpx.TimeoutException)


@pytest.mark.asyncio
async def test_connect_error_becomes_network_error(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(NetworkError) as exc:
            await client.get_user()

    assert exc.value.message == "connection refused"


@pytest.mark.asyncio
async def test_remote_rejection_on_200(make_client, fake_api) -> None:
    fake_api.reply(200, {"success": False, "message": "Invalid token"})
    async with make_client(fake_api) as client:
        with pytest.raises(ApiError) as exc:
            await client.get_user()

    assert exc.value.message == "Invalid token"


@pytest.mark.asyncio
async def test_malformed_json_becomes_network_error(make_client, fake_api) -> None:
    fake_api.reply(200, b"not json")
    async with make_client(fake_api) as client:
        with pytest.raises(NetworkError):
            await client.get_user()


@pytest.mark.asyncio
async def test_per_call_timeout_reaches_httpx(make_client, fake_api) -> None:
    async with make_client(fake_api) as client:
        await client.request("/user", options=RequestOptions(timeout=1.5))

    assert fake_api.last.extensions["timeout"]["read"] == 1.5


@pytest.mark.asyncio
async def test_token_not_overridable_on_the_wire(make_client, fake_api) -> None:
    async with make_client(fake_api) as client:
        await client.get_products(options=RequestOptions(params={"access_token": "spoofed"}))

    assert fake_api.last.url.params.get_list("access_token") == [TOKEN]


class _RaisingTransport:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    async def execute(self, descriptor):
        raise self.exc

    async def aclose(self) -> None:
        return None


@pytest.mark.asyncio
async def test_injected_transport_failure_is_normalized() -> None:
    client = GumroadClient(TOKEN, transport=_RaisingTransport(asyncio.TimeoutError("adapter timed out")))

    with pytest.raises(NetworkError) as exc:
        await client.get_user()

    assert exc.value.message == "adapter timed out"
    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, asyncio.TimeoutError)


@pytest.mark.asyncio
async def test_injected_transport_without_message_uses_type_name() -> None:
    client = GumroadClient(TOKEN, transport=_RaisingTransport(ConnectionResetError()))

    with pytest.raises(NetworkError) as exc:
        await client.get_products()

    assert exc.value.message == "ConnectionResetError"


@pytest.mark.asyncio
async def test_injected_transport_gumroad_error_passes_through() -> None:
    original = NetworkError("dns failure")
    client = GumroadClient(TOKEN, transport=_RaisingTransport(original))

    with pytest.raises(NetworkError) as exc:
        await client.get_user()

    assert exc.value is original
