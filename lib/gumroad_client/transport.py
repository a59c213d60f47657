from __future__ import annotations

import logging
from typing import Protocol

import httpx

from .config_types import ClientConfig
from .errors import NetworkError
from .request import RawResponse, RequestDescriptor

log = logging.getLogger(__name__)


class Transport(Protocol):
    async def execute(self, descriptor: RequestDescriptor) -> RawResponse: ...

    async def aclose(self) -> None: ...


class HttpxTransport:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.AsyncClient(
            timeout=cfg.timeout_s,
            headers={"User-Agent": cfg.user_agent},
            follow_redirects=True,
            transport=http_transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, descriptor: RequestDescriptor) -> RawResponse:
        timeout = descriptor.timeout if descriptor.timeout is not None else self._cfg.timeout_s
        log.debug("%s %s", descriptor.method, descriptor.url)
        try:
            r = await self._client.request(
                descriptor.method,
                descriptor.url,
                params=descriptor.params,
                headers=descriptor.headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(f"request timed out: {e}" if str(e) else "request timed out") from e
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__) from e
        log.debug("%s %s -> %s", descriptor.method, descriptor.url, r.status_code)

        try:
            return RawResponse(status_code=r.status_code, body=r.json(), text=r.text)
        except ValueError:
            return RawResponse(status_code=r.status_code, body=None, text=r.text, parsed=False)
