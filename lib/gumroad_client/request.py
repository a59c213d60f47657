from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import quote

from .config_types import RequestOptions
from .errors import ApiError, AuthError, NetworkError

log = logging.getLogger(__name__)

AUTH_PARAM = "access_token"
DEFAULT_HEADERS = {"Content-type": "application/json"}
METHODS = {"GET", "POST", "PUT", "DELETE"}


@dataclass(frozen=True)
class RequestDescriptor:
    url: str
    method: str = "GET"
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: Any = None
    text: str = ""
    # False when the payload was not valid JSON
    parsed: bool = True


def format_path(template: str, *segments: Any) -> str:
    """Fill ``{}`` slots of a path template with percent-encoded segments."""
    return template.format(*(quote(str(seg), safe="") for seg in segments))


def drop_absent(params: Mapping[str, Any] | None) -> dict[str, Any]:
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def build_request(
        base_path: str,
        path: str,
        access_token: str,
        params: Mapping[str, Any] | None = None,
        options: RequestOptions | None = None,
) -> RequestDescriptor:
    options = options or RequestOptions()

    merged: dict[str, Any] = {AUTH_PARAM: access_token}
    merged.update(params or {})
    merged.update(options.params or {})
    if merged.get(AUTH_PARAM) != access_token:
        log.debug("ignoring %s override for %s", AUTH_PARAM, path)
    merged[AUTH_PARAM] = access_token

    headers = dict(DEFAULT_HEADERS)
    headers.update(options.headers or {})

    method = (options.method or "GET").upper()
    if method not in METHODS:
        raise ValueError(f"unsupported HTTP method: {method}")

    return RequestDescriptor(
        url=base_path.rstrip("/") + path,
        method=method,
        params=drop_absent(merged),
        headers=headers,
        timeout=options.timeout,
    )


def _remote_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def classify(raw: RawResponse, *, method: str = "GET", path: str = "") -> dict[str, Any]:
    """Return the full response body on success, raise a ``GumroadError`` otherwise.

    Success means HTTP 200, a JSON object body and ``success: true`` in it.
    """
    body = raw.body
    if raw.status_code == 200 and isinstance(body, dict) and body.get("success") is True:
        return body

    if raw.status_code == 200 and not raw.parsed:
        raise NetworkError(f"{method} {path} returned a malformed response body", (raw.text or "")[:1000] or None)

    msg = _remote_message(body) or f"{method} {path} failed with {raw.status_code}"
    details = raw.text[:1000] if raw.text else None
    if raw.status_code in (401, 403):
        raise AuthError(raw.status_code, msg, details)
    raise ApiError(raw.status_code, msg, details)


__all__ = [
    "AUTH_PARAM",
    "RawResponse",
    "RequestDescriptor",
    "build_request",
    "classify",
    "drop_absent",
    "format_path",
]
