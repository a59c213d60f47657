from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import typer
from gumroad_client import AuthError, GumroadClient, GumroadError
from gumroad_client.config_types import ClientConfig

from . import console
from .config import AppConfig, apply_profile, normalize_base_path, resolve_access_token, resolve_base_path

T = TypeVar("T")


def make_client(
    cfg: AppConfig,
    *,
    profile: str | None,
    base_path_override: str | None,
) -> GumroadClient:
    effective_cfg = apply_profile(cfg, profile)
    base_path = normalize_base_path(base_path_override, warn=True) or resolve_base_path(effective_cfg, profile)
    token = resolve_access_token(effective_cfg, profile)
    if not token:
        console.err("No access token configured. Run `gumroad config set-token` or set GUMROAD_ACCESS_TOKEN.")
        raise typer.Exit(code=2)
    return GumroadClient.from_config(
        ClientConfig(access_token=token, base_path=base_path, timeout_s=effective_cfg.timeout_s)
    )


def run_with_client(client: GumroadClient, fn: Callable[[GumroadClient], Awaitable[T]], *, action: str) -> T:
    """Run one async client interaction, closing the client and mapping failures to exit code 2."""

    async def _run() -> T:
        try:
            return await fn(client)
        finally:
            await client.aclose()

    try:
        return asyncio.run(_run())
    except AuthError as e:
        console.err(f"Unauthorized ({e.status_code}): {e.message}")
        raise typer.Exit(code=2)
    except GumroadError as e:
        console.err(f"Failed to {action}: {e.message}")
        raise typer.Exit(code=2)


def emit(data: Any, json_out: bool) -> bool:
    if json_out:
        console.print_json(data)
        return True
    return False
