from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..http import emit, make_client, run_with_client


def whoami_impl(
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    """Show the user the access token belongs to."""
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    user = run_with_client(client, lambda c: c.get_user(), action="fetch user") or {}

    if emit(user, json_out):
        return

    console.ok("Authenticated as:")
    console.console.print(f"  name: {user.get('name') or '-'}")
    console.console.print(f"  email: {user.get('email') or '-'}")
    console.console.print(f"  user_id: {user.get('user_id') or '-'}")
    console.console.print(f"  url: {user.get('url') or '-'}")
