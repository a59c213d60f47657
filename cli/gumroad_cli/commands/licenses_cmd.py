from __future__ import annotations

import typer

from .. import console
from ..config import load_config
from ..formatting import format_list_timestamp, yes_no
from ..http import emit, make_client, run_with_client

app = typer.Typer(help="License key commands.")


def _print_license(result: dict) -> None:
    purchase = result.get("purchase") or {}
    console.console.print(f"  uses: {result.get('uses') if result.get('uses') is not None else '-'}")
    console.console.print(f"  email: {purchase.get('email') or '-'}")
    console.console.print(f"  sale_id: {purchase.get('sale_id') or '-'}")
    console.console.print(f"  created_at: {format_list_timestamp(purchase.get('created_at'))}")
    console.console.print(f"  refunded: {yes_no(purchase.get('refunded'))}")
    console.console.print(f"  disabled: {yes_no(purchase.get('license_disabled'))}")


@app.command("verify")
def verify_license(
        product_id: str = typer.Argument(..., help="Product ID the license belongs to."),
        license_key: str = typer.Argument(..., help="License key."),
        increment: bool = typer.Option(True, "--increment/--no-increment", help="Count this check as a use."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    result = run_with_client(
        client,
        lambda c: c.verify_license(product_id, license_key, increment),
        action="verify license",
    )
    if emit(result, json_out):
        return
    console.ok("License is valid.")
    _print_license(result)


@app.command("enable")
def enable_license(
        product_id: str = typer.Argument(..., help="Product ID the license belongs to."),
        license_key: str = typer.Argument(..., help="License key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    result = run_with_client(client, lambda c: c.enable_license(product_id, license_key), action="enable license")
    console.ok("License enabled.")
    _print_license(result)


@app.command("disable")
def disable_license(
        product_id: str = typer.Argument(..., help="Product ID the license belongs to."),
        license_key: str = typer.Argument(..., help="License key."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    result = run_with_client(client, lambda c: c.disable_license(product_id, license_key), action="disable license")
    console.ok("License disabled.")
    _print_license(result)
