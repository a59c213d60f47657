from __future__ import annotations

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_cents, yes_no
from ..http import emit, make_client, run_with_client

app = typer.Typer(help="Products commands.")


@app.command("list")
def list_products(
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    products = run_with_client(client, lambda c: c.get_products(), action="list products")

    if emit(products, json_out):
        return

    table = Table(title="Products")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("price")
    table.add_column("published")
    table.add_column("sales")

    for p in products:
        table.add_row(
            str(p.get("id") or "-"),
            str(p.get("name") or "-"),
            format_cents(p.get("price"), p.get("currency")),
            yes_no(p.get("published")),
            str(p.get("sales_count") if p.get("sales_count") is not None else "-"),
        )

    console.console.print(table)


@app.command("show")
def show_product(
        product_id: str = typer.Argument(..., help="Product ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    product = run_with_client(client, lambda c: c.get_product(product_id), action="fetch product") or {}

    if emit(product, json_out):
        return

    console.ok("Product:")
    console.console.print(f"  id: {product.get('id')}")
    console.console.print(f"  name: {product.get('name')}")
    console.console.print(f"  price: {format_cents(product.get('price'), product.get('currency'))}")
    console.console.print(f"  published: {yes_no(product.get('published'))}")
    console.console.print(f"  short_url: {product.get('short_url') or '-'}")


def _toggle(product_id: str, enable: bool, profile: str | None, base_path: str | None) -> None:
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    if enable:
        product = run_with_client(client, lambda c: c.enable_product(product_id), action="enable product")
    else:
        product = run_with_client(client, lambda c: c.disable_product(product_id), action="disable product")
    state = "published" if (product or {}).get("published") else "unpublished"
    console.ok(f"Product {product_id} is now {state}.")


@app.command("enable")
def enable_product(
        product_id: str = typer.Argument(..., help="Product ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    _toggle(product_id, True, profile, base_path)


@app.command("disable")
def disable_product(
        product_id: str = typer.Argument(..., help="Product ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    _toggle(product_id, False, profile, base_path)


@app.command("delete")
def delete_product(
        product_id: str = typer.Argument(..., help="Product ID."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    if not yes and not typer.confirm(f"Permanently delete product {product_id}?", default=False):
        raise typer.Exit(code=0)
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    ack = run_with_client(client, lambda c: c.delete_product(product_id), action="delete product")
    console.ok(ack.get("message") or f"Product {product_id} deleted.")
