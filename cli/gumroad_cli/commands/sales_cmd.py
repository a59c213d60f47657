from __future__ import annotations

from typing import Any

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_cents, format_list_timestamp, yes_no
from ..http import emit, make_client, run_with_client

app = typer.Typer(help="Sales commands (view_sales scope).")


def _sales_filters(
        after: str | None,
        before: str | None,
        email: str | None,
        product_id: str | None,
        page_key: str | None = None,
) -> dict[str, Any]:
    return {"after": after, "before": before, "email": email, "product_id": product_id, "page_key": page_key}


@app.command("list")
def list_sales(
        after: str | None = typer.Option(None, "--after", help="Only sales after this date (YYYY-MM-DD)."),
        before: str | None = typer.Option(None, "--before", help="Only sales before this date (YYYY-MM-DD)."),
        email: str | None = typer.Option(None, "--email", help="Filter by buyer email."),
        product_id: str | None = typer.Option(None, "--product-id", help="Filter by product."),
        page_key: str | None = typer.Option(None, "--page-key", help="Resume from a next_page_key."),
        all_pages: bool = typer.Option(False, "--all", help="Follow next_page_key until the last page."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    params = _sales_filters(after, before, email, product_id, page_key)
    client = make_client(load_config(), profile=profile, base_path_override=base_path)

    async def _fetch(c) -> tuple[list[dict], str | None]:
        if all_pages:
            return [sale async for sale in c.iter_sales(params)], None
        page = await c.get_sales_page(params)
        return page.items, page.next_page_key

    sales, next_page_key = run_with_client(client, _fetch, action="list sales")

    if emit(sales, json_out):
        return

    table = Table(title="Sales")
    table.add_column("id", style="bold")
    table.add_column("created_at")
    table.add_column("email")
    table.add_column("product")
    table.add_column("price")
    table.add_column("refunded")

    for s in sales:
        table.add_row(
            str(s.get("id") or "-"),
            format_list_timestamp(s.get("created_at")),
            str(s.get("email") or "-"),
            str(s.get("product_name") or "-"),
            format_cents(s.get("price")),
            yes_no(s.get("refunded")),
        )

    console.console.print(table)
    if next_page_key:
        console.info(f"More sales available; rerun with --page-key {next_page_key} or --all.")


@app.command("show")
def show_sale(
        sale_id: str = typer.Argument(..., help="Sale ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    sale = run_with_client(client, lambda c: c.get_sale(sale_id), action="fetch sale") or {}

    if emit(sale, json_out):
        return

    console.ok("Sale:")
    console.console.print(f"  id: {sale.get('id')}")
    console.console.print(f"  email: {sale.get('email') or '-'}")
    console.console.print(f"  product: {sale.get('product_name') or '-'}")
    console.console.print(f"  price: {format_cents(sale.get('price'))}")
    console.console.print(f"  created_at: {format_list_timestamp(sale.get('created_at'))}")
    console.console.print(f"  shipped: {yes_no(sale.get('shipped'))}")
    console.console.print(f"  refunded: {yes_no(sale.get('refunded'))}")


@app.command("ship")
def ship_sale(
        sale_id: str = typer.Argument(..., help="Sale ID."),
        tracking_url: str | None = typer.Option(None, "--tracking-url", help="Shipment tracking URL."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    run_with_client(client, lambda c: c.mark_sale_as_shipped(sale_id, tracking_url), action="mark sale as shipped")
    console.ok(f"Sale {sale_id} marked as shipped.")


@app.command("refund")
def refund_sale(
        sale_id: str = typer.Argument(..., help="Sale ID."),
        amount_cents: int | None = typer.Option(None, "--amount-cents", help="Partial refund amount; full refund if omitted."),
        yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    what = "fully" if amount_cents is None else f"by {format_cents(amount_cents)}"
    if not yes and not typer.confirm(f"Refund sale {sale_id} {what}?", default=False):
        raise typer.Exit(code=0)
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    run_with_client(client, lambda c: c.refund_sale(sale_id, amount_cents), action="refund sale")
    console.ok(f"Sale {sale_id} refunded {what}.")
