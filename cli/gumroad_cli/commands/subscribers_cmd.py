from __future__ import annotations

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..formatting import format_list_timestamp
from ..http import emit, make_client, run_with_client

app = typer.Typer(help="Subscribers commands (view_sales scope).")


@app.command("list")
def list_subscribers(
        product_id: str = typer.Argument(..., help="Product ID."),
        email: str | None = typer.Option(None, "--email", help="Filter by subscriber email."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    subs = run_with_client(client, lambda c: c.get_product_subscribers(product_id, email), action="list subscribers")

    if emit(subs, json_out):
        return

    table = Table(title="Subscribers")
    table.add_column("id", style="bold")
    table.add_column("email")
    table.add_column("status")
    table.add_column("created_at")
    for s in subs:
        table.add_row(
            str(s.get("id") or "-"),
            str(s.get("email") or "-"),
            str(s.get("status") or "-"),
            format_list_timestamp(s.get("created_at")),
        )
    console.console.print(table)


@app.command("show")
def show_subscriber(
        subscriber_id: str = typer.Argument(..., help="Subscriber ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    sub = run_with_client(client, lambda c: c.get_subscriber(subscriber_id), action="fetch subscriber") or {}

    if emit(sub, json_out):
        return

    console.ok("Subscriber:")
    console.console.print(f"  id: {sub.get('id')}")
    console.console.print(f"  email: {sub.get('email') or '-'}")
    console.console.print(f"  product_id: {sub.get('product_id') or '-'}")
    console.console.print(f"  status: {sub.get('status') or '-'}")
    console.console.print(f"  created_at: {format_list_timestamp(sub.get('created_at'))}")
