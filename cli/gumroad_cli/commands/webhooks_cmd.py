from __future__ import annotations

import typer
from rich.table import Table

from .. import console
from ..config import load_config
from ..http import emit, make_client, run_with_client

app = typer.Typer(help="Resource subscription (webhook) commands.")

RESOURCE_NAMES = ("sale", "refund", "dispute", "dispute_won", "cancellation", "subscription_updated",
                  "subscription_ended", "subscription_restarted")


def _check_resource(resource_name: str) -> str:
    name = resource_name.strip().lower()
    if name not in RESOURCE_NAMES:
        console.warn(f"Unknown resource {resource_name!r}; known: {', '.join(RESOURCE_NAMES)}")
    return name


@app.command("list")
def list_subscriptions(
        resource_name: str = typer.Argument("sale", help="Resource name, e.g. sale or refund."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
        json_out: bool = typer.Option(False, "--json", help="Print raw JSON."),
):
    name = _check_resource(resource_name)
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    subs = run_with_client(client, lambda c: c.get_resource_subscriptions(name), action="list subscriptions")

    if emit(subs, json_out):
        return

    table = Table(title=f"Subscriptions: {name}")
    table.add_column("id", style="bold")
    table.add_column("resource")
    table.add_column("post_url")
    for s in subs:
        table.add_row(str(s.get("id") or "-"), str(s.get("resource_name") or "-"), str(s.get("post_url") or "-"))
    console.console.print(table)


@app.command("subscribe")
def subscribe(
        resource_name: str = typer.Argument(..., help="Resource name, e.g. sale or refund."),
        post_url: str = typer.Argument(..., help="URL Gumroad will POST to."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    name = _check_resource(resource_name)
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    sub = run_with_client(client, lambda c: c.subscribe_to_resource(name, post_url), action="subscribe")
    console.ok(f"Subscribed: id={(sub or {}).get('id')} resource={name}")


@app.command("unsubscribe")
def unsubscribe(
        subscription_id: str = typer.Argument(..., help="Resource subscription ID."),
        profile: str | None = typer.Option(None, "--profile", help="Config profile to use."),
        base_path: str | None = typer.Option(None, "--base-path", help="Override API base path."),
):
    client = make_client(load_config(), profile=profile, base_path_override=base_path)
    ack = run_with_client(client, lambda c: c.unsubscribe_from_resource(subscription_id), action="unsubscribe")
    console.ok(ack.get("message") or f"Subscription {subscription_id} removed.")
