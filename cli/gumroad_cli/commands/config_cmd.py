from __future__ import annotations

import typer

from .. import console
from ..config import ProfileConfig, config_path, load_config, normalize_base_path, resolve_access_token, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/gumroad/config.toml).")


@app.command("path")
def show_path():
    console.console.print(config_path())


@app.command("show")
def show_settings():
    cfg = load_config()
    token_state = "(set)" if resolve_access_token(cfg) else "(empty)"
    console.console.print(f"base_path={cfg.base_path} access_token={token_state} timeout_s={cfg.timeout_s}")
    for name, prof in sorted(cfg.profiles.items()):
        prof_token = "(set)" if prof.access_token else "(inherited)"
        console.console.print(f"  profile {name}: base_path={prof.base_path or '(inherited)'} access_token={prof_token}")


@app.command("set-token")
def set_token(
        access_token: str = typer.Option(..., "--access-token", prompt=True, hide_input=True, help="Gumroad access token."),
        profile: str | None = typer.Option(None, "--profile", help="Store the token in this profile."),
):
    token = access_token.strip()
    if not token:
        console.err("Access token cannot be empty.")
        raise typer.Exit(code=2)
    cfg = load_config()
    if profile:
        cfg.profiles.setdefault(profile, ProfileConfig()).access_token = token
    else:
        cfg.access_token = token
    saved = save_config(cfg)
    console.ok(f"Token saved to {saved}.")


@app.command("set-base-path")
def set_base_path(
        base_path: str = typer.Argument(..., help="API root like https://api.gumroad.com/v2"),
        profile: str | None = typer.Option(None, "--profile", help="Store the base path in this profile."),
):
    value = normalize_base_path(base_path, warn=True)
    if not value:
        console.err("Base path cannot be empty.")
        raise typer.Exit(code=2)
    cfg = load_config()
    if profile:
        cfg.profiles.setdefault(profile, ProfileConfig()).base_path = value
    else:
        cfg.base_path = value
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
