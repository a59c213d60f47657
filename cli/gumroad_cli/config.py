from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from gumroad_client.config_types import DEFAULT_BASE_PATH

from . import console

APP_NAME = "gumroad"
CONFIG_FILENAME = "config.toml"
ENV_ACCESS_TOKEN = "GUMROAD_ACCESS_TOKEN"
ENV_BASE_PATH = "GUMROAD_BASE_PATH"

_WARNED_BASE_PATH_SCHEME = False


@dataclass
class ProfileConfig:
    base_path: str = ""
    access_token: str = ""


@dataclass
class AppConfig:
    base_path: str = DEFAULT_BASE_PATH
    access_token: str = ""
    timeout_s: float = 15.0
    profiles: dict[str, ProfileConfig] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(base_path=DEFAULT_BASE_PATH, access_token="", profiles={})


def normalize_base_path(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_PATH_SCHEME
    if _WARNED_BASE_PATH_SCHEME:
        return
    console.warn(f"base_path missing scheme, assuming {normalized}")
    _WARNED_BASE_PATH_SCHEME = True


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_empty(
        {
            "base_path": cfg.base_path,
            "access_token": cfg.access_token,
            "timeout_s": cfg.timeout_s,
            "profiles": {
                name: {"base_path": p.base_path, "access_token": p.access_token}
                for name, p in cfg.profiles.items()
            },
        }
    )


def _prune_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_empty(v) for k, v in value.items() if v not in (None, "")}
    return value


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_path = normalize_base_path(str(data.get("base_path") or ""), warn=True)
    if base_path:
        cfg.base_path = base_path
    cfg.access_token = str(data.get("access_token") or "").strip()
    timeout = data.get("timeout_s")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg.timeout_s = float(timeout)

    profiles_raw = data.get("profiles") or {}
    if isinstance(profiles_raw, dict):
        for name, v in profiles_raw.items():
            if not isinstance(v, dict):
                continue
            cfg.profiles[str(name)] = ProfileConfig(
                base_path=normalize_base_path(str(v.get("base_path") or ""), warn=True),
                access_token=str(v.get("access_token") or "").strip(),
            )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    prof = cfg.profiles.get(profile)
    if prof is None:
        console.warn(f"Unknown profile {profile!r}, using defaults.")
        return cfg
    return AppConfig(
        base_path=prof.base_path or cfg.base_path,
        access_token=prof.access_token or cfg.access_token,
        timeout_s=cfg.timeout_s,
        profiles=cfg.profiles,
    )


def resolve_access_token(cfg: AppConfig, profile: str | None = None) -> str:
    prof = cfg.profiles.get(profile) if profile else None
    if prof is not None and prof.access_token.strip():
        return prof.access_token.strip()
    env_value = os.getenv(ENV_ACCESS_TOKEN, "").strip()
    if env_value:
        return env_value
    return (cfg.access_token or "").strip()


def resolve_base_path(cfg: AppConfig, profile: str | None = None) -> str:
    prof = cfg.profiles.get(profile) if profile else None
    if prof is not None and prof.base_path.strip():
        return prof.base_path.strip().rstrip("/")
    env_value = os.getenv(ENV_BASE_PATH, "").strip()
    if env_value:
        return normalize_base_path(env_value)
    return (cfg.base_path or DEFAULT_BASE_PATH).strip().rstrip("/")


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
