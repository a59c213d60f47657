from __future__ import annotations
from dataclasses import dataclass

DEFAULT_BASE_PATH = "https://api.gumroad.com/v2"
DEFAULT_USER_AGENT = "gumroad-client/0.1.0"


@dataclass(frozen=True)
class ClientConfig:
    access_token: str
    base_path: str = DEFAULT_BASE_PATH
    timeout_s: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not isinstance(self.access_token, str) or not self.access_token.strip():
            raise ValueError("access_token is required")
        if not self.base_path:
            object.__setattr__(self, "base_path", DEFAULT_BASE_PATH)


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides merged over what an operation builds by itself."""

    method: str | None = None
    params: dict | None = None
    headers: dict[str, str] | None = None
    timeout: float | None = None
