from .client import GumroadClient
from .config_types import ClientConfig, RequestOptions
from .errors import ApiError, AuthError, GumroadError, NetworkError, PaginationError
from .pagination import Page

__all__ = [
    "GumroadClient",
    "ClientConfig",
    "RequestOptions",
    "Page",
    "GumroadError",
    "ApiError",
    "AuthError",
    "NetworkError",
    "PaginationError",
]
