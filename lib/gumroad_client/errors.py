from __future__ import annotations


class GumroadError(Exception):
    """Base client error.

    Every failure raised by the client carries the same accessors, so callers
    can handle remote rejections and transport failures with one ``except``.
    """

    def __init__(self, message: str, *, status_code: int | None = None, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GumroadError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.status_code == other.status_code
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.status_code, self.details))


class ApiError(GumroadError):
    """The API answered, but did not report success."""

    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message, status_code=status_code, details=details)


class AuthError(ApiError):
    """Auth-related API error."""


class NetworkError(GumroadError):
    """Transport/network layer error."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, status_code=None, details=details)


class PaginationError(GumroadError):
    """A page continuation was invoked while its previous call was still running."""
