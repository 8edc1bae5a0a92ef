from __future__ import annotations


class FantasyApiError(RuntimeError):
    """Base exception for fantasy API client failures."""


class ConfigurationError(FantasyApiError):
    """A required setting (league id, credentials, ...) is missing."""


class TransportError(FantasyApiError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, bad JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.url = url


class RateLimitedError(TransportError):
    """Upstream throttled the request (HTTP 429)."""


class UnsupportedEraError(FantasyApiError, ValueError):
    """An operation was called with a season served by the other API generation."""

    def __init__(
        self, message: str, *, season_id: int, operation: str, alternate: str | None = None
    ) -> None:
        super().__init__(message)
        self.season_id = season_id
        self.operation = operation
        self.alternate = alternate


EraMismatchError = UnsupportedEraError
