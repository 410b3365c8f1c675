"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations


class SearchError(Exception):
    """Base class for failures surfaced to search callers."""

    error_code = "SEARCH_ERROR"
    status_code = 500


class InvalidQuery(SearchError, ValueError):
    """Raised when a required search input is missing or malformed."""

    error_code = "INVALID_QUERY"
    status_code = 400


class RateLimitExceeded(SearchError):
    """Raised when a client used up its quota for the current window."""

    error_code = "RATE_LIMIT"
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded", remaining: int = 0) -> None:
        super().__init__(message)
        self.remaining = remaining


class BackendUnavailable(SearchError):
    """Raised when the backing hotel provider failed or timed out."""

    error_code = "BACKEND_UNAVAILABLE"
    status_code = 503


class ProviderUnavailable(Exception):
    """Raised by hotel providers when the underlying store cannot answer."""
