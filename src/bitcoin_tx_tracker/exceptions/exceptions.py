"""Custom exceptions for upstream APIs, validation and configuration."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for bitcoin-tx-tracker errors."""

    pass


class MissingRequiredConfigError(TrackerError):
    """Raised when a required configuration value is missing."""

    pass


class UpstreamAPIError(TrackerError):
    """Raised when an upstream API request (ledger, price, fees, token indexer) fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(UpstreamAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class InvalidResponseError(UpstreamAPIError):
    """Raised when an upstream API answers with an unexpected payload shape or error code."""

    pass


class ValidationError(TrackerError, ValueError):
    """Raised when user input is rejected."""

    pass


class InvalidAddressError(ValidationError):
    """Raised when a string is not an accepted Bitcoin address."""

    pass


class InvalidThresholdError(ValidationError):
    """Raised when a fee threshold is not an integer."""

    pass


class AlreadyRegisteredError(TrackerError):
    """Raised when a user who already watches an address tries to register again."""

    pass


class NotRegisteredError(TrackerError):
    """Raised when an operation needs a registered account and the user has none."""

    pass
