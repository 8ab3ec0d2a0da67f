"""Exceptions subpackage."""

from bitcoin_tx_tracker.exceptions.exceptions import (
    AlreadyRegisteredError,
    InvalidAddressError,
    InvalidResponseError,
    InvalidThresholdError,
    MissingRequiredConfigError,
    NotRegisteredError,
    RateLimitError,
    TrackerError,
    UpstreamAPIError,
    ValidationError,
)

__all__ = [
    "AlreadyRegisteredError",
    "InvalidAddressError",
    "InvalidResponseError",
    "InvalidThresholdError",
    "MissingRequiredConfigError",
    "NotRegisteredError",
    "RateLimitError",
    "TrackerError",
    "UpstreamAPIError",
    "ValidationError",
]
