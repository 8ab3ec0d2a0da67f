"""Logging configuration (structlog + Logfire)."""

from bitcoin_tx_tracker.logging.config import configure_logging

__all__ = ["configure_logging"]
