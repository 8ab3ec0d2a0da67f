"""Dependency injection."""

from bitcoin_tx_tracker.DI.container import Container

__all__ = ["Container"]
