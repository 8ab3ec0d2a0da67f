# -*- coding: utf-8 -*-
"""Utility modules."""

from bitcoin_tx_tracker.utils.locks import KeyedLocks
from bitcoin_tx_tracker.utils.validation import (
    is_bitcoin_address,
    mask_address,
    parse_address,
    parse_threshold,
)

__all__ = [
    "KeyedLocks",
    "is_bitcoin_address",
    "mask_address",
    "parse_address",
    "parse_threshold",
]
