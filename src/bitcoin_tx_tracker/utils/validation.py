"""Validation helpers for addresses and fee thresholds."""

from __future__ import annotations

import re
from typing import Any

from bitcoin_tx_tracker.exceptions import InvalidAddressError, InvalidThresholdError

# Lowercase bech32/bech32m mainnet addresses (native segwit and taproot).
_BITCOIN_ADDRESS_RE = re.compile(r"^bc[a-z0-9]{40,60}$")
_INTEGER_RE = re.compile(r"^-?\d+$")


def is_bitcoin_address(addr: Any) -> bool:
    """Return True if addr looks like a native segwit / taproot address (bc..., 42-62 chars)."""
    if not isinstance(addr, str):
        return False
    return _BITCOIN_ADDRESS_RE.fullmatch(addr) is not None


def parse_address(text: Any) -> str:
    """Return text as an address or raise InvalidAddressError."""
    if not is_bitcoin_address(text):
        raise InvalidAddressError(f"not a valid Bitcoin address: {text!r}")
    return str(text)


def parse_threshold(text: Any) -> int:
    """Return text as an integer threshold (sat/vB) or raise InvalidThresholdError."""
    if not isinstance(text, str) or _INTEGER_RE.fullmatch(text) is None:
        raise InvalidThresholdError(f"threshold must be an integer: {text!r}")
    return int(text)


def mask_address(addr: str | None) -> str:
    """Return a masked address for logging (e.g. bc1qab...wxyz)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
