"""Fungible token balances reported by the token indexer."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any


def _as_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")


@dataclass(frozen=True, slots=True)
class RuneBalance:
    """Balance of one Rune (UniSat runes/balance-list detail item)."""

    name: str
    """Spaced rune name, e.g. DOG•GO•TO•THE•MOON."""
    symbol: str
    amount: Decimal

    @classmethod
    def from_response(cls, item: dict[str, Any]) -> RuneBalance:
        return cls(
            name=str(item.get("spacedRune") or item.get("rune") or ""),
            symbol=str(item.get("symbol") or ""),
            amount=_as_decimal(item.get("amount")),
        )


@dataclass(frozen=True, slots=True)
class Brc20Balance:
    """Balance of one BRC-20 ticker (UniSat brc20/summary detail item)."""

    ticker: str
    balance: Decimal

    @classmethod
    def from_response(cls, item: dict[str, Any]) -> Brc20Balance:
        return cls(
            ticker=str(item.get("ticker") or ""),
            balance=_as_decimal(item.get("overallBalance")),
        )
