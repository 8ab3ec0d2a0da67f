"""UniSat open API response types. Keys match the API response (camelCase)."""

from __future__ import annotations

from typing import Any, TypedDict


class RuneBalanceSchema(TypedDict, total=False):
    """runes/balance-list detail item."""

    rune: str
    runeid: str
    spacedRune: str
    amount: str
    symbol: str
    divisibility: int


class Brc20SummarySchema(TypedDict, total=False):
    """brc20/summary detail item."""

    ticker: str
    overallBalance: str
    transferableBalance: str
    availableBalance: str


class UnisatEnvelopeSchema(TypedDict, total=False):
    """Every UniSat response: code 0 means success, data holds the payload."""

    code: int
    msg: str
    data: dict[str, Any]
