"""mempool.space response types. Keys match the API response."""

from __future__ import annotations

from typing import TypedDict


class PrevoutSchema(TypedDict, total=False):
    """Output spent by an input."""

    scriptpubkey_address: str
    value: int


class VinSchema(TypedDict, total=False):
    txid: str
    vout: int
    prevout: PrevoutSchema
    is_coinbase: bool


class VoutSchema(TypedDict, total=False):
    scriptpubkey_address: str
    value: int


class TxStatusSchema(TypedDict, total=False):
    confirmed: bool
    block_height: int
    block_hash: str
    block_time: int


class TransactionSchema(TypedDict, total=False):
    """GET /api/address/{address}/txs item."""

    txid: str
    version: int
    locktime: int
    vin: list[VinSchema]
    vout: list[VoutSchema]
    size: int
    weight: int
    fee: int
    status: TxStatusSchema


class RecommendedFeesSchema(TypedDict, total=False):
    """GET /api/v1/fees/recommended (sat/vB)."""

    fastestFee: int
    halfHourFee: int
    hourFee: int
    economyFee: int
    minimumFee: int


class PricesSchema(TypedDict, total=False):
    """GET /api/v1/prices (fiat per BTC)."""

    time: int
    USD: float
    EUR: float
