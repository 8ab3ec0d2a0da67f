"""RawTransaction: a ledger transaction as reported by the explorer API.

Read-only to the reconciliation engine. Built from mempool.space
GET /api/address/{address}/txs items; parsing is lenient so a malformed
input or output degrades to (None, 0) instead of failing the whole batch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast


def _as_int(value: Any) -> int:
    """Return value as int, or 0 when it is missing or not numeric."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, (float, str)):
        try:
            return int(value)
        except ValueError:
            return 0
    return 0


def _as_address(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True, slots=True)
class TxInput:
    """One spent output: where the value came from."""

    address: str | None
    value: int
    """Satoshis."""


@dataclass(frozen=True, slots=True)
class TxOutput:
    """One created output: where the value goes."""

    address: str | None
    value: int
    """Satoshis."""


@dataclass(frozen=True, slots=True)
class RawTransaction:
    """Transaction record from the ledger source.

    block_time is only meaningful when confirmed is True.
    """

    txid: str
    confirmed: bool
    block_time: int | None
    inputs: tuple[TxInput, ...] = ()
    outputs: tuple[TxOutput, ...] = ()

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> RawTransaction:
        """Build from a raw mempool.space transaction item.

        Raises:
            ValueError: If the item has no txid (it cannot be tracked).
        """
        txid = response.get("txid")
        if not isinstance(txid, str) or not txid:
            raise ValueError("transaction item has no txid")

        status_raw = response.get("status")
        status = cast(dict[str, Any], status_raw) if isinstance(status_raw, dict) else {}
        confirmed = bool(status.get("confirmed", False))
        block_time = _as_int(status.get("block_time")) if confirmed else None

        inputs: list[TxInput] = []
        vin = response.get("vin")
        for item in cast(list[Any], vin) if isinstance(vin, list) else []:
            prevout = item.get("prevout") if isinstance(item, dict) else None
            if isinstance(prevout, dict):
                inputs.append(
                    TxInput(
                        address=_as_address(prevout.get("scriptpubkey_address")),
                        value=_as_int(prevout.get("value")),
                    )
                )
            else:
                # coinbase inputs carry no prevout
                inputs.append(TxInput(address=None, value=0))

        outputs: list[TxOutput] = []
        vout = response.get("vout")
        for item in cast(list[Any], vout) if isinstance(vout, list) else []:
            if isinstance(item, dict):
                outputs.append(
                    TxOutput(
                        address=_as_address(item.get("scriptpubkey_address")),
                        value=_as_int(item.get("value")),
                    )
                )

        return cls(
            txid=txid,
            confirmed=confirmed,
            block_time=block_time,
            inputs=tuple(inputs),
            outputs=tuple(outputs),
        )
