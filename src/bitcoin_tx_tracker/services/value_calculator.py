"""Net value of a transaction relative to one watched address."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from bitcoin_tx_tracker.models.raw_transaction import RawTransaction

_logger = structlog.get_logger("value_calculator")


@dataclass(frozen=True, slots=True)
class TransactionValue:
    """Satoshi totals of a transaction for one address."""

    total_in: int
    """Sum of outputs paying the address (received)."""
    total_out: int
    """Sum of inputs spending from the address (sent, before change)."""

    def net_amount(self, *, outgoing: bool) -> int:
        """Net sent (change excluded) when outgoing, otherwise the amount received."""
        return self.total_out - self.total_in if outgoing else self.total_in


ZERO_VALUE = TransactionValue(total_in=0, total_out=0)


def is_outgoing(tx: RawTransaction, address: str) -> bool:
    """True if any input spends from address."""
    return any(tx_input.address == address for tx_input in tx.inputs)


def compute_value(tx: RawTransaction, address: str) -> TransactionValue:
    """Return the totals of tx for address. Never raises: malformed shapes give zero totals."""
    try:
        total_in = sum(o.value for o in tx.outputs if o.address == address)
        total_out = sum(i.value for i in tx.inputs if i.address == address)
    except (AttributeError, TypeError) as e:
        _logger.warning(
            "value_calculator_malformed_transaction",
            txid=getattr(tx, "txid", None),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        return ZERO_VALUE
    return TransactionValue(total_in=int(total_in), total_out=int(total_out))
