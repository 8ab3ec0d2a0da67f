# -*- coding: utf-8 -*-
"""Telegram Markdown renderer for every message the bot sends."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

from bitcoin_tx_tracker.models.fee_levels import FeeLevels
from bitcoin_tx_tracker.models.token_balance import Brc20Balance, RuneBalance

PENDING_MARKER = "⏳ *Pending*"
CONFIRMED_MARKER = "✅ *Confirmed*"

SATOSHIS_PER_BTC = Decimal(100_000_000)
_BTC_QUANTUM = Decimal("0.00000001")
_FIAT_QUANTUM = Decimal("0.01")


def satoshis_to_btc(satoshis: int) -> Decimal:
    """Convert satoshis to BTC with 8 decimals."""
    return (Decimal(satoshis) / SATOSHIS_PER_BTC).quantize(_BTC_QUANTUM)


def fiat_value(amount_btc: Decimal, exchange_rate: float) -> Decimal:
    """amount × rate rounded to cents (rate 0 when the price is unknown)."""
    return (amount_btc * Decimal(str(exchange_rate))).quantize(_FIAT_QUANTUM, rounding=ROUND_HALF_UP)


def _format_amount(value: Decimal) -> str:
    """Thousands separators, no trailing zeros (12,345.5)."""
    normalized = value.normalize()
    if normalized == normalized.to_integral_value():
        return f"{int(normalized):,}"
    return f"{normalized:,f}"


class MessageStyler:
    """Render transaction alerts, fee messages and token balances.

    Transaction alerts carry a status marker as their last line; confirm()
    derives the confirmed body from the stored pending body by swapping the
    marker, so amounts and fiat values shown never change on confirmation.
    """

    def __init__(
        self,
        explorer_host: str = "https://mempool.space",
        unisat_market_host: str = "https://unisat.io",
    ) -> None:
        self._explorer = explorer_host.rstrip("/")
        self._unisat = unisat_market_host.rstrip("/")

    def transaction(
        self,
        *,
        address: str,
        txid: str,
        outgoing: bool,
        amount_satoshis: int,
        exchange_rate: float,
        confirmed: bool,
    ) -> str:
        """Render a new-transaction alert."""
        amount = satoshis_to_btc(amount_satoshis)
        fiat = fiat_value(amount, exchange_rate)
        heading = "📤 *Outgoing*" if outgoing else "📥 *Incoming*"
        verb = "Sent" if outgoing else "Received"
        status = CONFIRMED_MARKER if confirmed else PENDING_MARKER
        return (
            f"{heading} *Transaction Detected*!\n"
            f"Bitcoin Address: [{address}]({self._explorer}/address/{address})\n"
            f"{verb}: {amount:.8f} BTC (${fiat:.2f})\n"
            f"[Tx hash]({self._explorer}/tx/{txid})\n"
            f"Status: {status}"
        )

    @staticmethod
    def confirm(pending_text: str) -> str:
        """Return the confirmed version of a pending transaction alert."""
        return pending_text.replace(PENDING_MARKER, CONFIRMED_MARKER)

    @staticmethod
    def fee_alert(fees: FeeLevels) -> str:
        return f"⛽️ *Gas Price Alert!* *{fees.medium}* sat/vB"

    @staticmethod
    def fee_levels(fees: FeeLevels) -> str:
        return (
            f"🚀 Fast :  {fees.fast} sat/vB\n"
            f"🚗 Average :  {fees.medium} sat/vB\n"
            f"🐢 Slow :  {fees.slow} sat/vB\n"
        )

    def rune_balances(self, address: str, balances: list[RuneBalance]) -> str:
        if not balances:
            return f"No runes found for your Bitcoin address {address}."
        lines = ["🔮 *Rune Balances*", ""]
        for rune in balances:
            link = f"{self._unisat}/runes/market?tick={quote(rune.name, safe='')}"
            lines.append(f"{rune.symbol} [{rune.name}]({link}): {_format_amount(rune.amount)}")
        return "\n".join(lines)

    def brc20_balances(self, address: str, balances: list[Brc20Balance]) -> str:
        if not balances:
            return f"No BRC20 tokens found for your Bitcoin address {address}."
        lines = ["💰 *BRC20 Balances*", ""]
        for token in balances:
            link = f"{self._unisat}/market/brc20?tick={quote(token.ticker, safe='')}"
            lines.append(f"[{token.ticker}]({link}): {_format_amount(token.balance)}")
        return "\n".join(lines)
