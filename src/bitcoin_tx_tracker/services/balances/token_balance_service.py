"""Rune and BRC-20 balance lookups for /rune and /brc20."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from bitcoin_tx_tracker.models.token_balance import Brc20Balance, RuneBalance
from bitcoin_tx_tracker.utils.validation import mask_address

if TYPE_CHECKING:
    from bitcoin_tx_tracker.clients.unisat import UnisatApiClient


class TokenBalanceService:
    """Fetches token balances from UniSat and keeps the non-zero ones.

    Upstream failures propagate as UpstreamAPIError; the caller answers the
    user with a failure message.
    """

    def __init__(
        self,
        unisat_client: UnisatApiClient,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._unisat = unisat_client
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def rune_balances(self, address: str) -> list[RuneBalance]:
        items = await self._unisat.get_rune_balances(address)
        balances = [RuneBalance.from_response(dict(item)) for item in items]
        nonzero = [b for b in balances if b.amount > 0]
        self._logger.debug(
            "token_balances_runes_fetched",
            address_masked=mask_address(address),
            total_count=len(balances),
            nonzero_count=len(nonzero),
        )
        return nonzero

    async def brc20_balances(self, address: str) -> list[Brc20Balance]:
        items = await self._unisat.get_brc20_balances(address)
        balances = [Brc20Balance.from_response(dict(item)) for item in items]
        nonzero = [b for b in balances if b.balance > 0]
        self._logger.debug(
            "token_balances_brc20_fetched",
            address_masked=mask_address(address),
            total_count=len(balances),
            nonzero_count=len(nonzero),
        )
        return nonzero
