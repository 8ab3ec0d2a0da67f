# -*- coding: utf-8 -*-
"""mempool.space REST API client (ledger data, fiat price, fee estimates)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, List, Optional, cast
from structlog.contextvars import bound_contextvars

from bitcoin_tx_tracker.clients.mempool.schema import (
    PricesSchema,
    RecommendedFeesSchema,
    TransactionSchema,
)
from bitcoin_tx_tracker.config import Settings
from bitcoin_tx_tracker.exceptions import InvalidResponseError
from bitcoin_tx_tracker.models.fee_levels import FeeLevels
from bitcoin_tx_tracker.utils.validation import mask_address

if TYPE_CHECKING:
    from bitcoin_tx_tracker.clients.http import AsyncHttpClient


class MempoolApiClient:
    """Client for mempool.space (address history, prices, recommended fees)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.mempool_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.mempool_host.rstrip("/")

    async def get_address_transactions(self, address: str) -> List[TransactionSchema]:
        """Fetch the transaction history of an address (mempool first, then most recent confirmed).

        The endpoint returns the full recent history on every call, not a delta.

        Raises:
            UpstreamAPIError: If the request fails after retries.
            InvalidResponseError: If the body is not a JSON list.
        """
        with bound_contextvars(mempool_address_masked=mask_address(address)):
            url = f"{self._base_url()}/api/address/{address}/txs"
            data = await self._http.get(url)
            if not isinstance(data, list):
                self._logger.warning(
                    "mempool_get_transactions_non_list",
                    mempool_response_type=type(data).__name__,
                )
                raise InvalidResponseError(
                    "transactions response is not a list", url=url
                )
            result: List[TransactionSchema] = []
            for x in cast(list[Any], data):
                if isinstance(x, dict):
                    result.append(cast(TransactionSchema, x))
            return result

    async def get_btc_price_usd(self) -> float:
        """Return the current BTC price in USD.

        Raises:
            UpstreamAPIError: If the request fails after retries.
            InvalidResponseError: If the USD price is missing.
        """
        url = f"{self._base_url()}/api/v1/prices"
        data = await self._http.get(url)
        prices = cast(PricesSchema, data) if isinstance(data, dict) else {}
        usd = prices.get("USD")
        if not isinstance(usd, (int, float)) or isinstance(usd, bool):
            raise InvalidResponseError("prices response has no USD value", url=url)
        return float(usd)

    async def get_recommended_fees(self) -> FeeLevels:
        """Return the fast / medium / slow fee estimates.

        Raises:
            UpstreamAPIError: If the request fails after retries.
            InvalidResponseError: If a fee tier is missing.
        """
        url = f"{self._base_url()}/api/v1/fees/recommended"
        data = await self._http.get(url)
        if not isinstance(data, dict):
            raise InvalidResponseError("fees response is not an object", url=url)
        fees_raw = cast(RecommendedFeesSchema, data)
        try:
            fees = FeeLevels.from_response(dict(fees_raw))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidResponseError(f"fees response is incomplete: {e}", url=url, cause=e) from e
        self._logger.debug(
            "mempool_recommended_fees",
            fee_fast=fees.fast,
            fee_medium=fees.medium,
            fee_slow=fees.slow,
        )
        return fees
