# -*- coding: utf-8 -*-
"""UniSat open API client (Rune and BRC-20 balances)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from structlog.contextvars import bound_contextvars

from bitcoin_tx_tracker.clients.unisat.schema import (
    Brc20SummarySchema,
    RuneBalanceSchema,
    UnisatEnvelopeSchema,
)
from bitcoin_tx_tracker.config import Settings
from bitcoin_tx_tracker.exceptions import InvalidResponseError
from bitcoin_tx_tracker.utils.validation import mask_address

if TYPE_CHECKING:
    from bitcoin_tx_tracker.clients.http import AsyncHttpClient

_PAGE_LIMIT = 500


class UnisatApiClient:
    """Client for the UniSat indexer (Bearer API key from settings.api.unisat_api_key)."""

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
            settings: Application settings (uses settings.api.unisat_host and unisat_api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.unisat_host.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        api_key = self._settings.api.unisat_api_key
        return {"Authorization": f"Bearer {api_key}"} if api_key else {}

    async def _get_detail(self, url: str, params: Dict[str, Any]) -> List[Any]:
        """GET a UniSat endpoint and return data.detail, checking the envelope code."""
        data = await self._http.get(url, params=params, headers=self._headers())
        if not isinstance(data, dict):
            raise InvalidResponseError("UniSat response is not an object", url=url)
        envelope = cast(UnisatEnvelopeSchema, data)
        code = envelope.get("code")
        if code != 0:
            self._logger.warning(
                "unisat_error_code",
                unisat_code=code,
                unisat_msg=envelope.get("msg"),
            )
            raise InvalidResponseError(
                f"UniSat responded with an error: code {code} ({envelope.get('msg')})",
                url=url,
            )
        payload = envelope.get("data") or {}
        detail = payload.get("detail") if isinstance(payload, dict) else None
        if not isinstance(detail, list):
            return []
        return cast(List[Any], detail)

    async def get_rune_balances(self, address: str) -> List[RuneBalanceSchema]:
        """Fetch the Rune balance list of an address.

        Raises:
            UpstreamAPIError: If the request fails or UniSat returns a non-zero code.
        """
        with bound_contextvars(unisat_address_masked=mask_address(address)):
            url = f"{self._base_url()}/v1/indexer/address/{address}/runes/balance-list"
            detail = await self._get_detail(url, {"start": 0, "limit": _PAGE_LIMIT})
            return [cast(RuneBalanceSchema, x) for x in detail if isinstance(x, dict)]

    async def get_brc20_balances(self, address: str) -> List[Brc20SummarySchema]:
        """Fetch the BRC-20 summary of an address (classic 4-byte tickers).

        Raises:
            UpstreamAPIError: If the request fails or UniSat returns a non-zero code.
        """
        with bound_contextvars(unisat_address_masked=mask_address(address)):
            url = f"{self._base_url()}/v1/indexer/address/{address}/brc20/summary"
            detail = await self._get_detail(
                url, {"start": 0, "limit": _PAGE_LIMIT, "tick_filter": 24}
            )
            return [cast(Brc20SummarySchema, x) for x in detail if isinstance(x, dict)]
