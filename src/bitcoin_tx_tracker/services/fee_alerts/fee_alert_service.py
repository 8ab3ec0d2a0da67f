"""Network fee threshold alerts."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from bitcoin_tx_tracker.exceptions import UpstreamAPIError
from bitcoin_tx_tracker.models.fee_levels import FeeLevels

if TYPE_CHECKING:
    from bitcoin_tx_tracker.clients.mempool import MempoolApiClient
    from bitcoin_tx_tracker.notifications.stylers.message_styler import MessageStyler
    from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
    from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
        IWatchedAccountRepository,
    )


def should_alert(threshold: int | None, medium_fee: int) -> bool:
    """Alert when the medium fee has dropped to or below the user's threshold."""
    return threshold is not None and medium_fee <= threshold


class FeeAlertService:
    """Fetches fee levels once per cycle and alerts every user whose threshold is met.

    Alerts repeat on every cycle while the condition holds; there is no
    per-user memory of the last alert.
    """

    def __init__(
        self,
        repository: IWatchedAccountRepository,
        mempool_client: MempoolApiClient,
        notifier: BaseNotificationStrategy,
        styler: MessageStyler,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._repo = repository
        self._mempool = mempool_client
        self._notifier = notifier
        self._styler = styler
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def current_fees(self) -> FeeLevels:
        """Current fee levels (raises UpstreamAPIError on failure)."""
        return await self._mempool.get_recommended_fees()

    async def check_and_alert(self) -> list[int]:
        """Run one fee cycle. Returns the user ids that were alerted."""
        accounts = [a for a in await self._repo.list_all() if a.fee_threshold is not None]
        if not accounts:
            return []
        try:
            fees = await self.current_fees()
        except UpstreamAPIError as e:
            self._logger.warning(
                "fee_alert_fetch_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return []

        text = self._styler.fee_alert(fees)
        alerted: list[int] = []
        for account in accounts:
            if not should_alert(account.fee_threshold, fees.medium):
                continue
            message_id = await self._notifier.send_message(account.user_id, text)
            if message_id is not None:
                alerted.append(account.user_id)
        self._logger.info(
            "fee_alert_cycle_complete",
            fee_medium=fees.medium,
            watched_count=len(accounts),
            alerted_count=len(alerted),
        )
        return alerted
