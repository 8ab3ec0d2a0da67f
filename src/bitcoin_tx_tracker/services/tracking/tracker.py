"""Per-user transaction tracking cycle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

import structlog
from structlog.contextvars import bound_contextvars

from bitcoin_tx_tracker.exceptions import UpstreamAPIError
from bitcoin_tx_tracker.models.raw_transaction import RawTransaction
from bitcoin_tx_tracker.models.watched_account import WatchedAccount
from bitcoin_tx_tracker.services.reconciliation import ReconcileResult, ReconciliationEngine
from bitcoin_tx_tracker.utils.validation import mask_address

if TYPE_CHECKING:
    from bitcoin_tx_tracker.clients.mempool import MempoolApiClient
    from bitcoin_tx_tracker.clients.price_cache import PriceCache
    from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
    from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
        IWatchedAccountRepository,
    )
    from bitcoin_tx_tracker.utils.locks import KeyedLocks

CycleStatus = Literal["ok", "transient_failure", "not_registered"]


@dataclass(frozen=True, slots=True)
class CycleOutcome:
    """Result of one tracking cycle for one user."""

    user_id: int
    status: CycleStatus
    account: WatchedAccount | None = None
    result: ReconcileResult | None = None


class TransactionTracker:
    """Fetches a user's transaction listing and reconciles it against stored state."""

    def __init__(
        self,
        repository: IWatchedAccountRepository,
        mempool_client: MempoolApiClient,
        price_cache: PriceCache,
        engine: ReconciliationEngine,
        notifier: BaseNotificationStrategy,
        locks: KeyedLocks,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the tracker.

        Args:
            repository: User registry (injected).
            mempool_client: Ledger client (injected).
            price_cache: BTC/USD price source (injected).
            engine: Reconciliation engine (injected).
            notifier: Chat transport handed to the engine.
            locks: Per-user locks shared with the account service.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = repository
        self._mempool = mempool_client
        self._prices = price_cache
        self._engine = engine
        self._notifier = notifier
        self._locks = locks
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def track_user(self, user_id: int) -> CycleOutcome:
        """Run one cycle for user_id.

        The ledger is fetched before any state is touched, so a failed fetch
        leaves the account exactly as it was and dispatches nothing.
        Every delivered send or edit is saved as it happens, so a cycle cut
        short by a timeout never announces the same transaction twice.
        """
        async with self._locks.hold(user_id):
            account = await self._repo.get(user_id)
            if account is None:
                return CycleOutcome(user_id=user_id, status="not_registered")

            with bound_contextvars(user_id=user_id, address_masked=mask_address(account.address)):
                try:
                    raw = await self._mempool.get_address_transactions(account.address)
                except UpstreamAPIError as e:
                    self._logger.warning(
                        "tracker_ledger_fetch_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                        status_code=e.status_code,
                    )
                    return CycleOutcome(user_id=user_id, status="transient_failure", account=account)

                transactions = self._parse(raw)
                rate = await self._prices.get_btc_price_usd()
                result = await self._engine.reconcile(
                    account, transactions, rate, self._notifier, on_progress=self._repo.save
                )
                if result.account != account:
                    await self._repo.save(result.account)
                if result.intents:
                    self._logger.info(
                        "tracker_cycle_dispatched",
                        sends_count=len(result.sends),
                        edits_count=len(result.edits),
                        cursor=result.account.cursor,
                    )
                return CycleOutcome(user_id=user_id, status="ok", account=result.account, result=result)

    def _parse(self, raw: list[Any]) -> list[RawTransaction]:
        transactions: list[RawTransaction] = []
        for item in raw:
            try:
                transactions.append(RawTransaction.from_response(item))
            except (ValueError, TypeError, AttributeError) as e:
                self._logger.warning(
                    "tracker_transaction_skipped",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        return transactions
