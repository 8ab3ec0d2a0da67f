"""Orchestrator: runs the tracking, fee alert and input-timeout loops until shutdown."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import structlog

from bitcoin_tx_tracker.services.tracking.tracker import CycleOutcome, TransactionTracker

if TYPE_CHECKING:
    from bitcoin_tx_tracker.config import Settings
    from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
        IWatchedAccountRepository,
    )
    from bitcoin_tx_tracker.services.conversation import ConversationService
    from bitcoin_tx_tracker.services.fee_alerts import FeeAlertService


class TrackingRunner:
    """Runs the periodic loops until shutdown_event or CancelledError.

    - tracking: every poll_seconds, one cycle per registered user, concurrently,
      each bounded by user_cycle_timeout_seconds and isolated from the others.
    - fee alerts: every fee_poll_seconds.
    - sweep: every sweep_seconds, expires awaiting conversation states.
    """

    def __init__(
        self,
        tracker: TransactionTracker,
        fee_alerts: FeeAlertService,
        conversations: ConversationService,
        repository: IWatchedAccountRepository,
        settings: Settings,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            tracker: Per-user tracking cycle.
            fee_alerts: Fee alert cycle.
            conversations: Conversation state machine (for the timeout sweep).
            repository: User registry; lists the users of each tracking cycle.
            settings: Application settings (uses settings.tracking).
            sleep: Tick source between cycles (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._tracker = tracker
        self._fee_alerts = fee_alerts
        self._conversations = conversations
        self._repo = repository
        self._settings = settings
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_tracking_cycle(self) -> list[CycleOutcome]:
        """Track every registered user once. Failures of one user never affect another."""
        accounts = await self._repo.list_all()
        timeout = self._settings.tracking.user_cycle_timeout_seconds
        results = await asyncio.gather(
            *(asyncio.wait_for(self._tracker.track_user(a.user_id), timeout=timeout) for a in accounts),
            return_exceptions=True,
        )
        outcomes: list[CycleOutcome] = []
        for account, result in zip(accounts, results):
            if isinstance(result, CycleOutcome):
                outcomes.append(result)
                continue
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, TimeoutError):
                self._logger.warning(
                    "tracking_user_cycle_timeout",
                    user_id=account.user_id,
                    timeout_seconds=timeout,
                )
            else:
                self._logger.error(
                    "tracking_user_cycle_failed",
                    user_id=account.user_id,
                    error_type=type(result).__name__,
                    error_message=str(result),
                    exc_info=result,
                )
            outcomes.append(CycleOutcome(user_id=account.user_id, status="transient_failure", account=account))
        self._logger.debug(
            "tracking_cycle_complete",
            users_count=len(accounts),
            ok_count=sum(1 for o in outcomes if o.status == "ok"),
        )
        return outcomes

    async def run_fee_cycle(self) -> list[int]:
        return await self._fee_alerts.check_and_alert()

    async def run_sweep(self) -> list[int]:
        return await self._conversations.expire_due()

    async def _every(self, loop_name: str, interval: float, cycle: Callable[[], Awaitable[Any]]) -> None:
        """Run cycle, then wait interval, forever. A failing cycle is logged and the loop goes on."""
        while True:
            try:
                await cycle()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._logger.exception(
                    "tracking_runner_cycle_exception",
                    loop_name=loop_name,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            await self._sleep(interval)

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Start the loops; wait for shutdown_event or CancelledError; cancel all loops."""
        tr = self._settings.tracking
        self._logger.info(
            "tracking_runner_started",
            tracking_poll_seconds=tr.poll_seconds,
            fee_poll_seconds=tr.fee_poll_seconds,
            sweep_seconds=tr.sweep_seconds,
        )
        tasks = [
            asyncio.create_task(self._every("tracking", tr.poll_seconds, self.run_tracking_cycle)),
            asyncio.create_task(self._every("fee_alerts", tr.fee_poll_seconds, self.run_fee_cycle)),
            asyncio.create_task(self._every("input_sweep", tr.sweep_seconds, self.run_sweep)),
        ]

        try:
            await shutdown_event.wait()
        except asyncio.CancelledError:
            self._logger.info(
                "tracking_runner_shutdown_cancelled",
                message="Task cancelled; stopping loops",
            )
            await self._cancel(tasks)
            raise

        self._logger.info("tracking_runner_shutdown_started")
        await self._cancel(tasks)

    @staticmethod
    async def _cancel(tasks: list[asyncio.Task[None]]) -> None:
        for t in tasks:
            t.cancel()
        for t in tasks:
            try:
                await t
            except asyncio.CancelledError:
                pass
