"""Reconciliation engine: turns a full transaction listing into at-most-once notifications."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from bitcoin_tx_tracker.models.raw_transaction import RawTransaction
from bitcoin_tx_tracker.models.watched_account import PendingEntry, WatchedAccount
from bitcoin_tx_tracker.notifications.stylers.message_styler import MessageStyler
from bitcoin_tx_tracker.services.reconciliation.intents import (
    NotificationIntent,
    ReconcileResult,
)
from bitcoin_tx_tracker.services.value_calculator import compute_value, is_outgoing
from bitcoin_tx_tracker.utils.validation import mask_address

if TYPE_CHECKING:
    from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy

ProgressCallback = Callable[[WatchedAccount], Awaitable[None]]


def _ordering_key(tx: RawTransaction) -> tuple[int, int]:
    """Confirmed by block time first; unconfirmed last (stable sort keeps arrival order)."""
    if tx.confirmed and tx.block_time is not None:
        return (0, tx.block_time)
    return (1, 0)


def _confirmed_block_time(tx: RawTransaction) -> int | None:
    return tx.block_time if tx.confirmed else None


def _lowest(*values: int | None) -> int | None:
    present = [v for v in values if v is not None]
    return min(present) if present else None


def _next_cursor(previous: int, candidate: int, ceiling: int | None) -> int:
    """One past the newest processed block time, capped at ceiling, never below previous.

    ceiling is the block time of the earliest confirmed transaction that still
    has to be announced (its send failed, or it was not reached yet), so the
    next cycle still sees that transaction as new.
    """
    cursor = max(previous, candidate) + 1
    if ceiling is not None:
        cursor = min(cursor, ceiling)
    return max(previous, cursor)


class ReconciliationEngine:
    """Decides which transactions are new, sends/edits their alerts and advances the cursor.

    The ledger returns the whole recent history on every poll, so newness is
    derived from account state only: a confirmed tx is new when its block time
    is at or past the cursor and it is not pending; an unconfirmed tx is new
    when it is not pending. A pending tx that shows up confirmed gets exactly
    one edit that swaps its status marker.

    Known limitation: two confirmed transactions with the same block time,
    fetched in different cycles, announce only the first one, because the
    cursor ends one second past the block time it processed. A confirmed tx
    whose send failed holds the cursor at its block time, so later confirmed
    transactions of that cycle may be announced again on the retry.
    """

    def __init__(
        self,
        styler: MessageStyler,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            styler: Renders transaction alerts and their confirmed versions.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._styler = styler
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def reconcile(
        self,
        account: WatchedAccount,
        transactions: Sequence[RawTransaction],
        exchange_rate: float | None,
        dispatcher: BaseNotificationStrategy,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> ReconcileResult:
        """Run one cycle for account over the current full transaction listing.

        Args:
            account: Current state (not mutated).
            transactions: Full listing for account.address, any order.
            exchange_rate: USD per BTC; None or unknown renders a $0.00 value.
            dispatcher: Chat transport used for sends and edits.
            on_progress: Awaited with the account as of each delivered send or
                edit, so a cycle interrupted midway keeps what it delivered.

        Returns:
            The updated account (cursor advanced, pending set updated) and the intents dispatched.
        """
        rate = exchange_rate if exchange_rate and exchange_rate > 0 else 0.0
        address = account.address
        pending: dict[str, PendingEntry] = dict(account.pending)
        candidate = account.cursor
        earliest_failed: int | None = None
        intents: list[NotificationIntent] = []
        ordered = sorted(transactions, key=_ordering_key)

        for index, tx in enumerate(ordered):
            block_time = _confirmed_block_time(tx)
            progressed = False

            is_new = tx.txid not in pending and (
                not tx.confirmed or (block_time is not None and block_time >= account.cursor)
            )
            if is_new:
                intent = await self._announce(account, tx, rate, dispatcher)
                intents.append(intent)
                progressed = intent.delivered
                if intent.delivered and intent.message_id is not None and not tx.confirmed:
                    pending[tx.txid] = PendingEntry(message_id=intent.message_id, text=intent.text)
                if intent.delivered and block_time is not None:
                    candidate = max(candidate, block_time)
                elif not intent.delivered and block_time is not None:
                    earliest_failed = _lowest(earliest_failed, block_time)
                    self._logger.warning(
                        "reconcile_confirmed_send_failed",
                        user_id=account.user_id,
                        txid=tx.txid,
                        block_time=block_time,
                    )

            if tx.confirmed and tx.txid in pending:
                entry = pending[tx.txid]
                confirmed_text = self._styler.confirm(entry.text)
                delivered = await dispatcher.edit_message(account.user_id, entry.message_id, confirmed_text)
                intents.append(
                    NotificationIntent(
                        kind="edit",
                        txid=tx.txid,
                        text=confirmed_text,
                        message_id=entry.message_id,
                        delivered=delivered,
                    )
                )
                if delivered:
                    progressed = True
                    del pending[tx.txid]
                    self._logger.info(
                        "reconcile_transaction_confirmed",
                        user_id=account.user_id,
                        address_masked=mask_address(address),
                        txid=tx.txid,
                    )
                else:
                    self._logger.warning(
                        "reconcile_confirm_edit_failed",
                        user_id=account.user_id,
                        txid=tx.txid,
                    )
                if block_time is not None:
                    candidate = max(candidate, block_time)

            if progressed and on_progress is not None:
                upcoming = _confirmed_block_time(ordered[index + 1]) if index + 1 < len(ordered) else None
                cursor = _next_cursor(account.cursor, candidate, _lowest(earliest_failed, upcoming))
                await on_progress(account.with_progress(cursor, pending))

        new_cursor = _next_cursor(account.cursor, candidate, earliest_failed)
        self._logger.debug(
            "reconcile_cycle_complete",
            user_id=account.user_id,
            address_masked=mask_address(address),
            transactions_count=len(transactions),
            intents_count=len(intents),
            pending_count=len(pending),
            cursor_before=account.cursor,
            cursor_after=new_cursor,
        )
        return ReconcileResult(
            account=account.with_progress(new_cursor, pending),
            intents=tuple(intents),
        )

    async def _announce(
        self,
        account: WatchedAccount,
        tx: RawTransaction,
        rate: float,
        dispatcher: BaseNotificationStrategy,
    ) -> NotificationIntent:
        """Render and send the new-transaction alert for tx."""
        outgoing = is_outgoing(tx, account.address)
        value = compute_value(tx, account.address)
        text = self._styler.transaction(
            address=account.address,
            txid=tx.txid,
            outgoing=outgoing,
            amount_satoshis=value.net_amount(outgoing=outgoing),
            exchange_rate=rate,
            confirmed=tx.confirmed,
        )
        message_id = await dispatcher.send_message(account.user_id, text)
        self._logger.info(
            "reconcile_new_transaction",
            user_id=account.user_id,
            address_masked=mask_address(account.address),
            txid=tx.txid,
            direction="outgoing" if outgoing else "incoming",
            confirmed=tx.confirmed,
            amount_satoshis=value.net_amount(outgoing=outgoing),
            delivered=message_id is not None,
        )
        return NotificationIntent(
            kind="send",
            txid=tx.txid,
            text=text,
            message_id=message_id,
            delivered=message_id is not None,
        )
