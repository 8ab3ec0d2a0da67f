# -*- coding: utf-8 -*-
"""Unit tests for ReconciliationEngine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from bitcoin_tx_tracker.models.raw_transaction import RawTransaction
from bitcoin_tx_tracker.models.watched_account import PendingEntry, WatchedAccount
from bitcoin_tx_tracker.notifications.stylers.message_styler import (
    CONFIRMED_MARKER,
    PENDING_MARKER,
    MessageStyler,
)
from bitcoin_tx_tracker.services.reconciliation import ReconciliationEngine


@pytest.fixture
def engine(styler: MessageStyler) -> ReconciliationEngine:
    return ReconciliationEngine(styler)


@pytest.fixture
def txs(tx_factory: Callable[..., dict[str, Any]]) -> Callable[..., RawTransaction]:
    """tx_factory parsed into RawTransaction."""
    return lambda txid, **kw: RawTransaction.from_response(tx_factory(txid, **kw))


async def test_pending_then_confirmed_sends_once_and_edits_once(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    account = account_factory(cursor=1_000)

    first = await engine.reconcile(account, [txs("t1", confirmed=False)], 0.0, notifier)

    assert len(first.sends) == 1 and not first.edits
    assert PENDING_MARKER in first.sends[0].text
    assert "50.00000000 BTC ($0.00)" in first.sends[0].text
    assert set(first.account.pending) == {"t1"}
    assert first.account.pending["t1"].message_id == first.sends[0].message_id

    second = await engine.reconcile(
        first.account, [txs("t1", confirmed=True, block_time=2_000)], 0.0, notifier
    )

    assert not second.sends
    assert len(second.edits) == 1
    assert CONFIRMED_MARKER in second.edits[0].text
    assert PENDING_MARKER not in second.edits[0].text
    assert second.edits[0].message_id == first.sends[0].message_id
    assert dict(second.account.pending) == {}
    assert second.account.cursor == 2_001
    assert len(notifier.sent) == 1
    assert len(notifier.edited) == 1


async def test_refetching_same_history_is_idempotent(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    listing = [
        txs("a", confirmed=True, block_time=1_500),
        txs("b", confirmed=True, block_time=1_600),
        txs("c", confirmed=False),
    ]
    result = await engine.reconcile(account_factory(cursor=1_000), listing, 30_000.0, notifier)
    assert [i.txid for i in result.sends] == ["a", "b", "c"]

    again = await engine.reconcile(result.account, listing, 30_000.0, notifier)

    assert again.intents == ()
    assert again.account.pending == result.account.pending
    assert len(notifier.sent) == 3


async def test_confirmed_transactions_are_announced_in_block_time_order(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    listing = [
        txs("late", confirmed=True, block_time=3_000),
        txs("mempool", confirmed=False),
        txs("early", confirmed=True, block_time=2_000),
    ]

    result = await engine.reconcile(account_factory(cursor=1_000), listing, 0.0, notifier)

    assert [i.txid for i in result.sends] == ["early", "late", "mempool"]
    assert result.account.cursor == 3_001


async def test_cursor_never_decreases(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    account = account_factory(cursor=5_000)

    result = await engine.reconcile(account, [txs("old", confirmed=True, block_time=3_000)], 0.0, notifier)

    assert result.intents == ()
    assert result.account.cursor >= account.cursor


async def test_confirmed_before_registration_is_ignored(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    result = await engine.reconcile(
        account_factory(cursor=1_000), [txs("history", confirmed=True, block_time=999)], 0.0, notifier
    )

    assert notifier.sent == []
    assert result.account.cursor == 1_001


async def test_failed_send_of_pending_tx_creates_no_entry_and_retries_next_cycle(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    notifier.fail_sends = True
    failed = await engine.reconcile(account_factory(), [txs("t1", confirmed=False)], 0.0, notifier)

    assert failed.sends[0].delivered is False
    assert dict(failed.account.pending) == {}

    notifier.fail_sends = False
    retried = await engine.reconcile(failed.account, [txs("t1", confirmed=False)], 0.0, notifier)

    assert retried.sends[0].delivered is True
    assert set(retried.account.pending) == {"t1"}


async def test_failed_send_of_confirmed_tx_does_not_advance_past_it(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    notifier.fail_sends = True
    failed = await engine.reconcile(
        account_factory(cursor=1_000), [txs("t1", confirmed=True, block_time=1_500)], 0.0, notifier
    )

    assert failed.account.cursor == 1_001

    notifier.fail_sends = False
    retried = await engine.reconcile(
        failed.account, [txs("t1", confirmed=True, block_time=1_500)], 0.0, notifier
    )

    assert [i.txid for i in retried.sends] == ["t1"]
    assert retried.account.cursor == 1_501


async def test_failed_edit_keeps_entry_for_next_cycle(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    styler: MessageStyler,
    txs: Callable[..., RawTransaction],
) -> None:
    text = f"body\nStatus: {PENDING_MARKER}"
    account = account_factory(cursor=1_000, pending={"t1": PendingEntry(message_id=7, text=text)})
    listing = [txs("t1", confirmed=True, block_time=1_200)]

    notifier.fail_edits = True
    failed = await engine.reconcile(account, listing, 0.0, notifier)

    assert failed.edits[0].delivered is False
    assert "t1" in failed.account.pending
    assert failed.sends == ()

    notifier.fail_edits = False
    done = await engine.reconcile(failed.account, listing, 0.0, notifier)

    assert notifier.edited == [(account.user_id, 7, styler.confirm(text))]
    assert dict(done.account.pending) == {}
    assert done.sends == ()


async def test_outgoing_value_and_fiat_rendering(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    address: str,
    other_address: str,
    txs: Callable[..., RawTransaction],
) -> None:
    tx = txs(
        "spend",
        confirmed=True,
        block_time=2_000,
        sender=address,
        receiver=other_address,
        input_value=100_000_000,
        value=90_000_000,
    )

    result = await engine.reconcile(account_factory(cursor=1_000), [tx], 30_000.0, notifier)

    text = result.sends[0].text
    assert "Outgoing" in text
    assert "Sent: 1.00000000 BTC ($30000.00)" in text
    assert CONFIRMED_MARKER in text


async def test_input_account_is_not_mutated(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    account = account_factory(cursor=1_000)

    await engine.reconcile(account, [txs("t1", confirmed=False)], 0.0, notifier)

    assert account.cursor == 1_000
    assert dict(account.pending) == {}


async def test_failed_confirmed_send_is_retried_even_when_a_later_one_succeeds(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    listing = [txs("a", confirmed=True, block_time=1_500), txs("b", confirmed=True, block_time=1_600)]
    delivered_send = notifier.send_message

    async def fail_for_a(chat_id: int, text: str) -> int | None:
        if "/tx/a)" in text:
            return None
        return await delivered_send(chat_id, text)

    notifier.send_message = fail_for_a
    failed = await engine.reconcile(account_factory(cursor=1_000), listing, 0.0, notifier)

    assert [(i.txid, i.delivered) for i in failed.sends] == [("a", False), ("b", True)]
    assert failed.account.cursor == 1_500

    notifier.send_message = delivered_send
    retried = await engine.reconcile(failed.account, listing, 0.0, notifier)

    assert "a" in [i.txid for i in retried.sends if i.delivered]
    assert retried.account.cursor == 1_601


async def test_progress_is_reported_after_each_delivery(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    checkpoints: list[WatchedAccount] = []

    async def record(account: WatchedAccount) -> None:
        checkpoints.append(account)

    listing = [
        txs("t3", confirmed=False),
        txs("t2", confirmed=True, block_time=1_500),
        txs("t1", confirmed=True, block_time=1_500),
    ]

    result = await engine.reconcile(account_factory(cursor=1_000), listing, 0.0, notifier, on_progress=record)

    # A checkpoint never moves past a block time that still has to be processed.
    assert [(a.cursor, set(a.pending)) for a in checkpoints] == [
        (1_500, set()),
        (1_501, set()),
        (1_501, {"t3"}),
    ]
    assert checkpoints[-1] == result.account


async def test_failed_deliveries_report_no_progress(
    engine: ReconciliationEngine,
    notifier: Any,
    account_factory: Callable[..., WatchedAccount],
    txs: Callable[..., RawTransaction],
) -> None:
    checkpoints: list[WatchedAccount] = []

    async def record(account: WatchedAccount) -> None:
        checkpoints.append(account)

    notifier.fail_sends = True
    await engine.reconcile(account_factory(), [txs("t1", confirmed=False)], 0.0, notifier, on_progress=record)

    assert checkpoints == []
