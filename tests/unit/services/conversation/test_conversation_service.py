# -*- coding: utf-8 -*-
"""Unit tests for ConversationService (interactive input state machine)."""

from __future__ import annotations

from typing import Any

import pytest

from bitcoin_tx_tracker.models.conversation import ConversationState
from bitcoin_tx_tracker.notifications.stylers import replies
from bitcoin_tx_tracker.persistence.repositories.in_memory import InMemoryWatchedAccountRepository
from bitcoin_tx_tracker.services.accounts import AccountService
from bitcoin_tx_tracker.services.conversation import ConversationService
from bitcoin_tx_tracker.utils.locks import KeyedLocks

USER = 77


@pytest.fixture
def accounts(repo: InMemoryWatchedAccountRepository, locks: KeyedLocks, clock: Any) -> AccountService:
    return AccountService(repo, locks, clock=clock)


@pytest.fixture
def conversations(accounts: AccountService, notifier: Any, clock: Any) -> ConversationService:
    return ConversationService(accounts, notifier, timeout_seconds=120, clock=clock)


async def test_invalid_address_keeps_awaiting_state_and_creates_nothing(
    conversations: ConversationService,
    repo: InMemoryWatchedAccountRepository,
) -> None:
    prompt = await conversations.begin_register(USER)
    assert "2 minutes" in prompt

    reply = await conversations.handle_text(USER, "abc")

    assert reply == replies.INVALID_ADDRESS_REGISTER
    assert conversations.current(USER) is ConversationState.AWAITING_ADDRESS
    assert await repo.get(USER) is None


async def test_valid_address_registers_and_returns_to_idle(
    conversations: ConversationService,
    repo: InMemoryWatchedAccountRepository,
    address: str,
) -> None:
    await conversations.begin_register(USER)

    reply = await conversations.handle_text(USER, f" {address} ")

    assert reply == replies.registered(address)
    assert conversations.current(USER) is ConversationState.IDLE
    account = await repo.get(USER)
    assert account is not None and account.address == address


async def test_register_when_already_registered_does_not_prompt(
    conversations: ConversationService,
    accounts: AccountService,
    address: str,
) -> None:
    await accounts.register(USER, address)

    assert await conversations.begin_register(USER) == replies.ALREADY_REGISTERED
    assert conversations.current(USER) is ConversationState.IDLE


async def test_timeout_sends_message_and_returns_to_idle(
    conversations: ConversationService,
    notifier: Any,
    clock: Any,
) -> None:
    await conversations.begin_register(USER)
    clock.advance(119)
    assert await conversations.expire_due() == []

    clock.advance(1)
    assert await conversations.expire_due() == [USER]

    assert conversations.current(USER) is ConversationState.IDLE
    assert notifier.texts_to(USER) == [replies.TIMEOUT_ADDRESS]


async def test_invalid_input_does_not_extend_the_deadline(
    conversations: ConversationService,
    clock: Any,
) -> None:
    await conversations.begin_register(USER)
    clock.advance(100)
    await conversations.handle_text(USER, "still wrong")
    clock.advance(30)

    assert await conversations.expire_due() == [USER]


async def test_text_after_deadline_is_not_applied(
    conversations: ConversationService,
    repo: InMemoryWatchedAccountRepository,
    notifier: Any,
    clock: Any,
    address: str,
) -> None:
    await conversations.begin_register(USER)
    clock.advance(500)

    assert await conversations.handle_text(USER, address) is None
    assert await repo.get(USER) is None
    assert notifier.texts_to(USER) == [replies.TIMEOUT_ADDRESS]


async def test_text_without_pending_input_is_ignored(conversations: ConversationService, address: str) -> None:
    assert await conversations.handle_text(USER, address) is None


async def test_edit_flow(
    conversations: ConversationService,
    accounts: AccountService,
    address: str,
    other_address: str,
) -> None:
    assert await conversations.begin_edit(USER) == replies.NOT_REGISTERED
    await accounts.register(USER, address)

    await conversations.begin_edit(USER)
    assert await conversations.handle_text(USER, "bc1short") == replies.INVALID_ADDRESS_EDIT
    assert conversations.current(USER) is ConversationState.AWAITING_EDIT

    assert await conversations.handle_text(USER, other_address) == replies.address_updated(other_address)
    account = await accounts.get(USER)
    assert account is not None and account.address == other_address


async def test_threshold_flow(
    conversations: ConversationService,
    accounts: AccountService,
    address: str,
) -> None:
    assert await conversations.begin_threshold(USER) == replies.NOT_REGISTERED_FOR_THRESHOLD
    await accounts.register(USER, address)

    await conversations.begin_threshold(USER)
    assert await conversations.handle_text(USER, "12.5") == replies.INVALID_THRESHOLD
    assert conversations.current(USER) is ConversationState.AWAITING_THRESHOLD

    assert await conversations.handle_text(USER, "-3") == replies.threshold_set(-3)
    account = await accounts.get(USER)
    assert account is not None and account.fee_threshold == -3


async def test_new_prompt_replaces_previous_state(
    conversations: ConversationService,
    accounts: AccountService,
    address: str,
) -> None:
    await accounts.register(USER, address)
    await conversations.begin_edit(USER)
    await conversations.begin_threshold(USER)

    assert conversations.current(USER) is ConversationState.AWAITING_THRESHOLD
