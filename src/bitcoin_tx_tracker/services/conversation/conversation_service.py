"""Interactive input state machine for /register, /edit and /set_gas."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from bitcoin_tx_tracker.exceptions import (
    AlreadyRegisteredError,
    InvalidAddressError,
    InvalidThresholdError,
    NotRegisteredError,
)
from bitcoin_tx_tracker.models.conversation import ConversationState, PendingInput
from bitcoin_tx_tracker.notifications.stylers import replies
from bitcoin_tx_tracker.utils.validation import parse_threshold

if TYPE_CHECKING:
    from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
    from bitcoin_tx_tracker.services.accounts import AccountService

_TIMEOUT_REPLIES: dict[ConversationState, str] = {
    ConversationState.AWAITING_ADDRESS: replies.TIMEOUT_ADDRESS,
    ConversationState.AWAITING_EDIT: replies.TIMEOUT_EDIT,
    ConversationState.AWAITING_THRESHOLD: replies.TIMEOUT_THRESHOLD,
}


class ConversationService:
    """Tracks which free-text reply each user owes and applies it.

    A prompt puts the user in an awaiting state that expires timeout_seconds
    later. Invalid input is rejected without touching the state or its expiry;
    valid input applies the change and returns the user to IDLE. Expired
    states are cleared by expire_due(), which also sends the timeout message.
    """

    def __init__(
        self,
        account_service: AccountService,
        notifier: BaseNotificationStrategy,
        *,
        timeout_seconds: float = 120.0,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            account_service: Applies registrations, edits and thresholds.
            notifier: Chat transport for timeout messages.
            timeout_seconds: How long an awaiting state stays open.
            clock: Current unix time (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._accounts = account_service
        self._notifier = notifier
        self._timeout_seconds = timeout_seconds
        self._clock = clock
        self._pending: dict[int, PendingInput] = {}
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def current(self, user_id: int) -> ConversationState:
        entry = self._pending.get(user_id)
        return entry.state if entry is not None else ConversationState.IDLE

    async def begin_register(self, user_id: int) -> str:
        if await self._accounts.is_registered(user_id):
            return replies.ALREADY_REGISTERED
        self._await(user_id, ConversationState.AWAITING_ADDRESS)
        return replies.prompt_address(self._timeout_seconds)

    async def begin_edit(self, user_id: int) -> str:
        if not await self._accounts.is_registered(user_id):
            return replies.NOT_REGISTERED
        self._await(user_id, ConversationState.AWAITING_EDIT)
        return replies.prompt_edit(self._timeout_seconds)

    async def begin_threshold(self, user_id: int) -> str:
        if not await self._accounts.is_registered(user_id):
            return replies.NOT_REGISTERED_FOR_THRESHOLD
        self._await(user_id, ConversationState.AWAITING_THRESHOLD)
        return replies.prompt_threshold(self._timeout_seconds)

    def cancel(self, user_id: int) -> None:
        self._pending.pop(user_id, None)

    async def handle_text(self, user_id: int, text: str) -> str | None:
        """Consume a free-text message.

        Returns:
            The reply to send, or None when the user owes no input.
        """
        entry = self._pending.get(user_id)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            await self._expire(entry)
            return None

        text = text.strip()
        if entry.state is ConversationState.AWAITING_ADDRESS:
            return await self._apply_register(user_id, text)
        if entry.state is ConversationState.AWAITING_EDIT:
            return await self._apply_edit(user_id, text)
        return await self._apply_threshold(user_id, text)

    async def expire_due(self) -> list[int]:
        """Clear every expired state and notify its user. Returns the affected user ids."""
        now = self._clock()
        due = [entry for entry in self._pending.values() if entry.is_expired(now)]
        for entry in due:
            await self._expire(entry)
        return [entry.user_id for entry in due]

    def _await(self, user_id: int, state: ConversationState) -> None:
        self._pending[user_id] = PendingInput(
            user_id=user_id,
            state=state,
            expires_at=self._clock() + self._timeout_seconds,
        )
        self._logger.debug("conversation_awaiting_input", user_id=user_id, conversation_state=state.value)

    async def _expire(self, entry: PendingInput) -> None:
        if self._pending.get(entry.user_id) is not entry:
            return
        del self._pending[entry.user_id]
        self._logger.info(
            "conversation_input_timeout",
            user_id=entry.user_id,
            conversation_state=entry.state.value,
        )
        await self._notifier.send_message(entry.user_id, _TIMEOUT_REPLIES[entry.state])

    async def _apply_register(self, user_id: int, text: str) -> str:
        try:
            account = await self._accounts.register(user_id, text)
        except InvalidAddressError:
            return replies.INVALID_ADDRESS_REGISTER
        except AlreadyRegisteredError:
            self.cancel(user_id)
            return replies.ALREADY_REGISTERED
        self.cancel(user_id)
        return replies.registered(account.address)

    async def _apply_edit(self, user_id: int, text: str) -> str:
        try:
            account = await self._accounts.change_address(user_id, text)
        except InvalidAddressError:
            return replies.INVALID_ADDRESS_EDIT
        except NotRegisteredError:
            self.cancel(user_id)
            return replies.NOT_REGISTERED
        self.cancel(user_id)
        return replies.address_updated(account.address)

    async def _apply_threshold(self, user_id: int, text: str) -> str:
        try:
            threshold = parse_threshold(text)
        except InvalidThresholdError:
            return replies.INVALID_THRESHOLD
        try:
            await self._accounts.set_fee_threshold(user_id, threshold)
        except NotRegisteredError:
            self.cancel(user_id)
            return replies.NOT_REGISTERED_FOR_THRESHOLD
        self.cancel(user_id)
        return replies.threshold_set(threshold)
