"""Telegram command handlers (python-telegram-bot Application)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from bitcoin_tx_tracker.exceptions import UpstreamAPIError
from bitcoin_tx_tracker.notifications.stylers import replies

if TYPE_CHECKING:
    from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
    from bitcoin_tx_tracker.notifications.stylers.message_styler import MessageStyler
    from bitcoin_tx_tracker.services.accounts import AccountService
    from bitcoin_tx_tracker.services.balances import TokenBalanceService
    from bitcoin_tx_tracker.services.conversation import ConversationService
    from bitcoin_tx_tracker.services.fee_alerts import FeeAlertService


class BotCommandHandlers:
    """Maps chat commands to services and answers through the notifier.

    The chat id doubles as the user id (private chats). Replies go through
    the same transport as alerts so retries and logging are uniform.
    """

    def __init__(
        self,
        accounts: AccountService,
        conversations: ConversationService,
        fee_alerts: FeeAlertService,
        balances: TokenBalanceService,
        styler: MessageStyler,
        notifier: BaseNotificationStrategy,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._accounts = accounts
        self._conversations = conversations
        self._fee_alerts = fee_alerts
        self._balances = balances
        self._styler = styler
        self._notifier = notifier
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def register_handlers(self, application: Application[Any, Any, Any, Any, Any, Any]) -> None:
        """Attach every command and the free-text handler to application."""
        commands: dict[str, Callable[[Update, ContextTypes.DEFAULT_TYPE], Any]] = {
            "start": self.start,
            "help": self.help,
            "register": self.register,
            "edit": self.edit,
            "unregister": self.unregister,
            "user": self.user,
            "gas": self.gas,
            "set_gas": self.set_gas,
            "remove_gas": self.remove_gas,
            "rune": self.rune,
            "brc20": self.brc20,
            "ordinals": self.ordinals,
        }
        for name, callback in commands.items():
            application.add_handler(CommandHandler(name, callback))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.text))

    async def _reply(self, update: Update, text: str) -> None:
        chat = update.effective_chat
        if chat is None:
            return
        await self._notifier.send_message(chat.id, text)

    @staticmethod
    def _user_id(update: Update) -> int | None:
        chat = update.effective_chat
        return chat.id if chat is not None else None

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply(update, replies.WELCOME)

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply(update, replies.HELP)

    async def register(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        await self._reply(update, await self._conversations.begin_register(user_id))

    async def edit(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        await self._reply(update, await self._conversations.begin_edit(user_id))

    async def set_gas(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        await self._reply(update, await self._conversations.begin_threshold(user_id))

    async def unregister(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        self._conversations.cancel(user_id)
        if await self._accounts.unregister(user_id):
            await self._reply(update, replies.UNREGISTERED)
        else:
            await self._reply(update, replies.NOT_REGISTERED_FOR_UNREGISTER)

    async def user(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        account = await self._accounts.get(user_id)
        if account is None:
            await self._reply(update, replies.NOT_REGISTERED)
            return
        await self._reply(update, replies.registered_address(account.address))

    async def gas(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        try:
            fees = await self._fee_alerts.current_fees()
        except UpstreamAPIError as e:
            self._logger.warning("bot_gas_fetch_failed", error_type=type(e).__name__, error_message=str(e))
            await self._reply(update, replies.GAS_FAILED)
            return
        await self._reply(update, self._styler.fee_levels(fees))

    async def remove_gas(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        if await self._accounts.remove_fee_threshold(user_id):
            await self._reply(update, replies.THRESHOLD_REMOVED)
        else:
            await self._reply(update, replies.NO_THRESHOLD)

    async def rune(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        account = await self._accounts.get(user_id)
        if account is None:
            await self._reply(update, replies.NOT_REGISTERED_FOR_BALANCES)
            return
        try:
            balances = await self._balances.rune_balances(account.address)
        except UpstreamAPIError as e:
            self._logger.warning(
                "bot_rune_fetch_failed",
                user_id=user_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            await self._reply(update, replies.RUNE_FAILED)
            return
        await self._reply(update, self._styler.rune_balances(account.address, balances))

    async def brc20(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user_id = self._user_id(update)
        if user_id is None:
            return
        account = await self._accounts.get(user_id)
        if account is None:
            await self._reply(update, replies.NOT_REGISTERED_FOR_BALANCES)
            return
        try:
            balances = await self._balances.brc20_balances(account.address)
        except UpstreamAPIError as e:
            self._logger.warning(
                "bot_brc20_fetch_failed",
                user_id=user_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            await self._reply(update, replies.BRC20_FAILED)
            return
        await self._reply(update, self._styler.brc20_balances(account.address, balances))

    async def ordinals(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply(update, replies.ORDINALS_SOON)

    async def text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Free text: consumed by the user's awaiting state, ignored otherwise."""
        user_id = self._user_id(update)
        message = update.effective_message
        if user_id is None or message is None or message.text is None:
            return
        reply = await self._conversations.handle_text(user_id, message.text)
        if reply is not None:
            await self._reply(update, reply)
