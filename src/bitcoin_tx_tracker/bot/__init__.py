"""Telegram bot surface."""

from bitcoin_tx_tracker.bot.handlers import BotCommandHandlers

__all__ = ["BotCommandHandlers"]
