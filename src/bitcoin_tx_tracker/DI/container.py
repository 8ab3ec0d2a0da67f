# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from bitcoin_tx_tracker.bot.handlers import BotCommandHandlers
from bitcoin_tx_tracker.clients.http import AsyncHttpClient
from bitcoin_tx_tracker.clients.mempool import MempoolApiClient
from bitcoin_tx_tracker.clients.price_cache import PriceCache
from bitcoin_tx_tracker.clients.unisat import UnisatApiClient
from bitcoin_tx_tracker.config import Settings, get_settings
from bitcoin_tx_tracker.notifications.strategies.base import BaseNotificationStrategy
from bitcoin_tx_tracker.notifications.strategies.console import ConsoleNotifier
from bitcoin_tx_tracker.notifications.strategies.telegram import TelegramNotifier
from bitcoin_tx_tracker.notifications.stylers.message_styler import MessageStyler
from bitcoin_tx_tracker.persistence.repositories.in_memory import InMemoryWatchedAccountRepository
from bitcoin_tx_tracker.persistence.repositories.interfaces import IWatchedAccountRepository
from bitcoin_tx_tracker.persistence.repositories.json_file import JsonFileWatchedAccountRepository
from bitcoin_tx_tracker.services.accounts import AccountService
from bitcoin_tx_tracker.services.balances import TokenBalanceService
from bitcoin_tx_tracker.services.conversation import ConversationService
from bitcoin_tx_tracker.services.fee_alerts import FeeAlertService
from bitcoin_tx_tracker.services.reconciliation import ReconciliationEngine
from bitcoin_tx_tracker.services.tracking import TrackingRunner, TransactionTracker
from bitcoin_tx_tracker.utils.locks import KeyedLocks


def _build_repository(settings: Settings) -> IWatchedAccountRepository:
    """Pick the user registry backend from settings.persistence."""
    if settings.persistence.backend == "memory":
        return InMemoryWatchedAccountRepository()
    return JsonFileWatchedAccountRepository(settings.persistence.users_file)


def _build_notifier(settings: Settings) -> BaseNotificationStrategy:
    """Telegram when enabled; otherwise print to the console."""
    if settings.telegram.enabled:
        return TelegramNotifier(settings=settings)
    return ConsoleNotifier(settings=settings)


def _build_styler(settings: Settings) -> MessageStyler:
    return MessageStyler(
        explorer_host=settings.api.explorer_host,
        unisat_market_host=settings.api.unisat_market_host,
    )


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, API clients, registry, notifier and services."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    mempool_client = providers.Singleton(
        MempoolApiClient,
        http_client=http_client,
        settings=config,
    )

    unisat_client = providers.Singleton(
        UnisatApiClient,
        http_client=http_client,
        settings=config,
    )

    price_cache = providers.Singleton(
        PriceCache,
        mempool_client=mempool_client,
        ttl_seconds=providers.Callable(lambda s: s.tracking.price_cache_ttl_seconds, config),
    )

    account_repository = providers.Singleton(_build_repository, config)

    user_locks = providers.Singleton(KeyedLocks)

    notifier = providers.Singleton(_build_notifier, config)

    message_styler = providers.Singleton(_build_styler, config)

    reconciliation_engine = providers.Singleton(
        ReconciliationEngine,
        styler=message_styler,
    )

    account_service = providers.Singleton(
        AccountService,
        repository=account_repository,
        locks=user_locks,
    )

    conversation_service = providers.Singleton(
        ConversationService,
        account_service=account_service,
        notifier=notifier,
        timeout_seconds=providers.Callable(lambda s: s.tracking.input_timeout_seconds, config),
    )

    fee_alert_service = providers.Singleton(
        FeeAlertService,
        repository=account_repository,
        mempool_client=mempool_client,
        notifier=notifier,
        styler=message_styler,
    )

    token_balance_service = providers.Singleton(
        TokenBalanceService,
        unisat_client=unisat_client,
    )

    transaction_tracker = providers.Singleton(
        TransactionTracker,
        repository=account_repository,
        mempool_client=mempool_client,
        price_cache=price_cache,
        engine=reconciliation_engine,
        notifier=notifier,
        locks=user_locks,
    )

    tracking_runner = providers.Singleton(
        TrackingRunner,
        tracker=transaction_tracker,
        fee_alerts=fee_alert_service,
        conversations=conversation_service,
        repository=account_repository,
        settings=config,
    )

    bot_handlers = providers.Singleton(
        BotCommandHandlers,
        accounts=account_service,
        conversations=conversation_service,
        fee_alerts=fee_alert_service,
        balances=token_balance_service,
        styler=message_styler,
        notifier=notifier,
    )
