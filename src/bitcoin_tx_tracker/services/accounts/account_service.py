"""User registry operations behind the bot commands."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog

from bitcoin_tx_tracker.exceptions import AlreadyRegisteredError, NotRegisteredError
from bitcoin_tx_tracker.models.watched_account import WatchedAccount
from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
    IWatchedAccountRepository,
)
from bitcoin_tx_tracker.utils.locks import KeyedLocks
from bitcoin_tx_tracker.utils.validation import mask_address, parse_address


class AccountService:
    """Register, edit and unregister watched addresses; manage fee thresholds.

    Every mutation runs under the user's lock (shared with the transaction
    tracker) so a command never overwrites a cursor or pending set that a
    concurrent reconciliation cycle is about to persist, and vice versa.
    """

    def __init__(
        self,
        repository: IWatchedAccountRepository,
        locks: KeyedLocks,
        *,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: User registry (injected).
            locks: Per-user locks shared with the tracker.
            clock: Current unix time (injected for tests); new accounts start their cursor here.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = repository
        self._locks = locks
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get(self, user_id: int) -> WatchedAccount | None:
        return await self._repo.get(user_id)

    async def is_registered(self, user_id: int) -> bool:
        return await self._repo.get(user_id) is not None

    async def register(self, user_id: int, address: str) -> WatchedAccount:
        """Create the account of user_id watching address from now on.

        Raises:
            InvalidAddressError: If address is not accepted.
            AlreadyRegisteredError: If the user already has an account.
        """
        address = parse_address(address)
        async with self._locks.hold(user_id):
            if await self._repo.get(user_id) is not None:
                raise AlreadyRegisteredError(f"user {user_id} is already registered")
            account = WatchedAccount.create(user_id, address, now=self._clock())
            await self._repo.save(account)
        self._logger.info(
            "account_registered",
            user_id=user_id,
            address_masked=mask_address(address),
            cursor=account.cursor,
        )
        return account

    async def change_address(self, user_id: int, address: str) -> WatchedAccount:
        """Point the account at another address.

        Raises:
            InvalidAddressError: If address is not accepted.
            NotRegisteredError: If the user has no account.
        """
        address = parse_address(address)
        async with self._locks.hold(user_id):
            account = await self._repo.get(user_id)
            if account is None:
                raise NotRegisteredError(f"user {user_id} is not registered")
            updated = account.with_address(address)
            await self._repo.save(updated)
        self._logger.info(
            "account_address_changed",
            user_id=user_id,
            address_masked=mask_address(address),
            dropped_pending_count=len(account.pending),
        )
        return updated

    async def unregister(self, user_id: int) -> bool:
        """Delete the account. Returns False (and changes nothing) if there was none."""
        async with self._locks.hold(user_id):
            deleted = await self._repo.delete(user_id)
        if deleted:
            self._logger.info("account_unregistered", user_id=user_id)
        else:
            self._logger.warning("account_unregister_not_registered", user_id=user_id)
        return deleted

    async def set_fee_threshold(self, user_id: int, threshold: int) -> WatchedAccount:
        """Set the fee alert threshold (sat/vB).

        Raises:
            NotRegisteredError: If the user has no account.
        """
        async with self._locks.hold(user_id):
            account = await self._repo.get(user_id)
            if account is None:
                raise NotRegisteredError(f"user {user_id} is not registered")
            updated = account.with_fee_threshold(threshold)
            await self._repo.save(updated)
        self._logger.info("account_fee_threshold_set", user_id=user_id, fee_threshold=threshold)
        return updated

    async def remove_fee_threshold(self, user_id: int) -> bool:
        """Remove the fee alert threshold. Returns False if none was set."""
        async with self._locks.hold(user_id):
            account = await self._repo.get(user_id)
            if account is None or account.fee_threshold is None:
                return False
            await self._repo.save(account.with_fee_threshold(None))
        self._logger.info("account_fee_threshold_removed", user_id=user_id)
        return True
