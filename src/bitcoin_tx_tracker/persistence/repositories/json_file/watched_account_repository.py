# -*- coding: utf-8 -*-
"""JSON-file watched account repository.

The whole registry is kept in memory and rewritten to disk after every
mutation. The in-memory copy is authoritative: a failed write is logged and
the process keeps running with the new state (it may be lost on restart).
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import structlog

from bitcoin_tx_tracker.models.watched_account import WatchedAccount
from bitcoin_tx_tracker.persistence.repositories.interfaces.watched_account_repository import (
    IWatchedAccountRepository,
)


class JsonFileWatchedAccountRepository(IWatchedAccountRepository):
    """IWatchedAccountRepository backed by a JSON object {user_id: account}."""

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Load the registry from path (missing file means empty).

        Args:
            path: JSON file location.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._store: dict[int, WatchedAccount] = self._load()

    def _load(self) -> dict[int, WatchedAccount]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._logger.error(
                "accounts_file_unreadable",
                accounts_file=str(self._path),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return {}
        if not isinstance(raw, dict):
            self._logger.error("accounts_file_not_an_object", accounts_file=str(self._path))
            return {}

        store: dict[int, WatchedAccount] = {}
        for key, data in cast(dict[str, Any], raw).items():
            try:
                user_id = int(key)
                store[user_id] = WatchedAccount.from_dict(user_id, cast(dict[str, Any], data))
            except (KeyError, TypeError, ValueError) as e:
                self._logger.warning(
                    "accounts_file_entry_skipped",
                    accounts_file_key=key,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        self._logger.info(
            "accounts_file_loaded",
            accounts_file=str(self._path),
            accounts_count=len(store),
        )
        return store

    def _flush(self) -> None:
        """Atomically rewrite the file (temp file + os.replace). Failures are logged, not raised."""
        payload = {str(user_id): account.to_dict() for user_id, account in self._store.items()}
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as e:
            self._logger.error(
                "accounts_file_write_failed",
                accounts_file=str(self._path),
                error_type=type(e).__name__,
                error_message=str(e),
            )
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    async def get(self, user_id: int) -> WatchedAccount | None:
        return self._store.get(user_id)

    async def save(self, account: WatchedAccount) -> None:
        self._store[account.user_id] = account
        self._flush()

    async def delete(self, user_id: int) -> bool:
        if self._store.pop(user_id, None) is None:
            return False
        self._flush()
        return True

    async def list_all(self) -> list[WatchedAccount]:
        return list(self._store.values())
