# -*- coding: utf-8 -*-
"""Unit tests for JsonFileWatchedAccountRepository."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from bitcoin_tx_tracker.models.watched_account import PendingEntry, WatchedAccount
from bitcoin_tx_tracker.persistence.repositories.json_file import JsonFileWatchedAccountRepository


async def test_saved_accounts_survive_a_restart(
    tmp_path: Path,
    account_factory: Callable[..., WatchedAccount],
) -> None:
    path = tmp_path / "users.json"
    account = account_factory(
        user_id=10,
        cursor=1_700_000_000,
        fee_threshold=7,
        pending={"t1": PendingEntry(message_id=3, text="⏳ *Pending*")},
    )
    await JsonFileWatchedAccountRepository(path).save(account)

    reloaded = JsonFileWatchedAccountRepository(path)

    assert await reloaded.get(10) == account


async def test_file_layout_is_keyed_by_user_id(
    tmp_path: Path,
    account_factory: Callable[..., WatchedAccount],
    address: str,
) -> None:
    path = tmp_path / "users.json"
    await JsonFileWatchedAccountRepository(path).save(account_factory(user_id=10, cursor=5))

    data = json.loads(path.read_text(encoding="utf-8"))

    assert data == {"10": {"address": address, "cursor": 5, "pending": {}, "fee_threshold": None}}


async def test_delete_is_persisted(tmp_path: Path, account_factory: Callable[..., WatchedAccount]) -> None:
    path = tmp_path / "users.json"
    repo = JsonFileWatchedAccountRepository(path)
    await repo.save(account_factory(user_id=1))
    await repo.save(account_factory(user_id=2))

    assert await repo.delete(1) is True
    assert await repo.delete(1) is False

    reloaded = JsonFileWatchedAccountRepository(path)
    assert [a.user_id for a in await reloaded.list_all()] == [2]


async def test_missing_file_starts_empty(tmp_path: Path) -> None:
    repo = JsonFileWatchedAccountRepository(tmp_path / "nope" / "users.json")

    assert await repo.list_all() == []


async def test_corrupt_file_starts_empty(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")

    assert await JsonFileWatchedAccountRepository(path).list_all() == []


async def test_bad_entries_are_skipped(tmp_path: Path, address: str) -> None:
    path = tmp_path / "users.json"
    path.write_text(
        json.dumps(
            {
                "1": {"address": address, "cursor": 10, "pending": {}, "fee_threshold": None},
                "2": {"cursor": 10},
                "abc": {"address": address, "cursor": 10},
            }
        ),
        encoding="utf-8",
    )

    accounts = await JsonFileWatchedAccountRepository(path).list_all()

    assert [a.user_id for a in accounts] == [1]
