# -*- coding: utf-8 -*-
"""Unit tests for RawTransaction parsing."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from bitcoin_tx_tracker.models.raw_transaction import RawTransaction


def test_from_response_reads_status_inputs_and_outputs(
    tx_factory: Callable[..., dict[str, Any]],
    address: str,
    other_address: str,
) -> None:
    tx = RawTransaction.from_response(tx_factory("abc", confirmed=True, block_time=1_700_000_000, value=1234))

    assert tx.txid == "abc"
    assert tx.confirmed is True
    assert tx.block_time == 1_700_000_000
    assert tx.inputs[0].address == other_address
    assert tx.inputs[0].value == 1234
    assert tx.outputs[0].address == address
    assert tx.outputs[0].value == 1234


def test_unconfirmed_has_no_block_time(tx_factory: Callable[..., dict[str, Any]]) -> None:
    raw = tx_factory("abc", confirmed=False)
    raw["status"]["block_time"] = 123

    tx = RawTransaction.from_response(raw)

    assert tx.confirmed is False
    assert tx.block_time is None


def test_coinbase_input_and_addressless_output_degrade() -> None:
    tx = RawTransaction.from_response(
        {
            "txid": "coinbase",
            "status": {"confirmed": True, "block_time": 10},
            "vin": [{"is_coinbase": True, "prevout": None}],
            "vout": [{"scriptpubkey_type": "op_return", "value": 0}, "garbage"],
        }
    )

    assert [(i.address, i.value) for i in tx.inputs] == [(None, 0)]
    assert [(o.address, o.value) for o in tx.outputs] == [(None, 0)]


def test_missing_txid_is_rejected() -> None:
    with pytest.raises(ValueError):
        RawTransaction.from_response({"status": {"confirmed": False}})


def test_missing_status_means_unconfirmed() -> None:
    tx = RawTransaction.from_response({"txid": "x"})

    assert tx.confirmed is False
    assert tx.inputs == () and tx.outputs == ()
