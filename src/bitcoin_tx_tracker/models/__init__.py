# -*- coding: utf-8 -*-
"""Domain models."""

from bitcoin_tx_tracker.models.conversation import ConversationState, PendingInput
from bitcoin_tx_tracker.models.fee_levels import FeeLevels
from bitcoin_tx_tracker.models.raw_transaction import RawTransaction, TxInput, TxOutput
from bitcoin_tx_tracker.models.token_balance import Brc20Balance, RuneBalance
from bitcoin_tx_tracker.models.watched_account import PendingEntry, WatchedAccount

__all__ = [
    "Brc20Balance",
    "ConversationState",
    "FeeLevels",
    "PendingEntry",
    "PendingInput",
    "RawTransaction",
    "RuneBalance",
    "TxInput",
    "TxOutput",
    "WatchedAccount",
]
