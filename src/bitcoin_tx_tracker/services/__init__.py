# -*- coding: utf-8 -*-
"""Application services."""

from bitcoin_tx_tracker.services.accounts import AccountService
from bitcoin_tx_tracker.services.balances import TokenBalanceService
from bitcoin_tx_tracker.services.conversation import ConversationService
from bitcoin_tx_tracker.services.fee_alerts import FeeAlertService, should_alert
from bitcoin_tx_tracker.services.reconciliation import (
    NotificationIntent,
    ReconcileResult,
    ReconciliationEngine,
)
from bitcoin_tx_tracker.services.tracking import CycleOutcome, TrackingRunner, TransactionTracker
from bitcoin_tx_tracker.services.value_calculator import TransactionValue, compute_value, is_outgoing

__all__ = [
    "AccountService",
    "ConversationService",
    "CycleOutcome",
    "FeeAlertService",
    "NotificationIntent",
    "ReconcileResult",
    "ReconciliationEngine",
    "TokenBalanceService",
    "TrackingRunner",
    "TransactionTracker",
    "TransactionValue",
    "compute_value",
    "is_outgoing",
    "should_alert",
]
