"""Fee alert services."""

from bitcoin_tx_tracker.services.fee_alerts.fee_alert_service import FeeAlertService, should_alert

__all__ = ["FeeAlertService", "should_alert"]
