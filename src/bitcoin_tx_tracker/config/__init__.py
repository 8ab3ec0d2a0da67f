"""Configuration subpackage."""

from bitcoin_tx_tracker.config.config import (
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    PersistenceSettings,
    Settings,
    TelegramSettings,
    TrackingSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "PersistenceSettings",
    "Settings",
    "TelegramSettings",
    "TrackingSettings",
    "get_settings",
]
