# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TELEGRAM__BOT_TOKEN.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "bitcoin-tx-tracker"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/bitcoin_tx_tracker.log"
    # Rotated at UTC midnight; daily files to keep
    log_file_backup_count: int = 30

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the mempool.space and UniSat HTTP APIs."""

    model_config = SettingsConfigDict(extra="ignore")

    mempool_host: str = Field(
        default="https://mempool.space",
        description="mempool.space REST API base URL (transactions, prices, fees).",
    )
    explorer_host: str = Field(
        default="https://mempool.space",
        description="Block explorer base URL used for links in notifications.",
    )
    unisat_host: str = Field(
        default="https://open-api.unisat.io",
        description="UniSat open API base URL (Runes and BRC-20 balances).",
    )
    unisat_market_host: str = Field(
        default="https://unisat.io",
        description="UniSat market base URL used for token links.",
    )
    unisat_api_key: Optional[str] = Field(default=None, description="UniSat API key (Bearer).")
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum number of attempts for failed requests.",
    )


class TelegramSettings(BaseSettings):
    """Telegram bot (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    bot_token: Optional[str] = Field(default=None, description="Telegram bot API token.")
    max_retries: int = Field(default=3, ge=1, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings (development without Telegram)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False


class TrackingSettings(BaseSettings):
    """Configuration for the polling loops and interactive input timeouts."""

    model_config = SettingsConfigDict(extra="ignore")

    poll_seconds: float = Field(
        default=60.0,
        ge=1.0,
        le=3600.0,
        description="Interval between transaction reconciliation cycles.",
    )
    fee_poll_seconds: float = Field(
        default=300.0,
        ge=1.0,
        le=86400.0,
        description="Interval between fee threshold checks.",
    )
    sweep_seconds: float = Field(
        default=5.0,
        ge=0.1,
        le=60.0,
        description="Interval between expired-input sweeps.",
    )
    input_timeout_seconds: float = Field(
        default=120.0,
        ge=1.0,
        le=3600.0,
        description="How long an interactive command waits for the user's reply.",
    )
    user_cycle_timeout_seconds: float = Field(
        default=45.0,
        ge=1.0,
        le=600.0,
        description="Upper bound for one user's reconciliation cycle.",
    )
    price_cache_ttl_seconds: float = Field(
        default=30.0,
        ge=0.0,
        le=3600.0,
        description="How long a fetched BTC/USD price is reused.",
    )


class PersistenceSettings(BaseSettings):
    """Where registered accounts are stored."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["json", "memory"] = "json"
    users_file: str = "users.json"


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__UNISAT_API_KEY.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    persistence: PersistenceSettings = Field(default_factory=PersistenceSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(api__timeout_seconds=30)
        - from_env(tracking={"poll_seconds": 30})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from bitcoin_tx_tracker.config import get_settings

        settings = get_settings()
        poll_seconds = settings.tracking.poll_seconds
    """
    return Settings()
