"""
Centralized configuration with environment variable overrides.

Business details, storage location, reminder windows and the sync
webhook are configurable here. Nothing is hardcoded in store or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from suraksha.logging_context import install_run_id_filter

load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(run_id)s] [%(name)s] %(levelname)s: %(message)s"

WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Suraksha Service")
    default_country_code: str = os.getenv("DEFAULT_COUNTRY_CODE", "91")
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "Rs.")


@dataclass(frozen=True)
class StorageConfig:
    """Where the local record file lives and which keys it uses."""

    path: str = os.getenv("STORAGE_PATH", "suraksha_storage.json")
    data_key: str = os.getenv("STORAGE_DATA_KEY", "suraksha_service_data")
    init_key: str = os.getenv("STORAGE_INIT_KEY", "suraksha_initialized")


@dataclass(frozen=True)
class ScheduleConfig:
    """Reminder window and calendar conventions for analytics."""

    reminder_window_days: int = _safe_int("REMINDER_WINDOW_DAYS", "3")
    week_start: str = os.getenv("WEEK_START", "sunday")
    performance_months: int = _safe_int("PERFORMANCE_MONTHS", "6")

    @property
    def week_start_index(self) -> int:
        """Weekday index (Monday=0) the calendar week starts on."""
        return WEEKDAY_NAMES.index(self.week_start.strip().lower())


@dataclass(frozen=True)
class SyncConfig:
    """Remote automation webhook settings."""

    webhook_url: str = os.getenv("SYNC_WEBHOOK_URL", "")
    timeout_seconds: float = _safe_float("SYNC_TIMEOUT_SECONDS", "10.0")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.business.default_country_code.isdigit():
        raise ValueError(
            "DEFAULT_COUNTRY_CODE must contain digits only, "
            f"got {config.business.default_country_code!r}"
        )
    if config.schedule.reminder_window_days < 0:
        raise ValueError(
            f"REMINDER_WINDOW_DAYS must be >= 0, got {config.schedule.reminder_window_days}"
        )
    if config.schedule.week_start.strip().lower() not in WEEKDAY_NAMES:
        raise ValueError(
            f"WEEK_START must be a weekday name, got {config.schedule.week_start!r}"
        )
    if config.schedule.performance_months < 1:
        raise ValueError(
            f"PERFORMANCE_MONTHS must be >= 1, got {config.schedule.performance_months}"
        )
    if config.sync.timeout_seconds <= 0:
        raise ValueError(
            f"SYNC_TIMEOUT_SECONDS must be > 0, got {config.sync.timeout_seconds}"
        )
    if config.sync.webhook_url and not config.sync.webhook_url.startswith(
        ("http://", "https://")
    ):
        raise ValueError(
            f"SYNC_WEBHOOK_URL must be an http(s) URL, got {config.sync.webhook_url!r}"
        )
    if not config.storage.path:
        raise ValueError("STORAGE_PATH must not be empty")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.getLogger().handlers:
        install_run_id_filter(handler)
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
