"""Configuration package."""

from balance_book.config.settings import (
    DEFAULT_EXCHANGE_RATES,
    AppSettings,
    GeminiSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_EXCHANGE_RATES",
    "AppSettings",
    "GeminiSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
