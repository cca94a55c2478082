"""Notification derivation from inventory and invoices."""

from balance_book.alerts.deriver import (
    DEFAULT_DUE_SOON_WINDOW_DAYS,
    NotificationCenter,
    days_until_due,
    derive_notifications,
)

__all__ = [
    "DEFAULT_DUE_SOON_WINDOW_DAYS",
    "NotificationCenter",
    "days_until_due",
    "derive_notifications",
]
