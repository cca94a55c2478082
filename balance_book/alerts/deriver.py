"""
Alert Deriver

Scans inventory and invoices and produces the notification tray contents.

RULES (evaluated fresh on every call):
1. Product with stock <= low_stock_threshold -> warning "Low Stock Alert"
2. Invoice with status Overdue -> danger "Overdue Invoice",
   timestamped at the invoice's due date
3. Invoice with status Unpaid due within the window (0..3 days by default)
   -> warning "Payment Due Soon"
4. Paid invoices never alert

NOTE: An Unpaid invoice whose due date has already passed does NOT alert
under rule 3. Only flipping its status to Overdue raises the danger alert.

derive_notifications() is pure: "today" is the as_of argument, never the clock.
"""

from datetime import date, datetime, time
from typing import Callable, Iterable, Optional, Union

import structlog

from balance_book.models.ledger import Invoice, InvoiceStatus, Product
from balance_book.models.notification import Notification, NotificationSeverity
from balance_book.services.storage.interface import Collection, LedgerChange


logger = structlog.get_logger(__name__)

DEFAULT_DUE_SOON_WINDOW_DAYS = 3

_ALERT_COLLECTIONS = {Collection.INVENTORY, Collection.INVOICES}


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def low_stock_notification(product: Product, as_of: datetime) -> Notification:
    return Notification(
        id=f"stock-{product.id}",
        title="Low Stock Alert",
        message=f"{product.name} is running low ({product.stock} remaining).",
        severity=NotificationSeverity.WARNING,
        created_at=as_of,
    )


def overdue_notification(invoice: Invoice) -> Notification:
    return Notification(
        id=f"inv-{invoice.id}",
        title="Overdue Invoice",
        message=(
            f"Invoice #{invoice.invoice_number} for {invoice.customer_name} is overdue."
        ),
        severity=NotificationSeverity.DANGER,
        created_at=_as_datetime(invoice.due_date),
    )


def due_soon_notification(
    invoice: Invoice,
    days_left: int,
    as_of: datetime,
) -> Notification:
    when = "today" if days_left == 0 else f"in {days_left} days"
    return Notification(
        id=f"inv-due-{invoice.id}",
        title="Payment Due Soon",
        message=f"Invoice #{invoice.invoice_number} is due {when}.",
        severity=NotificationSeverity.WARNING,
        created_at=as_of,
    )


def days_until_due(invoice: Invoice, as_of: Union[date, datetime]) -> int:
    """
    Whole days from as_of to the due date, both taken at midnight.

    Negative when the due date has passed.
    """
    return (invoice.due_date - _as_date(as_of)).days


def derive_notifications(
    products: Iterable[Product],
    invoices: Iterable[Invoice],
    as_of: Union[date, datetime],
    due_soon_window_days: int = DEFAULT_DUE_SOON_WINDOW_DAYS,
) -> list[Notification]:
    """
    Build the full notification list for the given inventory and invoices.

    Ordering is products first, then invoices, each in input order;
    callers should not rely on it.
    """
    created_at = _as_datetime(as_of)
    notifications: list[Notification] = []

    for product in products:
        if product.is_low_stock:
            notifications.append(low_stock_notification(product, created_at))

    for invoice in invoices:
        if invoice.status == InvoiceStatus.OVERDUE:
            notifications.append(overdue_notification(invoice))
        elif invoice.status == InvoiceStatus.UNPAID:
            days_left = days_until_due(invoice, as_of)
            if 0 <= days_left <= due_soon_window_days:
                notifications.append(
                    due_soon_notification(invoice, days_left, created_at)
                )

    return notifications


class NotificationCenter:
    """
    Holds the current notification set for the UI.

    The set is recomputed WHOLESALE whenever inventory or invoices change;
    there is no incremental patching. Read-state is the one thing carried
    over: it is kept by notification id, and ids whose condition has
    cleared are dropped from it.
    """

    def __init__(
        self,
        products: Callable[[], Iterable[Product]],
        invoices: Callable[[], Iterable[Invoice]],
        due_soon_window_days: int = DEFAULT_DUE_SOON_WINDOW_DAYS,
        clock: Callable[[], datetime] = datetime.now,
        on_recompute: Optional[Callable[[int, int], None]] = None,
    ):
        """
        Args:
            products: Returns the current inventory snapshot
            invoices: Returns the current invoice snapshot
            due_soon_window_days: Upper bound for the "due soon" rule
            clock: Supplies "now" when refresh() is called without as_of
            on_recompute: Called with (total, unread) after each recompute
        """
        self._products = products
        self._invoices = invoices
        self._window = due_soon_window_days
        self._clock = clock
        self._on_recompute = on_recompute
        self._notifications: list[Notification] = []
        self._read_ids: set[str] = set()

    def refresh(self, as_of: Optional[Union[date, datetime]] = None) -> list[Notification]:
        """Recompute the whole set and return it."""
        derived = derive_notifications(
            self._products(),
            self._invoices(),
            as_of if as_of is not None else self._clock(),
            due_soon_window_days=self._window,
        )
        active_ids = {n.id for n in derived}
        self._read_ids &= active_ids
        self._notifications = [
            n.model_copy(update={"read": n.id in self._read_ids}) for n in derived
        ]

        logger.debug(
            "notifications_recomputed",
            total=len(self._notifications),
            unread=self.unread_count,
        )
        if self._on_recompute:
            self._on_recompute(len(self._notifications), self.unread_count)
        return self.notifications

    def handle_ledger_change(self, change: LedgerChange) -> None:
        """Ledger Store listener: recompute when inventory or invoices change."""
        if change.collection in _ALERT_COLLECTIONS:
            self.refresh()

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def mark_read(self, notification_id: str) -> bool:
        """
        Mark one notification read.

        Returns False if no active notification has that id.
        """
        for index, notification in enumerate(self._notifications):
            if notification.id == notification_id:
                self._read_ids.add(notification_id)
                self._notifications[index] = notification.model_copy(update={"read": True})
                return True
        return False

    def mark_all_read(self) -> None:
        self._read_ids = {n.id for n in self._notifications}
        self._notifications = [
            n.model_copy(update={"read": True}) for n in self._notifications
        ]
