"""
Notification Models

Notifications are DERIVED, never stored. They are recomputed from the
inventory and invoice collections and the whole set is replaced each time.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class NotificationSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class Notification(BaseModel):
    """
    A single alert shown in the notification tray.

    The id is stable per source record (e.g. "stock-p1", "inv-due-inv_001"),
    so read-state can be carried across recomputations.
    """

    id: str = Field(
        ...,
        description="Stable id derived from the source record"
    )
    title: str
    message: str
    severity: NotificationSeverity
    created_at: datetime
    read: bool = False
