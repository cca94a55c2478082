"""
Audit Logger

DESIGN DECISION: Every significant action in the system is logged.
This provides:
1. Complete traceability of ledger changes
2. Debugging capability for the AI gateway
3. A history the user can inspect

The audit logger:
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from balance_book.models.audit import AuditEvent, AuditEventBuilder
from balance_book.services.storage.interface import (
    AuditStorageInterface,
    ChangeAction,
    LedgerChange,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("balance_book.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_ledger_change(self, change: LedgerChange) -> None:
        """Ledger Store listener: one audit event per change."""
        collection = change.collection.value
        if change.action == ChangeAction.ADDED:
            event = AuditEventBuilder.record_added(collection, change.record_id or "")
        elif change.action == ChangeAction.UPDATED:
            event = AuditEventBuilder.record_updated(collection, change.record_id or "")
        elif change.action == ChangeAction.DELETED:
            event = AuditEventBuilder.record_deleted(collection, change.record_id or "")
        elif change.action == ChangeAction.RESET:
            event = AuditEventBuilder.ledger_reset(collection)
        else:
            event = AuditEventBuilder.collection_replaced(
                collection, change.record_count or 0
            )
        self.log(event)

    def log_notifications_recomputed(self, total: int, unread: int) -> None:
        self.log(AuditEventBuilder.notifications_recomputed(total, unread))

    def log_preference_changed(self, key: str, value: str) -> None:
        self.log(AuditEventBuilder.preference_changed(key, value))

    def log_advisor_question(
        self,
        question: str,
        correlation_id: UUID,
        has_attachment: bool = False,
    ) -> None:
        self.log(AuditEventBuilder.advisor_question(
            question=question,
            correlation_id=correlation_id,
            has_attachment=has_attachment,
        ))

    def log_advisor_response(self, response: str, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.advisor_response(len(response), correlation_id))

    def log_receipt_scanned(
        self,
        fields_found: list[str],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.receipt_scanned(correlation_id, fields_found))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        event = AuditEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., an advisor question).
    Pass it through all subsequent operations.
    """
    return uuid4()
