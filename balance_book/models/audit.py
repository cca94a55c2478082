"""
Audit Models for Balance Book

Every significant action in the system is logged for audit purposes:
ledger changes, preference changes, advisor questions, receipt scans
and failures of the external AI service.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Ledger changes
    RECORD_ADDED = "record_added"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    COLLECTION_REPLACED = "collection_replaced"
    LEDGER_RESET = "ledger_reset"

    # Alerts
    NOTIFICATIONS_RECOMPUTED = "notifications_recomputed"

    # Preferences
    PREFERENCE_CHANGED = "preference_changed"

    # Advisor
    ADVISOR_QUESTION_RECEIVED = "advisor_question_received"
    ADVISOR_RESPONSE_GENERATED = "advisor_response_generated"

    # Receipt scanning
    RECEIPT_SCAN_COMPLETED = "receipt_scan_completed"
    RECEIPT_SCAN_EMPTY = "receipt_scan_empty"

    # System events
    SYSTEM_ERROR = "system_error"
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'invoice', 'transactions', 'advisor')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the record this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one advisor turn)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_added("invoices", "inv_001")
        event = AuditEventBuilder.advisor_question(question, correlation_id)
    """

    @staticmethod
    def record_added(collection: str, record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_ADDED,
            entity_type=collection,
            entity_id=record_id,
            description=f"Record added to {collection}",
            is_user_action=True,
        )

    @staticmethod
    def record_updated(
        collection: str,
        record_id: str,
        changes: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_UPDATED,
            entity_type=collection,
            entity_id=record_id,
            description=f"Record updated in {collection}",
            details=changes or {},
            is_user_action=True,
        )

    @staticmethod
    def record_deleted(collection: str, record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            severity=AuditSeverity.WARNING,
            entity_type=collection,
            entity_id=record_id,
            description=f"Record deleted from {collection}",
            is_user_action=True,
        )

    @staticmethod
    def collection_replaced(collection: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_REPLACED,
            entity_type=collection,
            description=f"{collection} replaced with {record_count} records",
            details={"record_count": record_count},
        )

    @staticmethod
    def ledger_reset(collection: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_RESET,
            severity=AuditSeverity.WARNING,
            entity_type=collection,
            description=f"{collection} reverted to the demo dataset",
            is_user_action=True,
        )

    @staticmethod
    def notifications_recomputed(total: int, unread: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATIONS_RECOMPUTED,
            severity=AuditSeverity.DEBUG,
            entity_type="notifications",
            description=f"Notifications recomputed: {total} active, {unread} unread",
            details={"total": total, "unread": unread},
        )

    @staticmethod
    def preference_changed(key: str, value: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PREFERENCE_CHANGED,
            entity_type="preference",
            entity_id=key,
            description=f"Preference {key} set to {value}",
            details={"key": key, "value": value},
            is_user_action=True,
        )

    @staticmethod
    def advisor_question(
        question: str,
        correlation_id: UUID,
        has_attachment: bool = False,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVISOR_QUESTION_RECEIVED,
            entity_type="advisor",
            correlation_id=correlation_id,
            description="Advisor question received",
            details={
                "question_length": len(question),
                "has_attachment": has_attachment,
            },
            is_user_action=True,
        )

    @staticmethod
    def advisor_response(response_length: int, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ADVISOR_RESPONSE_GENERATED,
            entity_type="advisor",
            correlation_id=correlation_id,
            description="Advisor response generated",
            details={"response_length": response_length},
        )

    @staticmethod
    def receipt_scanned(
        correlation_id: UUID,
        fields_found: list[str],
    ) -> AuditEvent:
        if not fields_found:
            return AuditEvent(
                event_type=AuditEventType.RECEIPT_SCAN_EMPTY,
                severity=AuditSeverity.WARNING,
                entity_type="receipt",
                correlation_id=correlation_id,
                description="Receipt scan returned no usable data",
                is_user_action=True,
            )
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_SCAN_COMPLETED,
            entity_type="receipt",
            correlation_id=correlation_id,
            description=f"Receipt scan extracted {len(fields_found)} fields",
            details={"fields": fields_found},
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXTERNAL_SERVICE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
