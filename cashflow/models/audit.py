"""
Audit Models for CashFlow Bookkeeper

Every change to the transaction snapshot is logged for audit purposes.
This provides:
1. Traceability of user corrections (category, business flag)
2. Debugging information for imports that classified badly
3. Ability to reconstruct how a BAS figure came about

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Snapshot changes
    TRANSACTIONS_IMPORTED = "transactions_imported"
    TRANSACTION_RECORDED = "transaction_recorded"
    TRANSACTION_RECATEGORIZED = "transaction_recategorized"
    BUSINESS_FLAG_CHANGED = "business_flag_changed"
    NOTES_UPDATED = "notes_updated"
    RECEIPT_ATTACHED = "receipt_attached"
    TRANSACTIONS_CLEARED = "transactions_cleared"

    # Review
    UNCATEGORIZED_DETECTED = "uncategorized_detected"

    # System events
    SYSTEM_ERROR = "system_error"


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
    Every snapshot change creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'snapshot')"
    )
    entity_id: Optional[UUID] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one statement import)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

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
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_record(self) -> list:
        """
        Convert to a flat row for append-only storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         correlation_id, description, details_json, error_message, is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            str(self.entity_id) if self.entity_id else "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details, default=str) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transactions_imported(5, 1, correlation_id)
        event = AuditEventBuilder.recategorized(txn_id, "personal_other", "office")
    """

    @staticmethod
    def transactions_imported(
        count: int,
        uncategorized: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_IMPORTED,
            entity_type="snapshot",
            correlation_id=correlation_id,
            description=f"Imported {count} transactions ({uncategorized} uncategorized)",
            details={
                "count": count,
                "uncategorized": uncategorized,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_recorded(
        transaction_id: UUID,
        category: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Manual entry recorded: {category} ${amount}",
            details={
                "category": category,
                "amount": amount,
            },
            is_user_action=True,
        )

    @staticmethod
    def recategorized(
        transaction_id: UUID,
        old_category: str,
        new_category: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECATEGORIZED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Category changed: {old_category} -> {new_category}",
            details={
                "old_category": old_category,
                "new_category": new_category,
            },
            is_user_action=True,
        )

    @staticmethod
    def business_flag_changed(
        transaction_id: UUID,
        is_business: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUSINESS_FLAG_CHANGED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Marked as {'business' if is_business else 'personal'}",
            details={
                "is_business": is_business,
            },
            is_user_action=True,
        )

    @staticmethod
    def notes_updated(
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTES_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Transaction notes updated",
            is_user_action=True,
        )

    @staticmethod
    def receipt_attached(
        transaction_id: UUID,
        receipt_ref: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECEIPT_ATTACHED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Receipt attached" if receipt_ref else "Receipt removed",
            details={
                "receipt_ref": receipt_ref,
            },
            is_user_action=True,
        )

    @staticmethod
    def transactions_cleared(
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_CLEARED,
            severity=AuditSeverity.WARNING,
            entity_type="snapshot",
            correlation_id=correlation_id,
            description=f"Cleared {count} transactions",
            details={
                "count": count,
            },
            is_user_action=True,
        )

    @staticmethod
    def uncategorized_detected(
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNCATEGORIZED_DETECTED,
            severity=AuditSeverity.WARNING,
            entity_type="snapshot",
            correlation_id=correlation_id,
            description=f"{count} transactions need a category",
            details={
                "count": count,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
