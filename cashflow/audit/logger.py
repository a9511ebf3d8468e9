"""
Audit Logger

DESIGN DECISION: Every change to the transaction snapshot is logged.
This provides:
1. Complete traceability of user corrections
2. Debugging capability when an import classifies badly
3. A history the user can review before lodging a BAS

The audit logger:
- Is synchronous; the bookkeeping core does no I/O of its own
- Gracefully handles storage failures (an edit is never lost because
  the audit write failed)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from cashflow.config import LoggingSettings, get_settings
from cashflow.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from cashflow.services.storage import AuditStorageInterface, StorageError


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    JSON lines by default; LOG_JSON_LOGS=false switches to console output.
    """
    settings = settings or get_settings().logging
    logging.basicConfig(format="%(message)s", level=settings.level)
    logging.getLogger().setLevel(settings.level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and user visibility)
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
        self._logger = structlog.get_logger("cashflow.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except StorageError as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transactions_imported(
        self,
        count: int,
        uncategorized: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a statement import."""
        self.log(AuditEventBuilder.transactions_imported(
            count=count,
            uncategorized=uncategorized,
            correlation_id=correlation_id,
        ))

    def log_transaction_recorded(
        self,
        transaction_id: UUID,
        category: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a manual entry."""
        self.log(AuditEventBuilder.transaction_recorded(
            transaction_id=transaction_id,
            category=category,
            amount=amount,
            correlation_id=correlation_id,
        ))

    def log_recategorized(
        self,
        transaction_id: UUID,
        old_category: str,
        new_category: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.recategorized(
            transaction_id=transaction_id,
            old_category=old_category,
            new_category=new_category,
            correlation_id=correlation_id,
        ))

    def log_business_flag_changed(
        self,
        transaction_id: UUID,
        is_business: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.business_flag_changed(
            transaction_id=transaction_id,
            is_business=is_business,
            correlation_id=correlation_id,
        ))

    def log_notes_updated(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.notes_updated(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        ))

    def log_transactions_cleared(
        self,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.transactions_cleared(
            count=count,
            correlation_id=correlation_id,
        ))

    def log_receipt_attached(
        self,
        transaction_id: UUID,
        receipt_ref: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.receipt_attached(
            transaction_id=transaction_id,
            receipt_ref=receipt_ref,
            correlation_id=correlation_id,
        ))

    def log_uncategorized_detected(
        self,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log that some transactions fell back to a catch-all category."""
        self.log(AuditEventBuilder.uncategorized_detected(
            count=count,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g., a statement import).
    Pass it through all subsequent operations.
    """
    return uuid4()
