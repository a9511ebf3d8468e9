"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the bookkeeping core free of file and network I/O
2. Use in-memory storage for testing
3. Swap in browser storage, a file or a database without touching logic

Transactions are saved as whole snapshots because every edit produces a
new snapshot anyway. Records use the Transaction.to_record() shape.
"""

from abc import ABC, abstractmethod
from typing import Sequence
from uuid import UUID

from cashflow.models.audit import AuditEvent
from cashflow.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction snapshot storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def save_snapshot(self, transactions: Sequence[Transaction]) -> bool:
        """
        Replace the stored snapshot.

        Args:
            transactions: The full current snapshot

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    def load_snapshot(self) -> tuple[Transaction, ...]:
        """
        Load the stored snapshot.

        Returns:
            The stored transactions, empty if nothing was saved
        """
        pass

    @abstractmethod
    def clear(self) -> bool:
        """
        Remove the stored snapshot.

        Returns:
            True if cleared successfully
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one statement import).

        Args:
            correlation_id: The correlation identifier

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'transaction')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
