"""
In-Memory Storage Implementation

Keeps records in process memory. Used by tests and by callers that
handle persistence themselves (e.g. a browser front end that writes
the records to local storage).

Transactions are held as to_record() dicts, not model instances, so a
load always goes through the same validation a real backend would.
"""

from typing import Sequence
from uuid import UUID

from pydantic import ValidationError

from cashflow.exceptions import CashflowError
from cashflow.models.audit import AuditEvent
from cashflow.models.transaction import Transaction
from cashflow.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Snapshot storage backed by a list of record dicts."""

    def __init__(self):
        self._records: list[dict] = []

    def save_snapshot(self, transactions: Sequence[Transaction]) -> bool:
        self._records = [txn.to_record() for txn in transactions]
        return True

    def load_snapshot(self) -> tuple[Transaction, ...]:
        try:
            return tuple(Transaction.from_record(record) for record in self._records)
        except (ValidationError, CashflowError) as e:
            raise StorageError(f"Stored transaction is invalid: {e}") from e

    def clear(self) -> bool:
        self._records = []
        return True

    @property
    def records(self) -> list[dict]:
        """Raw stored records (copies)."""
        return [dict(record) for record in self._records]


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log held in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    def get_events_by_entity(self, entity_type: str, entity_id: UUID) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
