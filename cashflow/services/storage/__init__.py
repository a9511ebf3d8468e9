"""
Storage Services Package

Provides abstract interfaces and in-memory implementations for snapshot
and audit storage. Real backends live with the application.
"""

from cashflow.services.storage.interface import (
    AuditStorageInterface,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from cashflow.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "TransactionStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryTransactionStorage",
]
