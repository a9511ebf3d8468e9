"""
Exceptions shared across the bookkeeping core.

Only contract violations raise. Unrecognised business data (a description
no keyword matches, a zero amount) is absorbed by the catch-all categories
and surfaced through the uncategorised count instead.
"""

from typing import Any, Optional


class CashflowError(Exception):
    """Base exception for all bookkeeping errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogError(CashflowError):
    """Raised when the category table is malformed."""
    pass


class UnknownCategoryError(CatalogError):
    """
    A category key is not present in the namespace it was looked up in.

    The classifier only ever returns keys from the catalog, so this means a
    caller passed a key it made up. It is never caught inside the core.
    """

    def __init__(self, direction: str, key: str):
        super().__init__(
            f"Unknown {direction} category: {key!r}",
            details={"direction": direction, "category": key},
        )
        self.direction = direction
        self.key = key


class TransactionNotFoundError(CashflowError):
    """Raised when an edit targets a transaction id not in the snapshot."""
    pass
