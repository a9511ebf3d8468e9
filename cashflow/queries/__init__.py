"""Transaction query package."""

from cashflow.queries.filters import (
    TransactionFilter,
    TransactionView,
    filter_transactions,
)

__all__ = ["TransactionFilter", "TransactionView", "filter_transactions"]
