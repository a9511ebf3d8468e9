"""
Transaction Filtering

DESIGN DECISION: Filtering is DETERMINISTIC and read-only.
The transactions screen builds a TransactionFilter from its controls and
this module applies it to the current snapshot. Nothing here edits or
reorders transactions.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cashflow.catalog import CATCH_ALL_KEYS, CategoryCatalog, get_catalog
from cashflow.models.transaction import Transaction


class TransactionView(str, Enum):
    """Which slice of the snapshot to show."""
    ALL = "all"
    BUSINESS = "business"
    PERSONAL = "personal"
    UNCATEGORIZED = "uncategorized"


class TransactionFilter(BaseModel):
    """
    Filters from the transactions screen. Every field is optional and
    filters combine with AND.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    view: TransactionView = TransactionView.ALL
    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive match on description, category label or notes"
    )
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None
    amount_min: Optional[Decimal] = Field(default=None, ge=0)
    amount_max: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode='after')
    def validate_ranges(self) -> 'TransactionFilter':
        """Validate range bounds."""
        if self.date_from and self.date_to and self.date_to < self.date_from:
            raise ValueError("date_to cannot be before date_from")

        if (
            self.amount_min is not None
            and self.amount_max is not None
            and self.amount_max < self.amount_min
        ):
            raise ValueError("amount_max cannot be below amount_min")

        return self

    def describe(self) -> str:
        """Human-readable description of what is being listed."""
        if self.view == TransactionView.ALL:
            desc_parts = ["Listing transactions"]
        else:
            desc_parts = [f"Listing {self.view.value} transactions"]
        if self.search:
            desc_parts.append(f"matching: {self.search}")
        if self.date_from or self.date_to:
            desc_parts.append(_date_range_str(self.date_from, self.date_to))
        if self.amount_min is not None or self.amount_max is not None:
            desc_parts.append(_amount_range_str(self.amount_min, self.amount_max))
        return " | ".join(desc_parts)


def _date_range_str(date_from: Optional[dt.date], date_to: Optional[dt.date]) -> str:
    """Format date range for description."""
    if date_from and date_to:
        if date_from == date_to:
            return f"on {date_from.strftime('%d %b %Y')}"
        elif date_from.month == date_to.month and date_from.year == date_to.year:
            return f"in {date_from.strftime('%B %Y')}"
        elif date_from.year == date_to.year:
            return f"from {date_from.strftime('%b')} to {date_to.strftime('%b %Y')}"
        else:
            return f"from {date_from.strftime('%b %Y')} to {date_to.strftime('%b %Y')}"
    elif date_from:
        return f"from {date_from.strftime('%d %b %Y')}"
    elif date_to:
        return f"until {date_to.strftime('%d %b %Y')}"
    return ""


def _amount_range_str(amount_min: Optional[Decimal], amount_max: Optional[Decimal]) -> str:
    if amount_min is not None and amount_max is not None:
        return f"between ${amount_min:,.2f} and ${amount_max:,.2f}"
    elif amount_min is not None:
        return f"at least ${amount_min:,.2f}"
    return f"at most ${amount_max:,.2f}"


def _matches_search(txn: Transaction, needle: str, catalog: CategoryCatalog) -> bool:
    label = catalog.label_for(txn.direction, txn.category)
    return (
        needle in txn.description.lower()
        or needle in label.lower()
        or needle in (txn.notes or "").lower()
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    flt: TransactionFilter,
    catalog: Optional[CategoryCatalog] = None,
) -> tuple[Transaction, ...]:
    """Apply a filter, keeping input order."""
    catalog = catalog or get_catalog()
    needle = flt.search.lower() if flt.search else None

    def keep(txn: Transaction) -> bool:
        if flt.view == TransactionView.BUSINESS and not txn.is_business:
            return False
        if flt.view == TransactionView.PERSONAL and txn.is_business:
            return False
        if flt.view == TransactionView.UNCATEGORIZED and txn.category not in CATCH_ALL_KEYS:
            return False
        if needle and not _matches_search(txn, needle, catalog):
            return False
        if flt.date_from and txn.date < flt.date_from:
            return False
        if flt.date_to and txn.date > flt.date_to:
            return False
        if flt.amount_min is not None and txn.amount < flt.amount_min:
            return False
        if flt.amount_max is not None and txn.amount > flt.amount_max:
            return False
        return True

    return tuple(txn for txn in transactions if keep(txn))
