"""
Record Normalizer

Turns a raw (date, description, signed amount) triple into a canonical
Transaction, and applies the user corrections the UI allows.

Dates arrive already parsed: the import layer owns date-format guessing.

Business flag rule:
- any deductible expense category is business
- income is business unless it is "other income" or a government payment
- everything else is personal
The flag is a default. Users may flip it afterwards without touching the
category.
"""

import datetime as dt
from typing import Optional

from cashflow.catalog import (
    GOVT_INCOME,
    OTHER_INCOME,
    CategoryCatalog,
    get_catalog,
)
from cashflow.classification.classifier import classify
from cashflow.exceptions import UnknownCategoryError
from cashflow.models.aggregates import FiscalQuarter
from cashflow.models.money import Number, to_decimal
from cashflow.models.transaction import (
    CategoryDefinition,
    Direction,
    Transaction,
)

UNKNOWN_DESCRIPTION = "Unknown Transaction"

PERSONAL_INCOME_KEYS = frozenset({OTHER_INCOME, GOVT_INCOME})


def derive_is_business(definition: CategoryDefinition) -> bool:
    """Default business flag for a category."""
    if definition.deductible:
        return True
    return (
        definition.direction == Direction.INCOME
        and definition.key not in PERSONAL_INCOME_KEYS
    )


def _build(data: dict, catalog: Optional[CategoryCatalog]) -> Transaction:
    context = {"catalog": catalog} if catalog is not None else None
    return Transaction.model_validate(data, context=context)


def normalize(
    date: dt.date,
    description: str,
    signed_amount: Number,
    *,
    notes: Optional[str] = None,
    receipt_ref: Optional[str] = None,
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    """
    Build a canonical Transaction from raw fields.

    Args:
        date: Already-parsed calendar date
        description: Statement text
        signed_amount: Positive for money in, negative for money out
        notes: Optional user notes
        receipt_ref: Optional reference to a stored receipt image
        catalog: Category table (defaults to the built-in one)

    Returns:
        A new Transaction with a fresh id
    """
    table = catalog or get_catalog()
    amount = to_decimal(signed_amount)
    result = classify(description, amount, table)
    definition = table.require(result.direction, result.category)

    return _build(
        {
            "date": date,
            "description": (description or "").strip() or UNKNOWN_DESCRIPTION,
            "amount": abs(amount),
            "direction": result.direction,
            "category": result.category,
            "tax_code": result.tax_code,
            "is_business": derive_is_business(definition),
            "notes": notes,
            "receipt_ref": receipt_ref,
        },
        catalog,
    )


# =============================================================================
# USER CORRECTIONS - each returns a new Transaction
# =============================================================================

def recategorize(
    transaction: Transaction,
    category: str,
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    """
    Move a transaction to another category.

    The direction follows whichever namespace holds the key, preferring the
    current one. GST code and business flag are re-derived from the new
    category, so a manual business toggle does not survive a recategorise.

    Raises:
        UnknownCategoryError: If neither namespace has the key
    """
    table = catalog or get_catalog()
    direction = table.resolve_direction(category, prefer=transaction.direction)
    if direction is None:
        raise UnknownCategoryError(transaction.direction.value, category)

    definition = table.require(direction, category)
    return _replace_fields(
        transaction,
        catalog,
        direction=direction,
        category=definition.key,
        tax_code=definition.tax_code,
        is_business=derive_is_business(definition),
    )


def _replace_fields(
    transaction: Transaction,
    catalog: Optional[CategoryCatalog],
    **changes,
) -> Transaction:
    # Rebuilt through validation so field limits hold for every edit.
    data = transaction.model_dump()
    data.update(changes)
    return _build(data, catalog)


def set_business(
    transaction: Transaction,
    is_business: bool,
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    return _replace_fields(transaction, catalog, is_business=is_business)


def toggle_business(
    transaction: Transaction,
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    return set_business(transaction, not transaction.is_business, catalog)


def with_notes(
    transaction: Transaction,
    notes: Optional[str],
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    """
    Replace the notes. Blank clears them.

    Raises:
        ValidationError: If the notes exceed the field limit
    """
    cleaned = notes.strip() if notes else None
    return _replace_fields(transaction, catalog, notes=cleaned or None)


def with_receipt(
    transaction: Transaction,
    receipt_ref: Optional[str],
    catalog: Optional[CategoryCatalog] = None,
) -> Transaction:
    """Attach (or with None, detach) a receipt reference."""
    return _replace_fields(transaction, catalog, receipt_ref=receipt_ref or None)


# =============================================================================
# FISCAL QUARTERS
# =============================================================================

def fiscal_quarter(day: dt.date) -> FiscalQuarter:
    """
    Map a date to its Australian BAS quarter.

    Jul-Sep -> Q1 FY{y+1}
    Oct-Dec -> Q2 FY{y+1}
    Jan-Mar -> Q3 FY{y}
    Apr-Jun -> Q4 FY{y}
    """
    year = day.year
    month = day.month

    if 7 <= month <= 9:
        quarter, fiscal_year, start, end = 1, year + 1, (7, 1), (9, 30)
    elif 10 <= month <= 12:
        quarter, fiscal_year, start, end = 2, year + 1, (10, 1), (12, 31)
    elif 1 <= month <= 3:
        quarter, fiscal_year, start, end = 3, year, (1, 1), (3, 31)
    else:
        quarter, fiscal_year, start, end = 4, year, (4, 1), (6, 30)

    return FiscalQuarter(
        label=f"Q{quarter} FY{fiscal_year}",
        fiscal_year=fiscal_year,
        quarter=quarter,
        start=dt.date(year, *start),
        end=dt.date(year, *end),
    )
