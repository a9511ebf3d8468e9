"""Category catalog package."""

from cashflow.catalog.catalog import (
    CATCH_ALL,
    CATCH_ALL_KEYS,
    FALLBACK_TAX_CODE,
    CategoryCatalog,
    get_catalog,
)
from cashflow.catalog.categories import (
    ALL_CATEGORIES,
    EXPENSE_CATEGORIES,
    GOVT_INCOME,
    INCOME_CATEGORIES,
    OTHER_INCOME,
    PERSONAL_OTHER,
)

__all__ = [
    "ALL_CATEGORIES",
    "CATCH_ALL",
    "CATCH_ALL_KEYS",
    "EXPENSE_CATEGORIES",
    "FALLBACK_TAX_CODE",
    "GOVT_INCOME",
    "INCOME_CATEGORIES",
    "OTHER_INCOME",
    "PERSONAL_OTHER",
    "CategoryCatalog",
    "get_catalog",
]
