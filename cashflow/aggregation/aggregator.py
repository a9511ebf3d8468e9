"""
Aggregation Engine

Folds a transaction snapshot into every derived view in a single pass:
- monthly income/expense subtotals (all and business-only)
- expense totals per category
- BAS quarter figures
- the count of transactions still sitting in a catch-all category

DESIGN DECISION: There is no incremental update. Each call recomputes
from the full snapshot, which keeps the views trivially consistent and is
cheap at household/sole-trader volumes. The result depends only on the
input, so calling it twice on the same snapshot gives equal results.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from cashflow.catalog import CATCH_ALL_KEYS, CategoryCatalog, get_catalog
from cashflow.classification.normalizer import fiscal_quarter
from cashflow.models.aggregates import (
    AggregateViews,
    FiscalQuarter,
    MonthlyAggregate,
    QuarterAggregate,
)
from cashflow.models.money import ZERO
from cashflow.models.transaction import (
    Direction,
    TaxTreatmentCode,
    Transaction,
)


class _MonthAccumulator:
    __slots__ = ("income", "expenses", "business_income", "business_expenses")

    def __init__(self):
        self.income = ZERO
        self.expenses = ZERO
        self.business_income = ZERO
        self.business_expenses = ZERO


class _QuarterAccumulator:
    __slots__ = ("period", "total_sales", "total_purchases", "tax_collected", "tax_credits")

    def __init__(self, period: FiscalQuarter):
        self.period = period
        self.total_sales = ZERO
        self.total_purchases = ZERO
        self.tax_collected = ZERO
        self.tax_credits = ZERO


def sort_category_totals(totals: dict[str, Decimal]) -> dict[str, Decimal]:
    """Largest first; equal totals keep first-seen order."""
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def aggregate(
    transactions: Iterable[Transaction],
    catalog: Optional[CategoryCatalog] = None,
) -> AggregateViews:
    """
    Compute all derived views for a snapshot.

    Args:
        transactions: The full current snapshot (any iterable, read once)
        catalog: Category table used for the deductible total

    Returns:
        AggregateViews. An empty snapshot gives all-zero views.
    """
    catalog = catalog or get_catalog()
    deductible_keys = catalog.deductible_keys()

    months: dict[str, _MonthAccumulator] = defaultdict(_MonthAccumulator)
    category_totals: dict[str, Decimal] = {}
    quarters: dict[str, _QuarterAccumulator] = {}
    uncategorized = 0

    total_income = ZERO
    total_expenses = ZERO
    business_income = ZERO
    business_expenses = ZERO
    deductible_total = ZERO

    for txn in transactions:
        amount = txn.amount
        is_income = txn.direction == Direction.INCOME

        # Monthly fold and headline totals
        month = months[txn.month]
        if is_income:
            month.income += amount
            total_income += amount
            if txn.is_business:
                month.business_income += amount
                business_income += amount
        else:
            month.expenses += amount
            total_expenses += amount
            if txn.is_business:
                month.business_expenses += amount
                business_expenses += amount
            category_totals[txn.category] = category_totals.get(txn.category, ZERO) + amount
            if txn.category in deductible_keys:
                deductible_total += amount

        # BAS quarter fold
        period = fiscal_quarter(txn.date)
        quarter = quarters.get(period.label)
        if quarter is None:
            quarter = quarters[period.label] = _QuarterAccumulator(period)

        if is_income and txn.is_business:
            quarter.total_sales += amount
            quarter.tax_collected += txn.tax_code.tax_component(amount)
        elif (
            not is_income
            and txn.is_business
            and txn.tax_code == TaxTreatmentCode.STANDARD_RATE
        ):
            quarter.total_purchases += amount
            quarter.tax_credits += txn.tax_code.tax_component(amount)

        if txn.category in CATCH_ALL_KEYS:
            uncategorized += 1

    monthly = [
        MonthlyAggregate(
            month=key,
            income=acc.income,
            expenses=acc.expenses,
            business_income=acc.business_income,
            business_expenses=acc.business_expenses,
        )
        for key, acc in sorted(months.items())
    ]

    ordered_quarters = sorted(
        quarters.values(),
        key=lambda acc: (acc.period.fiscal_year, acc.period.quarter),
    )

    return AggregateViews(
        monthly=monthly,
        category_totals=sort_category_totals(category_totals),
        quarters={
            acc.period.label: QuarterAggregate(
                label=acc.period.label,
                start=acc.period.start,
                end=acc.period.end,
                total_sales=acc.total_sales,
                total_purchases=acc.total_purchases,
                tax_collected=acc.tax_collected,
                tax_credits=acc.tax_credits,
            )
            for acc in ordered_quarters
        },
        uncategorized_count=uncategorized,
        total_income=total_income,
        total_expenses=total_expenses,
        business_income=business_income,
        business_expenses=business_expenses,
        deductible_total=deductible_total,
    )
