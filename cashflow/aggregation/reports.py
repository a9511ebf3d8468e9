"""
Report Builders

Period-scoped reports for the accountant. Like the aggregator these are
pure folds over a snapshot; rendering them (HTML, CSV, print) happens
elsewhere.
"""

import datetime as dt
from decimal import Decimal
from typing import Iterable, Optional

from cashflow.aggregation.aggregator import sort_category_totals
from cashflow.catalog import CategoryCatalog, get_catalog
from cashflow.classification.normalizer import fiscal_quarter
from cashflow.models.aggregates import (
    AggregateViews,
    DeductionLine,
    DeductionSummary,
    ProfitAndLoss,
    QuarterAggregate,
    ReportLine,
)
from cashflow.models.money import ZERO
from cashflow.models.transaction import Direction, Transaction


def available_periods(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct YYYY-MM months present in the snapshot, oldest first."""
    return sorted({txn.month for txn in transactions})


def _report_lines(
    totals: dict[str, Decimal],
    direction: Direction,
    catalog: CategoryCatalog,
) -> list[ReportLine]:
    return [
        ReportLine(
            category=key,
            label=catalog.label_for(direction, key),
            amount=amount,
        )
        for key, amount in sort_category_totals(totals).items()
    ]


def profit_and_loss(
    transactions: Iterable[Transaction],
    period: Optional[str] = None,
    catalog: Optional[CategoryCatalog] = None,
) -> ProfitAndLoss:
    """
    Business profit and loss.

    Only business-flagged transactions count. `period` is a date prefix:
    "2024-07" for one month, "2024" for a calendar year, None for all.
    """
    catalog = catalog or get_catalog()

    revenue: dict[str, Decimal] = {}
    expenses: dict[str, Decimal] = {}
    dates: list[dt.date] = []

    for txn in transactions:
        if not txn.is_business:
            continue
        if period and not txn.date.isoformat().startswith(period):
            continue

        bucket = revenue if txn.direction == Direction.INCOME else expenses
        bucket[txn.category] = bucket.get(txn.category, ZERO) + txn.amount
        dates.append(txn.date)

    return ProfitAndLoss(
        period=period,
        date_from=min(dates) if dates else None,
        date_to=max(dates) if dates else None,
        revenue=_report_lines(revenue, Direction.INCOME, catalog),
        expenses=_report_lines(expenses, Direction.EXPENSE, catalog),
        total_revenue=sum(revenue.values(), ZERO),
        total_expenses=sum(expenses.values(), ZERO),
    )


def deduction_summary(
    transactions: Iterable[Transaction],
    catalog: Optional[CategoryCatalog] = None,
) -> DeductionSummary:
    """
    Deductible expenses per category with their GST component.

    Deductibility comes from the category, not the business flag, so a
    donation counts even though it is not a business purchase. The GST
    component uses each transaction's own code.
    """
    catalog = catalog or get_catalog()
    deductible_keys = catalog.deductible_keys()

    counts: dict[str, int] = {}
    totals: dict[str, Decimal] = {}
    taxes: dict[str, Decimal] = {}

    for txn in transactions:
        if txn.direction != Direction.EXPENSE or txn.category not in deductible_keys:
            continue
        counts[txn.category] = counts.get(txn.category, 0) + 1
        totals[txn.category] = totals.get(txn.category, ZERO) + txn.amount
        taxes[txn.category] = taxes.get(txn.category, ZERO) + txn.tax_code.tax_component(txn.amount)

    lines = [
        DeductionLine(
            category=key,
            label=catalog.label_for(Direction.EXPENSE, key),
            count=counts[key],
            total=total,
            tax_component=taxes[key],
        )
        for key, total in sort_category_totals(totals).items()
    ]

    return DeductionSummary(
        lines=lines,
        count=sum(counts.values()),
        total=sum(totals.values(), ZERO),
        tax_component=sum(taxes.values(), ZERO),
    )


def quarter_for(views: AggregateViews, day: dt.date) -> QuarterAggregate:
    """The BAS quarter covering `day`, or an all-zero one if it has no activity."""
    period = fiscal_quarter(day)
    existing = views.quarters.get(period.label)
    if existing is not None:
        return existing
    return QuarterAggregate(label=period.label, start=period.start, end=period.end)
