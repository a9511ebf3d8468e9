"""Aggregation and reporting package."""

from cashflow.aggregation.aggregator import aggregate, sort_category_totals
from cashflow.aggregation.reports import (
    available_periods,
    deduction_summary,
    profit_and_loss,
    quarter_for,
)

__all__ = [
    "aggregate",
    "available_periods",
    "deduction_summary",
    "profit_and_loss",
    "quarter_for",
    "sort_category_totals",
]
