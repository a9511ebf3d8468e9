"""
Derived View Models

These are fold results over a transaction snapshot. They have no
lifecycle of their own: throw them away and recompute whenever the
snapshot changes.

All amounts are unrounded Decimals. Use `to_money()` when displaying.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cashflow.models.money import ZERO


# =============================================================================
# PERIODS
# =============================================================================

class FiscalQuarter(BaseModel):
    """
    An Australian BAS quarter (financial year starts 1 July).

    Q1 is Jul-Sep and belongs to the financial year ending the following
    June, so 2024-08-15 falls in "Q1 FY2025".
    """
    label: str
    fiscal_year: int
    quarter: int = Field(ge=1, le=4)
    start: date
    end: date


# =============================================================================
# AGGREGATES
# =============================================================================

class MonthlyAggregate(BaseModel):
    """Income and expense subtotals for one calendar month."""

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Calendar month, YYYY-MM"
    )
    income: Decimal = ZERO
    expenses: Decimal = ZERO
    business_income: Decimal = ZERO
    business_expenses: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses

    @property
    def business_net(self) -> Decimal:
        return self.business_income - self.business_expenses

    @property
    def label(self) -> str:
        """Short chart label, e.g. "Jul 24"."""
        year, month = self.month.split("-")
        return date(int(year), int(month), 15).strftime("%b %y")


class QuarterAggregate(BaseModel):
    """
    GST figures for one BAS quarter.

    Field names map to the BAS form:
    - total_sales: G1, total sales including GST
    - total_purchases: G11, non-capital purchases
    - tax_collected: 1A, GST on sales
    - tax_credits: 1B, GST on purchases
    """

    label: str
    start: Optional[date] = None
    end: Optional[date] = None
    total_sales: Decimal = ZERO
    total_purchases: Decimal = ZERO
    tax_collected: Decimal = ZERO
    tax_credits: Decimal = ZERO

    @property
    def net_owing(self) -> Decimal:
        """Positive means GST payable, negative means a refund is due."""
        return self.tax_collected - self.tax_credits

    @property
    def is_refund(self) -> bool:
        return self.net_owing < 0


class AggregateViews(BaseModel):
    """
    Everything the reporting screens need, computed in one pass.

    `category_totals` is ordered by total, largest first. `quarters` is
    ordered chronologically.
    """

    monthly: list[MonthlyAggregate] = Field(default_factory=list)
    category_totals: dict[str, Decimal] = Field(default_factory=dict)
    quarters: dict[str, QuarterAggregate] = Field(default_factory=dict)
    uncategorized_count: int = Field(default=0, ge=0)

    # Headline totals
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO
    business_income: Decimal = ZERO
    business_expenses: Decimal = ZERO
    deductible_total: Decimal = ZERO

    @property
    def net_savings(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def has_uncategorized(self) -> bool:
        return self.uncategorized_count > 0


# =============================================================================
# REPORTS
# =============================================================================

class ReportLine(BaseModel):
    """One category row of a report."""

    category: str
    label: str
    amount: Decimal = ZERO


class ProfitAndLoss(BaseModel):
    """Business profit and loss for a period (or all time)."""

    period: Optional[str] = Field(
        default=None,
        description="YYYY-MM or YYYY prefix, None for all time"
    )
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    revenue: list[ReportLine] = Field(default_factory=list)
    expenses: list[ReportLine] = Field(default_factory=list)
    total_revenue: Decimal = ZERO
    total_expenses: Decimal = ZERO

    @property
    def net_profit(self) -> Decimal:
        return self.total_revenue - self.total_expenses

    @property
    def is_loss(self) -> bool:
        return self.net_profit < 0


class DeductionLine(BaseModel):
    """Deductible spend for one category."""

    category: str
    label: str
    count: int = Field(default=0, ge=0)
    total: Decimal = ZERO
    tax_component: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        """Amount excluding GST."""
        return self.total - self.tax_component


class DeductionSummary(BaseModel):
    """Deductible expenses grouped for the accountant."""

    lines: list[DeductionLine] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    total: Decimal = ZERO
    tax_component: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.total - self.tax_component
