"""
Tests for period reports (P&L, deductions, quarter lookup).
"""

from datetime import date
from decimal import Decimal

from cashflow.aggregation import (
    aggregate,
    available_periods,
    deduction_summary,
    profit_and_loss,
    quarter_for,
)
from cashflow.models import to_money


class TestProfitAndLoss:
    """Tests for the business P&L."""

    def test_all_time(self, sample_transactions):
        """Test only business transactions are reported."""
        report = profit_and_loss(sample_transactions)
        assert report.period is None
        assert [(line.category, line.amount) for line in report.revenue] == [
            ("sales_income", Decimal("3300")),
        ]
        assert [(line.label, line.amount) for line in report.expenses] == [
            ("Office Supplies", Decimal("67")),
            ("Donations & Gifts", Decimal("50")),
        ]
        assert report.total_revenue == Decimal("3300")
        assert report.total_expenses == Decimal("117")
        assert report.net_profit == Decimal("3183")
        assert not report.is_loss
        assert report.date_from == date(2024, 7, 15)
        assert report.date_to == date(2024, 8, 12)

    def test_month_period(self, sample_transactions):
        """Test a YYYY-MM prefix limits the report."""
        report = profit_and_loss(sample_transactions, period="2024-08")
        assert report.revenue == []
        assert report.total_expenses == Decimal("50")
        assert report.is_loss

    def test_year_period(self, sample_transactions):
        """Test a YYYY prefix covers the calendar year."""
        assert profit_and_loss(sample_transactions, period="2024").net_profit == Decimal("3183")
        assert profit_and_loss(sample_transactions, period="2023").net_profit == 0

    def test_empty(self):
        """Test an empty snapshot gives an empty report."""
        report = profit_and_loss([])
        assert report.date_from is None
        assert report.net_profit == 0


class TestDeductionSummary:
    """Tests for the deductions report."""

    def test_lines(self, sample_transactions):
        """Test deductible expenses grouped with GST component."""
        summary = deduction_summary(sample_transactions)
        assert [line.category for line in summary.lines] == ["office", "donations"]

        office = summary.lines[0]
        assert office.count == 1
        assert office.total == Decimal("67")
        assert to_money(office.tax_component) == Decimal("6.09")
        assert to_money(office.net) == Decimal("60.91")

        donations = summary.lines[1]
        assert donations.tax_component == 0
        assert donations.net == Decimal("50")

        assert summary.count == 2
        assert summary.total == Decimal("117")

    def test_personal_expenses_excluded(self, sample_transactions):
        """Test non-deductible categories are left out."""
        keys = {line.category for line in deduction_summary(sample_transactions).lines}
        assert "groceries" not in keys
        assert "personal_other" not in keys


class TestPeriods:
    """Tests for period helpers."""

    def test_available_periods(self, sample_transactions):
        """Test distinct months, oldest first."""
        assert available_periods(reversed(sample_transactions)) == ["2024-07", "2024-08"]

    def test_quarter_for_existing(self, sample_transactions):
        """Test lookup returns the computed quarter."""
        views = aggregate(sample_transactions)
        assert quarter_for(views, date(2024, 8, 1)).total_sales == Decimal("3300")

    def test_quarter_for_missing(self, sample_transactions):
        """Test a quarter without activity is all zero."""
        views = aggregate(sample_transactions)
        q3 = quarter_for(views, date(2025, 1, 10))
        assert q3.label == "Q3 FY2025"
        assert q3.start == date(2025, 1, 1)
        assert q3.net_owing == 0
