"""
Tests for transaction filtering.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from cashflow.classification import with_notes
from cashflow.queries import TransactionFilter, TransactionView, filter_transactions


class TestTransactionFilter:
    """Tests for the filter model."""

    def test_defaults(self):
        """Test the default filter lists everything."""
        flt = TransactionFilter()
        assert flt.view == TransactionView.ALL
        assert flt.describe() == "Listing transactions"

    def test_date_range_validation(self):
        """Test an inverted date range is rejected."""
        with pytest.raises(ValidationError):
            TransactionFilter(date_from=date(2024, 8, 1), date_to=date(2024, 7, 1))

    def test_amount_range_validation(self):
        """Test an inverted amount range is rejected."""
        with pytest.raises(ValidationError):
            TransactionFilter(amount_min=Decimal("100"), amount_max=Decimal("10"))

    def test_describe(self):
        """Test the description joins each active filter."""
        flt = TransactionFilter(
            view=TransactionView.BUSINESS,
            search="office",
            date_from=date(2024, 7, 1),
            date_to=date(2024, 7, 31),
            amount_min=Decimal("10"),
        )
        assert flt.describe() == (
            "Listing business transactions | matching: office | in July 2024 | at least $10.00"
        )


class TestFilterTransactions:
    """Tests for applying a filter to a snapshot."""

    def test_views(self, sample_transactions):
        """Test business, personal and uncategorized slices."""
        business = filter_transactions(sample_transactions, TransactionFilter(view="business"))
        personal = filter_transactions(sample_transactions, TransactionFilter(view="personal"))
        uncategorized = filter_transactions(
            sample_transactions, TransactionFilter(view="uncategorized")
        )
        assert len(business) == 3
        assert len(personal) == 3
        assert [t.description for t in uncategorized] == ["RANDOM XYZ"]

    def test_search_matches_description_label_and_notes(self, sample_transactions):
        """Test search is case-insensitive across text fields."""
        by_description = filter_transactions(sample_transactions, TransactionFilter(search="netflix"))
        assert [t.category for t in by_description] == ["entertainment"]

        by_label = filter_transactions(sample_transactions, TransactionFilter(search="GROCER"))
        assert [t.category for t in by_label] == ["groceries"]

        noted = [with_notes(sample_transactions[0], "Paid late")] + sample_transactions[1:]
        by_notes = filter_transactions(noted, TransactionFilter(search="paid late"))
        assert [t.category for t in by_notes] == ["sales_income"]

    def test_date_and_amount_bounds_inclusive(self, sample_transactions):
        """Test bounds include their endpoints."""
        flt = TransactionFilter(
            date_from=date(2024, 7, 15),
            date_to=date(2024, 8, 2),
            amount_min=Decimal("67"),
            amount_max=Decimal("80"),
        )
        result = filter_transactions(sample_transactions, flt)
        assert [t.description for t in result] == ["OFFICEWORKS SYDNEY", "WOOLWORTHS METRO"]

    def test_keeps_input_order(self, sample_transactions):
        """Test filtering never reorders."""
        result = filter_transactions(list(reversed(sample_transactions)), TransactionFilter())
        assert result == tuple(reversed(sample_transactions))
