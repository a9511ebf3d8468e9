"""
Tests for the Bookkeeper flows.

Storage and audit use the in-memory implementations so every flow can be
checked end to end without I/O.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from cashflow.audit import AuditLogger
from cashflow.exceptions import TransactionNotFoundError, UnknownCategoryError
from cashflow.models import AuditEventType, Direction, TaxTreatmentCode, to_money
from cashflow.orchestrator import Bookkeeper
from cashflow.queries import TransactionFilter
from cashflow.services.storage import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    StorageError,
)

STATEMENT = [
    (date(2024, 7, 15), "Client Invoice #1042", 3300),
    (date(2024, 7, 15), "OFFICEWORKS SYDNEY", -67),
    (date(2024, 8, 9), "RANDOM XYZ", -50),
    (date(2024, 6, 30), "WOOLWORTHS METRO", "-80.45"),
]


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def storage():
    return InMemoryTransactionStorage()


@pytest.fixture
def books(storage, audit_storage):
    return Bookkeeper(storage=storage, audit_logger=AuditLogger(audit_storage))


def _event_types(audit_storage):
    return [e.event_type for e in reversed(audit_storage.get_recent_events())]


class ReadOnlyTransactionStorage(InMemoryTransactionStorage):
    """Storage that loads but refuses every write."""

    def __init__(self, transactions=()):
        super().__init__()
        super().save_snapshot(transactions)

    def save_snapshot(self, transactions):
        raise StorageError("snapshot file is read-only")

    def clear(self):
        raise StorageError("snapshot file is read-only")


class TestImport:
    """Tests for statement import."""

    def test_import_classifies_and_orders(self, books):
        """Test rows are classified and the snapshot is newest first."""
        imported = books.import_rows(STATEMENT)
        assert [t.category for t in imported] == [
            "sales_income", "office", "personal_other", "groceries",
        ]
        dates = [t.date for t in books.transactions]
        assert dates == sorted(dates, reverse=True)

    def test_import_persists(self, books, storage):
        """Test the new snapshot is saved."""
        books.import_rows(STATEMENT)
        assert len(storage.load_snapshot()) == 4

    def test_import_audited(self, books, audit_storage):
        """Test import and uncategorized events share a correlation id."""
        books.import_rows(STATEMENT)
        events = audit_storage.get_recent_events()
        assert _event_types(audit_storage) == [
            AuditEventType.TRANSACTIONS_IMPORTED,
            AuditEventType.UNCATEGORIZED_DETECTED,
        ]
        assert events[0].correlation_id == events[1].correlation_id
        assert events[1].details == {"count": 4, "uncategorized": 1}

    def test_import_merges(self, books):
        """Test a second import adds to the snapshot."""
        books.import_rows(STATEMENT[:2])
        books.import_rows(STATEMENT[2:])
        assert len(books.transactions) == 4

    def test_loads_existing_snapshot(self, books, storage):
        """Test a new bookkeeper starts from stored data."""
        books.import_rows(STATEMENT)
        reopened = Bookkeeper(storage=storage)
        assert reopened.transactions == books.transactions

    def test_oldest_first_setting(self, monkeypatch):
        """Test snapshot order follows the setting."""
        monkeypatch.setenv("NEWEST_FIRST", "false")
        books = Bookkeeper()
        books.import_rows(STATEMENT)
        assert books.transactions[0].date == date(2024, 6, 30)


class TestManualEntry:
    """Tests for hand-entered transactions."""

    def test_classified_from_description(self, books):
        """Test an entry without category is classified."""
        txn = books.record_manual(
            date(2024, 7, 3), "Officeworks receipt", 45, direction="expense",
            receipt_ref="rcpt-1",
        )
        assert txn.category == "office"
        assert txn.direction == Direction.EXPENSE
        assert txn.receipt_ref == "rcpt-1"
        assert books.transactions == (txn,)

    def test_explicit_category(self, books):
        """Test a chosen category overrides the keyword match."""
        txn = books.record_manual(
            date(2024, 7, 3), "Officeworks laptop", 1200,
            direction=Direction.EXPENSE, category="equipment",
        )
        assert txn.category == "equipment"
        assert txn.tax_code == TaxTreatmentCode.STANDARD_RATE
        assert txn.is_business

    def test_category_must_match_direction(self, books):
        """Test an income key is refused for an expense."""
        with pytest.raises(UnknownCategoryError):
            books.record_manual(
                date(2024, 7, 3), "x", 10, direction="expense", category="sales_income",
            )
        assert books.transactions == ()

    def test_zero_expense_stays_expense(self, books):
        """Test the chosen direction wins for a zero amount."""
        txn = books.record_manual(date(2024, 7, 3), "Free sample", 0, direction="expense")
        assert txn.direction == Direction.EXPENSE
        assert txn.category == "personal_other"

    def test_negative_amount_rejected(self, books):
        """Test the amount is a magnitude."""
        with pytest.raises(ValueError):
            books.record_manual(date(2024, 7, 3), "x", -10, direction="income")

    def test_audited(self, books, audit_storage):
        """Test the entry is logged with a rounded amount."""
        books.record_manual(date(2024, 7, 3), "Cash sale", "19.999", direction="income")
        event = audit_storage.get_recent_events()[0]
        assert event.event_type == AuditEventType.TRANSACTION_RECORDED
        assert event.details["amount"] == "20.00"

    def test_blank_description_defaults(self, books):
        """Test a blank description is stored as Manual Entry."""
        txn = books.record_manual(date(2024, 7, 3), "   ", 25, direction="expense")
        assert txn.description == "Manual Entry"
        assert txn.category == "personal_other"


class TestCorrections:
    """Tests for edits by id."""

    def test_recategorize(self, books, storage, audit_storage):
        """Test recategorising replaces the transaction everywhere."""
        imported = books.import_rows(STATEMENT)
        target = imported[2]

        updated = books.recategorize(target.id, "subscriptions")

        assert books.get(target.id) == updated
        assert updated.is_business
        assert updated.tax_code == TaxTreatmentCode.STANDARD_RATE
        assert len(books.transactions) == 4
        assert storage.load_snapshot() == books.transactions

        event = audit_storage.get_recent_events()[0]
        assert event.details == {"old_category": "personal_other", "new_category": "subscriptions"}

    def test_business_flag(self, books):
        """Test set and toggle."""
        txn = books.import_rows(STATEMENT[3:])[0]
        assert books.set_business(txn.id, True).is_business
        assert not books.toggle_business(txn.id).is_business

    def test_update_notes(self, books, audit_storage):
        """Test notes are stored and audited."""
        txn = books.import_rows(STATEMENT[:1])[0]
        assert books.update_notes(txn.id, " paid by EFT ").notes == "paid by EFT"
        assert _event_types(audit_storage)[-1] == AuditEventType.NOTES_UPDATED

    def test_notes_over_limit_leave_books_unchanged(self, books, storage, audit_storage):
        """Test notes past the field limit are refused before anything is saved."""
        txn = books.import_rows(STATEMENT[:1])[0]
        events_before = len(audit_storage.get_recent_events())

        with pytest.raises(ValidationError):
            books.update_notes(txn.id, "x" * 1001)

        assert books.get(txn.id).notes is None
        assert len(audit_storage.get_recent_events()) == events_before
        assert Bookkeeper(storage=storage).transactions == books.transactions

    def test_set_receipt_ref(self, books, storage, audit_storage):
        """Test a receipt is attached, persisted and audited."""
        txn = books.import_rows(STATEMENT[1:2])[0]

        updated = books.set_receipt_ref(txn.id, "receipts/officeworks.jpg")

        assert updated.receipt_ref == "receipts/officeworks.jpg"
        assert storage.load_snapshot()[0].receipt_ref == "receipts/officeworks.jpg"
        event = audit_storage.get_recent_events()[0]
        assert event.event_type == AuditEventType.RECEIPT_ATTACHED
        assert event.entity_id == txn.id
        assert books.set_receipt_ref(txn.id, None).receipt_ref is None

    def test_unknown_id(self, books):
        """Test edits to a missing id raise."""
        books.import_rows(STATEMENT)
        with pytest.raises(TransactionNotFoundError):
            books.toggle_business(uuid4())
        with pytest.raises(TransactionNotFoundError):
            books.recategorize(uuid4(), "office")

    def test_unknown_id_logged(self, books, audit_storage):
        """Test a missing id is recorded as a system error."""
        missing = uuid4()
        with pytest.raises(TransactionNotFoundError):
            books.update_notes(missing, "x")

        event = audit_storage.get_recent_events()[0]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.description == "System error: TransactionNotFoundError"
        assert event.details["transaction_id"] == str(missing)

    def test_clear(self, books, storage, audit_storage):
        """Test clearing empties snapshot and storage."""
        books.import_rows(STATEMENT)
        assert books.clear() == 4
        assert books.transactions == ()
        assert storage.load_snapshot() == ()
        assert _event_types(audit_storage)[-1] == AuditEventType.TRANSACTIONS_CLEARED


class TestStorageFailures:
    """Tests for writes the storage backend refuses."""

    def test_failed_save_logged_and_raised(self, audit_storage):
        """Test a refused save raises and leaves the snapshot as it was."""
        books = Bookkeeper(
            storage=ReadOnlyTransactionStorage(),
            audit_logger=AuditLogger(audit_storage),
        )

        with pytest.raises(StorageError):
            books.import_rows(STATEMENT)

        assert books.transactions == ()
        assert _event_types(audit_storage) == [AuditEventType.SYSTEM_ERROR]
        event = audit_storage.get_recent_events()[0]
        assert event.error_message == "snapshot file is read-only"
        assert event.details == {"operation": "save_snapshot"}

    def test_failed_clear_keeps_snapshot(self, audit_storage):
        """Test a refused clear keeps the loaded transactions."""
        storage = ReadOnlyTransactionStorage(Bookkeeper().import_rows(STATEMENT))
        books = Bookkeeper(storage=storage, audit_logger=AuditLogger(audit_storage))

        with pytest.raises(StorageError):
            books.clear()

        assert len(books.transactions) == 4
        assert _event_types(audit_storage) == [AuditEventType.SYSTEM_ERROR]


class TestReporting:
    """Tests for read-side flows."""

    def test_views(self, books, audit_storage):
        """Test the BAS scenario through the bookkeeper; reads are not audited."""
        books.import_rows(STATEMENT)
        views = books.views()

        q1 = views.quarters["Q1 FY2025"]
        assert to_money(q1.net_owing) == Decimal("293.91")
        assert views.uncategorized_count == 1
        assert list(views.quarters) == ["Q4 FY2024", "Q1 FY2025"]
        assert _event_types(audit_storage) == [
            AuditEventType.TRANSACTIONS_IMPORTED,
            AuditEventType.UNCATEGORIZED_DETECTED,
        ]

    def test_views_follow_edits(self, books):
        """Test views are recomputed from the edited snapshot."""
        imported = books.import_rows(STATEMENT)
        books.recategorize(imported[2].id, "office")
        assert books.views().uncategorized_count == 0

    def test_reports_and_search(self, books):
        """Test P&L, deductions and search delegate to the snapshot."""
        books.import_rows(STATEMENT)
        assert books.profit_and_loss("2024-07").net_profit == Decimal("3233")
        assert books.deduction_summary().total == Decimal("67")
        found = books.search(TransactionFilter(view="personal"))
        assert [t.category for t in found] == ["personal_other", "groceries"]
