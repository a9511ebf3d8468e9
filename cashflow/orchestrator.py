"""
Main Orchestrator for CashFlow Bookkeeper

This module ties together the components and defines the flows for:
1. Import (statement rows -> normalize -> merge into snapshot)
2. Correction (recategorize, business flag, notes, receipts)
3. Reporting (views, profit and loss, deductions, search)

DESIGN DECISION: The orchestrator owns the only mutable reference.
- The snapshot itself is an immutable tuple; every edit builds a new one
- Views are recomputed in full from the snapshot on request
- Every mutation is persisted (when storage is configured) and audited
- Reads are not audited; failures are logged as system errors before raising

The pure functions it calls know nothing about storage or logging.
"""

import datetime as dt
from typing import Iterable, Optional
from uuid import UUID

import structlog

from cashflow.aggregation import aggregate, deduction_summary, profit_and_loss
from cashflow.audit import AuditLogger, create_correlation_id
from cashflow.catalog import CATCH_ALL_KEYS, CategoryCatalog, get_catalog
from cashflow.classification import (
    normalize,
    recategorize,
    set_business,
    toggle_business,
    with_notes,
    with_receipt,
)
from cashflow.config import get_settings
from cashflow.exceptions import TransactionNotFoundError
from cashflow.models.aggregates import AggregateViews, DeductionSummary, ProfitAndLoss
from cashflow.models.money import Number, ZERO, to_decimal, to_money
from cashflow.models.transaction import Direction, Transaction
from cashflow.queries import TransactionFilter, filter_transactions
from cashflow.services.storage import StorageError, TransactionStorageInterface

StatementRow = tuple[dt.date, str, Number]

MANUAL_DESCRIPTION = "Manual Entry"


class Bookkeeper:
    """
    Holds the current transaction snapshot and applies user actions to it.

    Usage:
        books = Bookkeeper()
        books.import_rows([(date(2024, 7, 15), "OFFICEWORKS", -67)])
        views = books.views()
    """

    def __init__(
        self,
        storage: Optional[TransactionStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        catalog: Optional[CategoryCatalog] = None,
    ):
        """
        Initialize the bookkeeper.

        Args:
            storage: Snapshot storage. If given, the stored snapshot is
                    loaded and every change is written back.
            audit_logger: Audit logger. If None, logs locally only.
            catalog: Category table (defaults to the built-in one)
        """
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._catalog = catalog
        self._logger = structlog.get_logger(__name__)
        app_settings = get_settings().app
        self._newest_first = app_settings.newest_first
        self._places = app_settings.money_decimal_places

        loaded = self._call_storage("load_snapshot") if storage else ()
        self._transactions: tuple[Transaction, ...] = self._ordered(loaded)

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """The current snapshot."""
        return self._transactions

    def get(self, txn_id: UUID) -> Transaction:
        """
        Look up a transaction by id.

        Raises:
            TransactionNotFoundError: If no transaction has the id
        """
        for txn in self._transactions:
            if txn.id == txn_id:
                return txn
        message = f"Transaction not found: {txn_id}"
        details = {"transaction_id": str(txn_id)}
        self._audit_logger.log_error("TransactionNotFoundError", message, details=details)
        raise TransactionNotFoundError(message, details=details)

    def _ordered(self, transactions: Iterable[Transaction]) -> tuple[Transaction, ...]:
        return tuple(sorted(
            transactions,
            key=lambda txn: txn.date,
            reverse=self._newest_first,
        ))

    def _call_storage(self, operation: str, *args):
        try:
            return getattr(self._storage, operation)(*args)
        except StorageError as e:
            self._audit_logger.log_error(
                "StorageError",
                str(e),
                details={"operation": operation},
            )
            raise

    def _commit(self, transactions: Iterable[Transaction]) -> None:
        ordered = self._ordered(transactions)
        if self._storage:
            self._call_storage("save_snapshot", ordered)
        self._transactions = ordered

    def _replace(self, updated: Transaction) -> None:
        self._commit(
            updated if txn.id == updated.id else txn
            for txn in self._transactions
        )

    # =========================================================================
    # IMPORT AND ENTRY
    # =========================================================================

    def import_rows(
        self,
        rows: Iterable[StatementRow],
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Transaction, ...]:
        """
        Classify statement rows and merge them into the snapshot.

        Args:
            rows: (date, description, signed amount) triples, dates already parsed

        Returns:
            The newly created transactions, in row order
        """
        correlation_id = correlation_id or create_correlation_id()

        imported = tuple(
            normalize(date, description, amount, catalog=self._catalog)
            for date, description, amount in rows
        )
        self._commit(self._transactions + imported)

        uncategorized = sum(1 for txn in imported if txn.category in CATCH_ALL_KEYS)
        self._audit_logger.log_transactions_imported(
            count=len(imported),
            uncategorized=uncategorized,
            correlation_id=correlation_id,
        )
        if uncategorized:
            self._audit_logger.log_uncategorized_detected(
                count=uncategorized,
                correlation_id=correlation_id,
            )

        return imported

    def record_manual(
        self,
        date: dt.date,
        description: str,
        amount: Number,
        *,
        direction: Direction,
        category: Optional[str] = None,
        notes: Optional[str] = None,
        receipt_ref: Optional[str] = None,
    ) -> Transaction:
        """
        Add a hand-entered transaction (receipt, cash sale, etc.).

        `amount` is a magnitude; `direction` decides the sign. Without a
        category the description is classified like an imported row. A
        blank description is stored as "Manual Entry".

        Raises:
            ValueError: If amount is negative
            UnknownCategoryError: If category is not in the direction's namespace
        """
        direction = Direction(direction)
        magnitude = to_decimal(amount)
        if magnitude < ZERO:
            raise ValueError("Amount must be a positive magnitude")

        catalog = self._catalog or get_catalog()
        if category is not None:
            catalog.require(direction, category)

        signed = magnitude if direction == Direction.INCOME else -magnitude
        txn = normalize(
            date,
            (description or "").strip() or MANUAL_DESCRIPTION,
            signed,
            notes=notes,
            receipt_ref=receipt_ref,
            catalog=self._catalog,
        )

        # A zero expense classifies as income; pull it back to the chosen side.
        target = category
        if target is None and txn.direction != direction:
            target = catalog.catch_all(direction).key
        if target is not None and target != txn.category:
            txn = recategorize(txn, target, catalog=self._catalog)

        self._commit((txn,) + self._transactions)
        self._audit_logger.log_transaction_recorded(
            transaction_id=txn.id,
            category=txn.category,
            amount=str(to_money(txn.amount, self._places)),
        )
        return txn

    # =========================================================================
    # CORRECTIONS
    # =========================================================================

    def recategorize(self, txn_id: UUID, category: str) -> Transaction:
        """Move a transaction to another category."""
        current = self.get(txn_id)
        updated = recategorize(current, category, catalog=self._catalog)
        self._replace(updated)
        self._audit_logger.log_recategorized(
            transaction_id=txn_id,
            old_category=current.category,
            new_category=updated.category,
        )
        return updated

    def set_business(self, txn_id: UUID, is_business: bool) -> Transaction:
        updated = set_business(self.get(txn_id), is_business, catalog=self._catalog)
        self._replace(updated)
        self._audit_logger.log_business_flag_changed(
            transaction_id=txn_id,
            is_business=updated.is_business,
        )
        return updated

    def toggle_business(self, txn_id: UUID) -> Transaction:
        updated = toggle_business(self.get(txn_id), catalog=self._catalog)
        self._replace(updated)
        self._audit_logger.log_business_flag_changed(
            transaction_id=txn_id,
            is_business=updated.is_business,
        )
        return updated

    def update_notes(self, txn_id: UUID, notes: Optional[str]) -> Transaction:
        """
        Replace a transaction's notes.

        Raises:
            ValidationError: If the notes exceed the field limit; the
                snapshot is left unchanged
        """
        updated = with_notes(self.get(txn_id), notes, catalog=self._catalog)
        self._replace(updated)
        self._audit_logger.log_notes_updated(transaction_id=txn_id)
        return updated

    def set_receipt_ref(self, txn_id: UUID, receipt_ref: Optional[str]) -> Transaction:
        """Attach a stored receipt to a transaction. None detaches it."""
        updated = with_receipt(self.get(txn_id), receipt_ref, catalog=self._catalog)
        self._replace(updated)
        self._audit_logger.log_receipt_attached(
            transaction_id=txn_id,
            receipt_ref=updated.receipt_ref,
        )
        return updated

    def clear(self) -> int:
        """
        Drop every transaction.

        Returns:
            Number of transactions removed
        """
        count = len(self._transactions)
        if self._storage:
            self._call_storage("clear")
        self._transactions = ()
        self._audit_logger.log_transactions_cleared(count=count)
        return count

    # =========================================================================
    # REPORTING
    # =========================================================================

    def views(self) -> AggregateViews:
        """Dashboard and BAS figures for the current snapshot."""
        views = aggregate(self._transactions, catalog=self._catalog)
        self._logger.debug(
            "views_computed",
            transaction_count=len(self._transactions),
            quarter_count=len(views.quarters),
        )
        return views

    def profit_and_loss(self, period: Optional[str] = None) -> ProfitAndLoss:
        return profit_and_loss(self._transactions, period=period, catalog=self._catalog)

    def deduction_summary(self) -> DeductionSummary:
        return deduction_summary(self._transactions, catalog=self._catalog)

    def search(self, flt: TransactionFilter) -> tuple[Transaction, ...]:
        """Transactions matching a filter, in snapshot order."""
        return filter_transactions(self._transactions, flt, catalog=self._catalog)
