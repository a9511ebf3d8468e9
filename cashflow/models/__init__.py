"""
Data Models Package

This package contains all Pydantic models used in CashFlow Bookkeeper.
All data flowing through the system must conform to these schemas.
"""

from cashflow.models.money import ZERO, to_decimal, to_money
from cashflow.models.transaction import (
    CategoryDefinition,
    ClassificationResult,
    Direction,
    TaxTreatmentCode,
    Transaction,
)
from cashflow.models.aggregates import (
    AggregateViews,
    DeductionLine,
    DeductionSummary,
    FiscalQuarter,
    MonthlyAggregate,
    ProfitAndLoss,
    QuarterAggregate,
    ReportLine,
)
from cashflow.models.invoice import (
    Invoice,
    InvoiceStatus,
    InvoiceSummary,
    invoice_number,
    summarize_invoices,
)
from cashflow.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Money
    "ZERO",
    "to_decimal",
    "to_money",
    # Transaction models
    "CategoryDefinition",
    "ClassificationResult",
    "Direction",
    "TaxTreatmentCode",
    "Transaction",
    # Views
    "AggregateViews",
    "DeductionLine",
    "DeductionSummary",
    "FiscalQuarter",
    "MonthlyAggregate",
    "ProfitAndLoss",
    "QuarterAggregate",
    "ReportLine",
    # Invoices
    "Invoice",
    "InvoiceStatus",
    "InvoiceSummary",
    "invoice_number",
    "summarize_invoices",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
