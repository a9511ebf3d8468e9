"""
Invoice Model

Invoices are issued ex-GST; GST at the standard rate is added on top.
Storing and editing invoices is the application's job, so this module
only covers the record itself and a summary fold.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cashflow.models.money import ZERO, Number, to_decimal
from cashflow.models.transaction import TaxTreatmentCode

INVOICE_PREFIX = "INV-"


class InvoiceStatus(str, Enum):
    """Where an invoice is in its life."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class Invoice(BaseModel):
    """
    An invoice sent to a client.

    `amount` excludes GST; `total` = `amount` + `gst`.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Invoice number, e.g. INV-1045"
    )
    client: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=500)
    amount: Decimal = Field(..., ge=0, description="Amount excluding GST")
    gst: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)
    issue_date: date
    due_date: Optional[date] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT

    @model_validator(mode='after')
    def validate_invoice(self) -> 'Invoice':
        """Validate dates and that the total adds up."""
        if self.due_date and self.due_date < self.issue_date:
            raise ValueError("Due date cannot be before issue date")

        if self.amount + self.gst != self.total:
            raise ValueError("Invoice total must equal amount plus GST")

        return self

    @classmethod
    def create(
        cls,
        number: str,
        client: str,
        amount: Number,
        issue_date: date,
        description: str = "",
        due_date: Optional[date] = None,
    ) -> 'Invoice':
        """New draft invoice with GST added at the standard rate."""
        net = to_decimal(amount)
        gst = net * TaxTreatmentCode.STANDARD_RATE.rate
        return cls(
            number=number,
            client=client,
            description=description,
            amount=net,
            gst=gst,
            total=net + gst,
            issue_date=issue_date,
            due_date=due_date,
        )

    @property
    def is_outstanding(self) -> bool:
        return self.status in (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


def invoice_number(sequence: int) -> str:
    """Format an invoice number from its sequence, e.g. 1045 -> "INV-1045"."""
    return f"{INVOICE_PREFIX}{sequence}"


class InvoiceSummary(BaseModel):
    """Counts and totals (incl. GST) per status."""

    counts: dict[InvoiceStatus, int] = Field(default_factory=dict)
    totals: dict[InvoiceStatus, Decimal] = Field(default_factory=dict)
    gst_total: Decimal = ZERO

    @property
    def outstanding(self) -> Decimal:
        """Sent and overdue invoices not yet paid."""
        return (
            self.totals.get(InvoiceStatus.SENT, ZERO)
            + self.totals.get(InvoiceStatus.OVERDUE, ZERO)
        )


def summarize_invoices(invoices: Iterable[Invoice]) -> InvoiceSummary:
    """Fold invoices into per-status counts and totals."""
    counts = {status: 0 for status in InvoiceStatus}
    totals = {status: ZERO for status in InvoiceStatus}
    gst_total = ZERO

    for invoice in invoices:
        counts[invoice.status] += 1
        totals[invoice.status] += invoice.total
        gst_total += invoice.gst

    return InvoiceSummary(counts=counts, totals=totals, gst_total=gst_total)
