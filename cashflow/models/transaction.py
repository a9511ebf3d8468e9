"""
Core Data Models for CashFlow Bookkeeper

These models define the strict schemas for categories and transactions.
They are designed to:
1. Reject categories the catalog does not know at construction time
2. Be immutable (edits produce a new Transaction)
3. Be serializable to the persisted record shape
4. Carry money as Decimal only

DESIGN DECISION: Transactions are frozen pydantic models. The surrounding
application edits by replacement, so a snapshot handed to the aggregator
can never change underneath it.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from cashflow.models.money import ZERO, Number, to_decimal


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Direction(str, Enum):
    """Whether money came in or went out. Derived from the amount sign."""
    INCOME = "income"
    EXPENSE = "expense"


class TaxTreatmentCode(str, Enum):
    """
    How GST applies to a transaction.

    Only STANDARD_RATE carries a tax component in this jurisdiction; the
    other codes exist so reports can tell GST-free supplies apart from
    input-taxed and out-of-scope ones.
    """
    STANDARD_RATE = "standard_rate"
    ZERO_RATED = "zero_rated"
    INPUT_TAXED = "input_taxed"
    OUT_OF_SCOPE = "out_of_scope"

    @property
    def rate(self) -> Decimal:
        return _RATES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    def tax_component(self, amount: Decimal) -> Decimal:
        """
        Portion of a tax-inclusive amount that is GST.

        amount * rate / (1 + rate), so 110.00 at the standard rate gives 10.
        """
        rate = self.rate
        if not rate:
            return ZERO
        return amount * rate / (1 + rate)


_RATES = {
    TaxTreatmentCode.STANDARD_RATE: Decimal("0.10"),
    TaxTreatmentCode.ZERO_RATED: ZERO,
    TaxTreatmentCode.INPUT_TAXED: ZERO,
    TaxTreatmentCode.OUT_OF_SCOPE: ZERO,
}

_LABELS = {
    TaxTreatmentCode.STANDARD_RATE: "GST (10%)",
    TaxTreatmentCode.ZERO_RATED: "GST-Free",
    TaxTreatmentCode.INPUT_TAXED: "Input Taxed",
    TaxTreatmentCode.OUT_OF_SCOPE: "BAS Excluded",
}


# =============================================================================
# CATEGORY MODELS
# =============================================================================

class CategoryDefinition(BaseModel):
    """
    One row of the static category table.

    Keywords are matched as lowercase substrings; their order matters
    because ties on keyword length go to the first declared.
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    icon: str = ""
    direction: Direction
    tax_code: TaxTreatmentCode
    deductible: bool = False
    keywords: tuple[str, ...] = ()

    @model_validator(mode='after')
    def validate_income_not_deductible(self) -> 'CategoryDefinition':
        """Deductibility does not apply to revenue."""
        if self.direction == Direction.INCOME and self.deductible:
            raise ValueError(f"Income category {self.key!r} cannot be deductible")
        return self


class ClassificationResult(BaseModel):
    """What the classifier decided for one description/amount pair."""
    model_config = ConfigDict(frozen=True)

    direction: Direction
    category: str
    tax_code: TaxTreatmentCode


# =============================================================================
# TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single categorised bank or manual entry.

    CRITICAL: `category` must exist in the catalog namespace that matches
    `direction`. A violation raises UnknownCategoryError, which is a
    programming error rather than bad input.

    The sign of the original amount lives only in `direction`; `amount`
    is always the magnitude.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free-text description from the statement"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Magnitude in AUD"
    )
    direction: Direction
    category: str = Field(
        ...,
        min_length=1,
        description="Category key within the direction's namespace"
    )
    tax_code: TaxTreatmentCode
    is_business: bool = Field(
        default=False,
        description="Counts towards business reporting (P&L, BAS)"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
    )
    receipt_ref: Optional[str] = Field(
        default=None,
        description="Opaque reference to an attached receipt image"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount(cls, v: Any) -> Any:
        """Floats arrive from form input; keep them decimal-clean."""
        if isinstance(v, (float, str)):
            return to_decimal(v)
        return v

    @model_validator(mode='after')
    def validate_category(self, info: ValidationInfo) -> 'Transaction':
        """Category must be known in the namespace matching the direction."""
        from cashflow.catalog import get_catalog

        catalog = (info.context or {}).get("catalog")
        (catalog or get_catalog()).require(self.direction, self.category)
        return self

    @property
    def month(self) -> str:
        """Calendar month key, YYYY-MM."""
        return self.date.isoformat()[:7]

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.direction == Direction.INCOME else -self.amount

    @property
    def is_uncategorized(self) -> bool:
        from cashflow.catalog import CATCH_ALL_KEYS

        return self.category in CATCH_ALL_KEYS

    def to_record(self) -> dict:
        """
        Convert to the persisted record shape.

        The amount is written as a decimal string so a round trip through
        JSON never picks up float error.
        """
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": str(self.amount),
            "direction": self.direction.value,
            "category": self.category,
            "tax_code": self.tax_code.value,
            "is_business": self.is_business,
            "notes": self.notes,
            "receipt_ref": self.receipt_ref,
        }

    @classmethod
    def from_record(cls, record: dict) -> 'Transaction':
        """Rebuild a Transaction from `to_record()` output."""
        data = dict(record)
        amount: Number = data.get("amount", ZERO)
        data["amount"] = to_decimal(amount)
        return cls.model_validate(data)
