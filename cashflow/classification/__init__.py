"""Classification and normalization package."""

from cashflow.classification.classifier import (
    best_keyword_match,
    classify,
    direction_for,
    normalize_description,
)
from cashflow.classification.normalizer import (
    UNKNOWN_DESCRIPTION,
    derive_is_business,
    fiscal_quarter,
    normalize,
    recategorize,
    set_business,
    toggle_business,
    with_notes,
    with_receipt,
)

__all__ = [
    "UNKNOWN_DESCRIPTION",
    "best_keyword_match",
    "classify",
    "derive_is_business",
    "direction_for",
    "fiscal_quarter",
    "normalize",
    "normalize_description",
    "recategorize",
    "set_business",
    "toggle_business",
    "with_notes",
    "with_receipt",
]
