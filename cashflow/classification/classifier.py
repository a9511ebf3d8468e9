"""
Keyword Classifier

Maps a statement description and signed amount to a direction, category
and GST code.

DESIGN DECISION: This is a longest-keyword-wins substring match, not a
scored model. It is deliberately simple so results are predictable and
reproducible:
- the sign alone decides income vs expense (zero counts as income)
- every keyword of the direction's namespace is tried
- the longest matching keyword wins, ties go to the first declared
- no match falls back to the namespace's catch-all

classify() never raises for odd descriptions and has no side effects.
"""

from typing import Optional

from cashflow.catalog import (
    CATCH_ALL,
    FALLBACK_TAX_CODE,
    CategoryCatalog,
    get_catalog,
)
from cashflow.models.money import ZERO, Number, to_decimal
from cashflow.models.transaction import ClassificationResult, Direction


def direction_for(signed_amount: Number) -> Direction:
    """Non-negative amounts are income, negative are expenses."""
    return Direction.INCOME if to_decimal(signed_amount) >= ZERO else Direction.EXPENSE


def normalize_description(description: Optional[str]) -> str:
    return (description or "").strip().lower()


def best_keyword_match(
    description: str,
    direction: Direction,
    catalog: CategoryCatalog,
) -> Optional[tuple[str, str]]:
    """
    Return the (category key, keyword) with the longest keyword found in
    the already-normalized description, or None.
    """
    best: Optional[tuple[str, str]] = None
    best_length = 0

    for key, keyword in catalog.keyword_search_space(direction):
        # Strictly longer only, so the first declared keeps a tie.
        if len(keyword) > best_length and keyword in description:
            best = (key, keyword)
            best_length = len(keyword)

    return best


def classify(
    description: str,
    signed_amount: Number,
    catalog: Optional[CategoryCatalog] = None,
) -> ClassificationResult:
    """
    Classify one transaction.

    Args:
        description: Free text from the statement or form
        signed_amount: Positive for money in, negative for money out
        catalog: Category table to use (defaults to the built-in one)

    Returns:
        ClassificationResult with direction, category key and GST code
    """
    catalog = catalog or get_catalog()
    direction = direction_for(signed_amount)

    match = best_keyword_match(normalize_description(description), direction, catalog)

    if match is None:
        return ClassificationResult(
            direction=direction,
            category=CATCH_ALL[direction],
            tax_code=FALLBACK_TAX_CODE[direction],
        )

    definition = catalog.require(direction, match[0])
    return ClassificationResult(
        direction=direction,
        category=definition.key,
        tax_code=definition.tax_code,
    )
