"""
Category Catalog

Read-only lookup over the static category table, split into two disjoint
namespaces (income and expense). Keys are unique within a namespace; the
same key in both namespaces is allowed and means nothing.

Each namespace has a catch-all category that the classifier falls back to
when no keyword matches, which is what makes classification total.
"""

from functools import lru_cache
from typing import Iterable, Optional

from cashflow.catalog.categories import (
    ALL_CATEGORIES,
    OTHER_INCOME,
    PERSONAL_OTHER,
)
from cashflow.exceptions import CatalogError, UnknownCategoryError
from cashflow.models.transaction import (
    CategoryDefinition,
    Direction,
    TaxTreatmentCode,
)

CATCH_ALL = {
    Direction.INCOME: OTHER_INCOME,
    Direction.EXPENSE: PERSONAL_OTHER,
}

CATCH_ALL_KEYS = frozenset(CATCH_ALL.values())

# Tax code used when nothing matched, independent of the catch-all row.
FALLBACK_TAX_CODE = {
    Direction.INCOME: TaxTreatmentCode.ZERO_RATED,
    Direction.EXPENSE: TaxTreatmentCode.OUT_OF_SCOPE,
}


class CategoryCatalog:
    """
    Immutable category lookup.

    Built once from an ordered sequence of definitions. Declaration order
    is kept per namespace because keyword tie-breaks depend on it.
    """

    def __init__(self, definitions: Iterable[CategoryDefinition]):
        namespaces: dict[Direction, dict[str, CategoryDefinition]] = {
            Direction.INCOME: {},
            Direction.EXPENSE: {},
        }
        for definition in definitions:
            namespace = namespaces[definition.direction]
            if definition.key in namespace:
                raise CatalogError(
                    f"Duplicate {definition.direction.value} category: {definition.key!r}",
                    details={"category": definition.key},
                )
            for keyword in definition.keywords:
                if not keyword or keyword != keyword.lower():
                    raise CatalogError(
                        f"Keyword {keyword!r} in {definition.key!r} must be non-empty lowercase",
                        details={"category": definition.key, "keyword": keyword},
                    )
            namespace[definition.key] = definition

        for direction, key in CATCH_ALL.items():
            if key not in namespaces[direction]:
                raise CatalogError(
                    f"Missing {direction.value} catch-all category {key!r}",
                    details={"category": key},
                )

        self._namespaces = namespaces
        self._search_space = {
            direction: tuple(
                (definition.key, keyword)
                for definition in namespace.values()
                for keyword in definition.keywords
            )
            for direction, namespace in namespaces.items()
        }

    def by_direction_and_key(
        self,
        direction: Direction,
        key: str,
    ) -> Optional[CategoryDefinition]:
        """Return the definition, or None if the namespace has no such key."""
        return self._namespaces[Direction(direction)].get(key)

    def require(self, direction: Direction, key: str) -> CategoryDefinition:
        """Like by_direction_and_key but an unknown key is a contract violation."""
        definition = self.by_direction_and_key(direction, key)
        if definition is None:
            raise UnknownCategoryError(Direction(direction).value, key)
        return definition

    def keyword_search_space(self, direction: Direction) -> tuple[tuple[str, str], ...]:
        """All (category key, keyword) pairs of a namespace in declaration order."""
        return self._search_space[Direction(direction)]

    def categories(self, direction: Direction) -> tuple[CategoryDefinition, ...]:
        return tuple(self._namespaces[Direction(direction)].values())

    def catch_all(self, direction: Direction) -> CategoryDefinition:
        return self._namespaces[Direction(direction)][CATCH_ALL[Direction(direction)]]

    def deductible_keys(self) -> frozenset[str]:
        return frozenset(
            key
            for key, definition in self._namespaces[Direction.EXPENSE].items()
            if definition.deductible
        )

    def resolve_direction(
        self,
        key: str,
        prefer: Optional[Direction] = None,
    ) -> Optional[Direction]:
        """
        Find the namespace holding a key.

        `prefer` is checked first so a key present in both namespaces keeps
        the caller's current direction. Otherwise income wins.
        """
        order = [Direction.INCOME, Direction.EXPENSE]
        if prefer is not None:
            order.remove(Direction(prefer))
            order.insert(0, Direction(prefer))
        for direction in order:
            if key in self._namespaces[direction]:
                return direction
        return None

    def label_for(self, direction: Direction, key: str) -> str:
        """Display label, falling back to the raw key."""
        definition = self.by_direction_and_key(direction, key)
        return definition.label if definition else key

    def __len__(self) -> int:
        return sum(len(namespace) for namespace in self._namespaces.values())


@lru_cache()
def get_catalog() -> CategoryCatalog:
    """
    Get the default catalog (cached).

    The table is static, so one instance serves the whole process.
    """
    return CategoryCatalog(ALL_CATEGORIES)
