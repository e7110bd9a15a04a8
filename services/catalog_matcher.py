"""
Catalog matcher.

Resolves an incoming item (code, name, unit label) against the product
catalog and the unit list. Two name strategies exist:

    TABULAR: case-insensitive equality only
    AI:      equality first, then either name containing the other

AI-extracted names are noisier than typed spreadsheets, hence the looser
rule. When a product matches, its name and unit replace the incoming ones.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from models.product import CatalogProduct, Unit
from models.reconciliation import MatchStrategy
from parsers.field_coercer import AI_UNKNOWN_NAME, TABULAR_UNKNOWN_NAME

# Fallback labels are never looked up in the catalog
PLACEHOLDER_NAMES = frozenset({AI_UNKNOWN_NAME, TABULAR_UNKNOWN_NAME})

SEARCH_LIMIT = 10


@dataclass
class MatchResult:
    """Finalized row fragment for one incoming item."""
    code: str
    name: str
    unit_id: str
    product: Optional[CatalogProduct] = None

    @property
    def matched(self) -> bool:
        return self.product is not None


# ===================
# NAME STRATEGIES
# ===================

def names_equal(incoming: str, known: str) -> bool:
    """Case-insensitive equality."""
    return incoming.lower() == known.lower()


def names_overlap(incoming: str, known: str) -> bool:
    """Either name contains the other, ignoring case."""
    a, b = incoming.lower(), known.lower()
    if not a or not b:
        return False
    return a in b or b in a


NamePredicate = Callable[[str, str], bool]

# Predicates tried in order over the whole catalog
NAME_STRATEGIES: dict[MatchStrategy, tuple[NamePredicate, ...]] = {
    MatchStrategy.TABULAR: (names_equal,),
    MatchStrategy.AI: (names_equal, names_overlap),
}


# ===================
# LOOKUPS
# ===================

def find_by_code(catalog: Iterable[CatalogProduct], code: str) -> Optional[CatalogProduct]:
    """First product whose code equals `code` exactly."""
    if not code:
        return None
    return next((p for p in catalog if p.code == code), None)


def find_by_name(
    catalog: list[CatalogProduct],
    name: str,
    strategy: MatchStrategy = MatchStrategy.TABULAR,
) -> Optional[CatalogProduct]:
    """First product whose name satisfies the strategy's predicates, tried in order."""
    if not name or name in PLACEHOLDER_NAMES:
        return None
    for predicate in NAME_STRATEGIES[strategy]:
        product = next((p for p in catalog if predicate(name, p.name)), None)
        if product is not None:
            return product
    return None


def find_unit_id(units: Iterable[Unit], label: str) -> str:
    """
    Unit id for a free-text unit label, or "".

    A unit matches when its name contains the label or the label contains
    its name ("كرتون" matches "كرتون كبير" both ways). Case-sensitive.
    """
    if not label:
        return ""
    for unit in units:
        if unit.name and (label in unit.name or unit.name in label):
            return unit.id
    return ""


def match_item(
    code: str,
    name: str,
    unit_label: str,
    catalog: list[CatalogProduct],
    units: list[Unit],
    strategy: MatchStrategy = MatchStrategy.TABULAR,
) -> MatchResult:
    """
    Resolve one coerced item against the catalog.

    Order: exact code, then name (per strategy). A matched product
    supplies name and unit (even an empty unit); the incoming code is
    kept. Only unmatched items get the unit-label lookup.

    Args:
        code: Coerced code ("" when absent)
        name: Coerced name ("" or a fallback label when absent)
        unit_label: Raw unit text ("" when absent)
        catalog: Known products
        units: Known units
        strategy: Name matching strategy

    Returns:
        MatchResult with the final code/name/unit_id and matched product
    """
    product = find_by_code(catalog, code)
    if product is None:
        product = find_by_name(catalog, name, strategy)

    if product is not None:
        return MatchResult(
            code=code,
            name=product.name,
            unit_id=product.unit_id,
            product=product,
        )

    return MatchResult(code=code, name=name, unit_id=find_unit_id(units, unit_label))


def search_products(
    catalog: Iterable[CatalogProduct],
    query: str,
    limit: int = SEARCH_LIMIT,
) -> list[CatalogProduct]:
    """Products whose name or code contains `query` (case-insensitive)."""
    q = query.strip().lower()
    if not q:
        return []
    hits = [p for p in catalog if q in p.name.lower() or q in p.code.lower()]
    return hits[:limit]
