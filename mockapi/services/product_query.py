"""
MockAPI — Product Query Engine
===============================

What:  Filters, searches and sorts the products collection for GET /api/products.
How:   A pure function over a list of JSON records. The input list and its
       records are never modified; a new list is returned.
Who:   Called by routes.products with records from the injected store.

Processing Order (fixed):
    category → availability → search → sort

    All filters are conjunctive predicates over a single record. Sorting
    uses Python's stable sort, so records with equal keys keep the order
    they had after filtering, including for the descending orderings.

Sort Dispatch:
    _SORT_ORDERS maps every SortKey to (key function, descending?). A new
    SortKey without an entry fails at import time.

Missing Fields:
    Records missing description/tags (or carrying nulls) never raise;
    they contribute nothing to a search match. Missing numbers sort as 0
    but never put a record on sale. Unparseable timestamps sort as the
    oldest possible instant.
"""

import unicodedata
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from mockapi.schemas.product import ALL_CATEGORIES, Availability, QuerySpec, SortKey

Product = Mapping[str, Any]

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Field Accessors
# ══════════════════════════════════════════════════════════════════════════


def _text(product: Product, field: str) -> str:
    value = product.get(field)
    return value if isinstance(value, str) else ""


def _number(product: Product, field: str) -> float:
    value = product.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _price_pair(product: Product) -> Optional[Tuple[float, float]]:
    """Return (price, originalPrice), or None when either is missing or non-numeric."""
    values = (product.get("price"), product.get("originalPrice"))
    if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in values):
        return None
    return float(values[0]), float(values[1])


def _timestamp(product: Product) -> datetime:
    """Parse `createdAt`; dates without an offset are taken as UTC."""
    value = product.get("createdAt")
    if not isinstance(value, str):
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _collation_key(name: str) -> str:
    # Accent- and case-insensitive ordering ("Éclair" sorts with "eclair")
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


# ══════════════════════════════════════════════════════════════════════════
# Predicates
# ══════════════════════════════════════════════════════════════════════════


def _in_category(product: Product, category: str) -> bool:
    return str(product.get("categoryId")) == category


def _is_available(product: Product, availability: Availability) -> bool:
    if availability is Availability.IN_STOCK:
        return bool(product.get("inStock"))
    if availability is Availability.ON_SALE:
        prices = _price_pair(product)
        return prices is not None and prices[0] < prices[1]
    return True


def _matches_search(product: Product, term: str) -> bool:
    if term in _text(product, "name").lower():
        return True
    if term in _text(product, "description").lower():
        return True
    tags = product.get("tags") or []
    return any(isinstance(tag, str) and term in tag.lower() for tag in tags)


# ══════════════════════════════════════════════════════════════════════════
# Sort Table
# ══════════════════════════════════════════════════════════════════════════

SortOrder = Tuple[Callable[[Product], Any], bool]

_SORT_ORDERS: Dict[SortKey, SortOrder] = {
    SortKey.PRICE_LOW: (lambda p: _number(p, "price"), False),
    SortKey.PRICE_HIGH: (lambda p: _number(p, "price"), True),
    SortKey.RATING: (lambda p: _number(p, "rating"), True),
    SortKey.NEWEST: (_timestamp, True),
    SortKey.NAME: (lambda p: _collation_key(_text(p, "name")), False),
}

_missing = set(SortKey) - set(_SORT_ORDERS)
if _missing:
    raise RuntimeError(f"No sort order registered for: {sorted(k.value for k in _missing)}")


# ══════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════


def query_products(products: Iterable[Product], spec: QuerySpec) -> List[Product]:
    """
    Apply a QuerySpec to a product collection.

    Args:
        products: The full product collection (not modified)
        spec:     Filters and sort key; every field is optional

    Returns:
        A new list of the matching records, ordered by spec.sort_by.
        Possibly empty, never None.

    Example:
        >>> query_products(products, QuerySpec(availability="on-sale", sort_by="price-low"))
    """
    results = list(products)

    if spec.category and spec.category != ALL_CATEGORIES:
        results = [p for p in results if _in_category(p, spec.category)]

    if spec.availability is not Availability.ALL:
        results = [p for p in results if _is_available(p, spec.availability)]

    if spec.search:
        term = spec.search.lower()
        results = [p for p in results if _matches_search(p, term)]

    key, descending = _SORT_ORDERS[spec.sort_by]
    results.sort(key=key, reverse=descending)
    return results
