"""
MockAPI — Product Query Schemas
================================

What:  The closed set of sort keys and availability filters, and the
       QuerySpec that drives one invocation of the product query engine.
How:   Unknown enum values are coerced to the default in a `before`
       validator, so building a QuerySpec from raw query parameters never
       fails.
Who:   Built by GET /api/products; consumed by services.product_query.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SortKey(str, Enum):
    """Result orderings accepted by the products endpoint."""

    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"
    NAME = "name"


class Availability(str, Enum):
    """Stock/discount filters accepted by the products endpoint."""

    ALL = "all"
    IN_STOCK = "in-stock"
    ON_SALE = "on-sale"


# Sentinel category value meaning "no category filter"
ALL_CATEGORIES = "all"


class QuerySpec(BaseModel):
    """
    What:  Optional filter/sort parameters for one product query.

    Fields:
        category:     keep products whose categoryId equals this value
                      ("all" or empty disables the filter)
        availability: all | in-stock | on-sale
        search:       case-insensitive substring over name, description, tags
        sort_by:      price-low | price-high | rating | newest | name

    Unrecognized availability/sort values fall back to ALL/NAME.
    """

    category: Optional[str] = Field(default=None, description="Category id or 'all'")
    availability: Availability = Field(default=Availability.ALL)
    search: Optional[str] = Field(default=None, description="Free-text search term")
    sort_by: SortKey = Field(default=SortKey.NAME)

    model_config = {"frozen": True}

    @field_validator("availability", mode="before")
    @classmethod
    def coerce_availability(cls, v: Any) -> Any:
        if isinstance(v, Availability):
            return v
        if not isinstance(v, str) or v not in {a.value for a in Availability}:
            return Availability.ALL
        return v

    @field_validator("sort_by", mode="before")
    @classmethod
    def coerce_sort_by(cls, v: Any) -> Any:
        if isinstance(v, SortKey):
            return v
        if not isinstance(v, str) or v not in {s.value for s in SortKey}:
            return SortKey.NAME
        return v
