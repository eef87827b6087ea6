"""
MockAPI — Products Route Handler
=================================

What:  GET /api/products with category filter, availability filter,
       free-text search and sorting.
How:   Maps query parameters onto a QuerySpec, pulls the products collection
       from the injected store, and returns the query engine's result.

Query Parameters:
    category  categoryId to keep, or "all"                   (default: none)
    filter    all | in-stock | on-sale                       (default: all)
    search    case-insensitive text over name/description/tags
    sort      price-low | price-high | rating | newest | name (default: name)

    Unknown `filter`/`sort` values fall back to their defaults.

Example:
    GET /api/products?category=1&sort=price-low&filter=on-sale&search=wireless
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from mockapi.schemas.common import ErrorResponse
from mockapi.schemas.product import QuerySpec
from mockapi.services.product_query import query_products
from mockapi.store import CollectionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


@router.get(
    "/products",
    response_model=List[Dict[str, Any]],
    responses={
        200: {"description": "Matching products in the requested order"},
        503: {"description": "Data store not loaded", "model": ErrorResponse},
    },
    summary="List products with filtering, search and sorting",
)
async def list_products(
    response: Response,
    category: Optional[str] = Query(default=None, description="categoryId to keep, or 'all'"),
    sort: str = Query(
        default="name",
        description="price-low, price-high, rating, newest or name",
    ),
    availability: str = Query(
        default="all", alias="filter", description="all, in-stock or on-sale"
    ),
    search: Optional[str] = Query(default=None, description="Case-insensitive search term"),
    store: CollectionStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    spec = QuerySpec(category=category, availability=availability, search=search, sort_by=sort)
    products = query_products(store.all("products"), spec)

    logger.debug(
        "Product query %s matched %d products",
        spec.model_dump(mode="json"),
        len(products),
    )
    response.headers["X-Total-Count"] = str(len(products))
    return products
