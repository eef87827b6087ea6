"""
MockAPI — Generic Collection Routes
====================================

What:  json-server style CRUD over every collection in the store
       (users, posts, categories, movies, cart, and products by id).
How:   The collection name is a path parameter; handlers delegate to the
       injected CollectionStore. Writes live in memory until the process exits.

Route Inventory:
    GET    /api/{collection}          full list; query params filter by field equality
    GET    /api/{collection}/{id}     single record
    POST   /api/{collection}          insert, 201
    PUT    /api/{collection}/{id}     replace
    PATCH  /api/{collection}/{id}     shallow merge
    DELETE /api/{collection}/{id}     remove, returns {}

This router is mounted last so the specific routes (products, user posts,
health) win over the `{collection}` wildcard.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Request

from mockapi.schemas.common import ErrorResponse
from mockapi.services.relations import filter_by_fields
from mockapi.store import CollectionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Collections"],
    responses={
        404: {"description": "Unknown collection or record", "model": ErrorResponse},
        503: {"description": "Data store not loaded", "model": ErrorResponse},
    },
)


@router.get("/{collection}", response_model=List[Dict[str, Any]], summary="List a collection")
async def list_records(
    collection: str,
    request: Request,
    store: CollectionStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    records = store.all(collection)
    filters = dict(request.query_params)
    if filters:
        records = filter_by_fields(records, filters)
    return records


@router.get("/{collection}/{record_id}", response_model=Dict[str, Any], summary="Get one record")
async def get_record(
    collection: str,
    record_id: str,
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    return store.get(collection, record_id)


@router.post(
    "/{collection}",
    status_code=201,
    response_model=Dict[str, Any],
    responses={400: {"description": "Id already taken", "model": ErrorResponse}},
    summary="Create a record",
)
async def create_record(
    collection: str,
    payload: Dict[str, Any] = Body(...),
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    record = store.insert(collection, payload)
    logger.info("Created %s/%s", collection, record["id"])
    return record


@router.put("/{collection}/{record_id}", response_model=Dict[str, Any], summary="Replace a record")
async def replace_record(
    collection: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    record = store.replace(collection, record_id, payload)
    logger.info("Replaced %s/%s", collection, record_id)
    return record


@router.patch("/{collection}/{record_id}", response_model=Dict[str, Any], summary="Update a record")
async def update_record(
    collection: str,
    record_id: str,
    payload: Dict[str, Any] = Body(...),
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    record = store.update(collection, record_id, payload)
    logger.info("Updated %s/%s", collection, record_id)
    return record


@router.delete("/{collection}/{record_id}", response_model=Dict[str, Any], summary="Delete a record")
async def delete_record(
    collection: str,
    record_id: str,
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    store.delete(collection, record_id)
    logger.info("Deleted %s/%s", collection, record_id)
    return {}
