"""
MockAPI — User Route Handlers
==============================

What:  GET /api/users/{id}/posts — the posts written by one user.
How:   Filters the posts collection by userId; original order kept.

A user with no posts gets an empty list, not a 404. The user record itself
is served by the generic collection routes (GET/PUT /api/users/{id}).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from mockapi.schemas.common import ErrorResponse
from mockapi.services.relations import posts_for_user
from mockapi.store import CollectionStore, get_store

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users/{user_id}/posts",
    response_model=List[Dict[str, Any]],
    responses={
        503: {"description": "Data store not loaded", "model": ErrorResponse},
    },
    summary="List posts written by a user",
)
async def list_user_posts(
    user_id: str,
    store: CollectionStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    return posts_for_user(store.all("posts"), user_id)
