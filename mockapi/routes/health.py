"""
MockAPI — Health Check Route
=============================

What:  GET /api/health for monitoring and for frontends checking the mock is up.
How:   Reports whether the collection store loaded, plus server time, version,
       uptime and a directory of the main endpoints.

Status levels:
    - OK:       Store loaded; every data route can answer
    - DEGRADED: Data file failed to load; data routes answer 503
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from mockapi import __version__
from mockapi.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()

ENDPOINTS = {
    "users": "/api/users/:id",
    "userPosts": "/api/users/:id/posts",
    "products": "/api/products",
    "categories": "/api/categories",
    "movies": "/api/movies",
    "cart": "/api/cart",
}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns service status, store state, and the main endpoint paths.",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Report service status.

    The store is checked through app.state rather than the get_store
    dependency so that an unloaded store yields DEGRADED instead of a 503.
    """
    loaded = getattr(request.app.state, "store", None) is not None
    if not loaded:
        logger.warning("Health check: collection store is not loaded")

    return HealthResponse(
        status="OK" if loaded else "DEGRADED",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=__version__,
        store="loaded" if loaded else "unavailable",
        uptime_seconds=round(time.time() - _start_time, 2),
        endpoints=ENDPOINTS,
    )
