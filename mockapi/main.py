"""
MockAPI — FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn mockapi.main:app) and by the test suite.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌─────────┐ ┌─────────┐ ┌─────────┐ ┌──────┐ │
    │  │ Req ID │→│ Logging │→│ Latency │→│ Headers │→│ CORS │ │
    │  └────────┘ └─────────┘ └─────────┘ └─────────┘ └──────┘ │
    │                                                          │
    │  Routes:                                                 │
    │  /api/health  /api/products  /api/users/{id}/posts       │
    │  /api/{collection}[/{id}]                                │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ NotFound→404 │ StoreUnavailable→503    │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the data file into the collection store (unless one was injected)
    3. Log the listening address

    Shutdown:
    1. Log shutdown complete (writes are in-memory only; nothing to flush)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mockapi import __version__
from mockapi.config import Settings, settings
from mockapi.exceptions import (
    MockAPIError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from mockapi.middleware.headers import APIHeadersMiddleware
from mockapi.middleware.latency import LatencyMiddleware
from mockapi.middleware.logging import RequestLoggingMiddleware
from mockapi.middleware.request_id import RequestIDMiddleware, request_id_var
from mockapi.routes import collections, health, products, users
from mockapi.store import CollectionStore, load_store

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings = settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    In production the access log is raised to WARNING so that only
    failed requests are reported.
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access line duplicates mockapi.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if config.is_production:
        logging.getLogger("mockapi.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Load the collection store on startup.

    A failed load does not stop the server: the health check still answers
    and data routes report 503 through the get_store dependency.
    """
    config: Settings = app.state.settings
    setup_logging(config)
    logger.info("=" * 60)
    logger.info("MockAPI %s starting up (%s)...", __version__, config.environment)

    if getattr(app.state, "store", None) is None:
        try:
            app.state.store = await load_store(config.data_file)
        except StoreUnavailableError as e:
            logger.error("Collection store unavailable: %s | Context: %s", e.message, e.context)
            logger.error("Fix DATA_FILE and restart the server.")

    if config.simulate_latency:
        logger.info("Simulated latency: %d-%dms", config.latency_min_ms, config.latency_max_ms)
    logger.info("Server ready at http://%s:%d", config.host, config.port)
    logger.info("Health check: http://%s:%d/api/health", config.host, config.port)
    logger.info("=" * 60)

    yield

    logger.info("MockAPI shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (body or params failed parsing)
        NotFoundError           → 404 Not Found
        StoreUnavailableError   → 503 Service Unavailable
        MockAPIError (base)     → 500 Internal Server Error
        HTTPException           → its own status (unmatched routes → 404)
        Exception (fallback)    → 500 Internal Server Error
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                "Request body or parameters are invalid",
                {"errors": jsonable_encoder(exc.errors())},
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error("[%s] Store unavailable: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=503,
            content=_error_body("store_unavailable", exc.message),
        )

    @app.exception_handler(MockAPIError)
    async def handle_app_error(request: Request, exc: MockAPIError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content=_error_body("not_found", "Not Found"),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("http_error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace goes to the server log only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    store: Optional[CollectionStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the module-level singleton)
        store:  Pre-built collection store; when given, startup skips
                reading the data file

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    config = config or settings

    app = FastAPI(
        title="MockAPI",
        description=(
            "Mock REST API serving seeded JSON collections (users, posts, products, "
            "categories, movies, cart) with product filtering, search and sorting."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added = outermost)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-Total-Count",
            "X-API-Version",
            "X-Response-Time",
        ],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(APIHeadersMiddleware, api_version=config.api_version)

    if config.simulate_latency:
        app.add_middleware(
            LatencyMiddleware,
            min_ms=config.latency_min_ms,
            max_ms=config.latency_max_ms,
        )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # Specific routes first; the {collection} wildcard router goes last
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(collections.router)

    return app


# uvicorn expects `mockapi.main:app` to be importable
app = create_app()
