"""
MockAPI — Shared Response Schemas
==================================

What:  Pydantic models for the error body and the health check.
How:   FastAPI uses these for response validation and OpenAPI docs. Data
       routes return the raw JSON records unchanged, so they have no model.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "not_found", "store_unavailable")
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "movies with ID '99' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response with a directory of the main endpoints.
    Who:   Returned by GET /api/health.
    """
    status: str = Field(description="OK when the store is loaded, DEGRADED otherwise")
    timestamp: str = Field(description="Current server time (UTC ISO 8601)")
    version: str = Field(description="Application version")
    store: str = Field(description="Collection store state: loaded, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
    endpoints: Dict[str, str] = Field(description="Main endpoint paths by name")
