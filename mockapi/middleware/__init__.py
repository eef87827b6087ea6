# Middleware package init
"""
MockAPI — Middleware Package
=============================

What:  Cross-cutting concerns applied to every request, kept out of the
       route handlers and the query engine.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Latency] → [API Headers] → [GZip] → [CORS] → Route

    1. Request ID: correlation ID for every log line of the request
    2. Logging: access line with status and duration (latency included)
    3. Latency: simulated network delay (skipped for OPTIONS, off in production)
    4. API Headers: X-API-Version and X-Response-Time
    5. GZip / CORS: FastAPI built-ins; CORS answers preflight requests
"""
