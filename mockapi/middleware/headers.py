"""
MockAPI — API Headers Middleware
=================================

What:  Stamps every response with the mock API's identity headers.

Headers:
    X-API-Version:   settings.api_version (e.g. "1.0")
    X-Response-Time: server clock when the response was produced,
                     in milliseconds since the Unix epoch
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class APIHeadersMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, api_version: str = "1.0"):
        super().__init__(app)
        self.api_version = api_version

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["X-API-Version"] = self.api_version
        response.headers["X-Response-Time"] = str(int(time.time() * 1000))
        return response
