"""
MockAPI — Simulated Latency Middleware
=======================================

What:  Delays every request by a random amount so frontends see loading
       states the way they would against a real network API.
How:   Sleeps uniform(min_ms, max_ms) milliseconds with asyncio.sleep before
       handing the request on. The event loop keeps serving other requests
       meanwhile.
When:  Enabled by settings.simulate_latency (on outside production unless
       LATENCY_ENABLED says otherwise). CORS preflights are never delayed.
"""

import asyncio
import logging
import random
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class LatencyMiddleware(BaseHTTPMiddleware):
    """
    Adds a random delay in [min_ms, max_ms] to each non-OPTIONS request.

    Args:
        min_ms, max_ms: Delay window in milliseconds
        sleep:          Awaitable sleep function (tests inject a recorder)
        rng:            Source of the uniform draw
    """

    def __init__(
        self,
        app,
        min_ms: int = 200,
        max_ms: int = 700,
        sleep: Optional[Callable] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(app)
        self.min_ms = min_ms
        self.max_ms = max_ms
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.Random()

    def next_delay(self) -> float:
        """Delay for the next request, in seconds."""
        return self._rng.uniform(self.min_ms, self.max_ms) / 1000

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method != "OPTIONS":
            delay = self.next_delay()
            logger.debug("Delaying %s %s by %.0fms", request.method, request.url.path, delay * 1000)
            await self._sleep(delay)
        return await call_next(request)
