"""
MockAPI — Command-Line Entry Point
===================================

What:  `python -m mockapi` (or the `mockapi` console script) prints the
       endpoint directory and serves the app with uvicorn.
How:   Host, port and log level come from settings (HOST, PORT, LOG_LEVEL).
"""

import logging

import uvicorn

from mockapi.config import settings
from mockapi.main import setup_logging

logger = logging.getLogger("mockapi")


def log_banner(host: str, port: int) -> None:
    base = f"http://localhost:{port}"
    lines = [
        "MockAPI REST server",
        f"Listening on http://{host}:{port}",
        f"Health check: {base}/api/health",
        "",
        "Available endpoints:",
        "   GET  /api/users/:id              - Get user profile",
        "   PUT  /api/users/:id              - Update user profile",
        "   GET  /api/users/:id/posts        - Get user posts",
        "   GET  /api/products               - Get products (with filtering)",
        "   GET  /api/categories             - Get product categories",
        "   GET  /api/movies                 - Get movies",
        "   GET  /api/cart                   - Get cart items",
        "",
        "Example URLs:",
        f"   {base}/api/users/1",
        f"   {base}/api/users/1/posts",
        f"   {base}/api/products?category=1&sort=price-low",
    ]
    if settings.simulate_latency:
        lines.append("")
        lines.append(
            f"Responses are delayed {settings.latency_min_ms}-{settings.latency_max_ms}ms "
            "(set ENVIRONMENT=production or LATENCY_ENABLED=false to disable)"
        )
    for line in lines:
        logger.info(line)


def main() -> None:
    setup_logging(settings)
    log_banner(settings.host, settings.port)
    uvicorn.run(
        "mockapi.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
