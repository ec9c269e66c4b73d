"""
Request Logging Middleware

One log line per HTTP request with method, path, status and duration.
For the scan stream the duration covers only the time until headers
are sent.
"""

import logging
import time

from fastapi import FastAPI, Request


logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI) -> None:
    """Attach the request logging middleware to the app."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response
