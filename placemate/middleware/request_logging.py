"""
HTTP request logging.

Logs one line per request: method, path, status and duration.
"""

import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next):
    """HTTP middleware; register with ``app.middleware("http")(log_requests)``."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = (time.perf_counter() - started) * 1000.0
        logger.info(f"{request.method} {request.url.path} {status_code} {duration_ms:.1f}ms")
