"""Logging middleware for FastAPI.

Adds a per-request UUID, binds it into the logging contextvars, and measures latency.
"""

import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from search_spellcheck.core.logging_config import (
    bind_request_context,
    log_request,
    reset_request_context,
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests/responses with timing and a request id header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        tokens = bind_request_context(request_id=request_id)

        start_time = time.time()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.time() - start_time) * 1000
            log_request(
                method=request.method,
                endpoint=request.url.path,
                status_code=response.status_code if response else 500,
                duration_ms=duration_ms,
                request_id=request_id,
            )
            reset_request_context(tokens)

        response.headers["X-Request-ID"] = request_id
        return response
