"""FastAPI middleware for request tracing and logging."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the structlog context for every request.

    An inbound X-Request-ID is reused so traces line up with the caller's;
    otherwise a UUID4 is generated. The ID is echoed on the response.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        logger.info("Request started")

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                exc_info=exc,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        else:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            # Prevent leakage into whatever this worker handles next
            structlog.contextvars.clear_contextvars()
