"""
Request correlation and last-resort error handling.

Each request gets a correlation ID (taken from the client header or
generated) that is bound into every log event and echoed back in the
response. Anything that escapes a route becomes a generic 500 body:
stack traces stay in the logs.
"""

import time
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from heal.config.logging_config import bind_correlation_id, clear_context, get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def internal_error_response(correlation_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "correlation_id": correlation_id,
            "message": "Something went wrong on our side. Please try again.",
        },
        headers={CORRELATION_HEADER: correlation_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid4().hex
        bind_correlation_id(correlation_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error_type=type(e).__name__,
                duration_ms=int((time.perf_counter() - started) * 1000),
            )
            return internal_error_response(correlation_id)
        finally:
            clear_context()

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
