"""
Correlation ID Middleware

Tags every request with a correlation ID so the log lines of a pipeline
triggered over HTTP can be traced back to the call that started it.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging import set_correlation_id


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Reads X-Correlation-ID (or generates one), exposes it to the logging
    processors and echoes it back on the response.
    """

    HEADER_NAME = "X-Correlation-ID"

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())

        set_correlation_id(correlation_id)
        structlog.contextvars.bind_contextvars(path=request.url.path)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("path")

        response.headers[self.HEADER_NAME] = correlation_id
        return response
