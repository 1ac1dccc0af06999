"""
HTTP middleware
"""

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Tag every log event of a request with its id and log the request outcome.

    A client-supplied ``X-Request-ID`` is reused; otherwise one is generated.
    The id is returned in the same response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()
        logger.info("Request received", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request crashed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request finished",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_request_context()
