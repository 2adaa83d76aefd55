"""
Filmovi API — Request Context Middleware
=========================================

What:  Gives every request an ID and writes one access log line for it.
Why:   A client can quote the X-Request-ID of a failed call, and every log
       line of that call (access line, repository errors) carries the same ID.
How:   Reuses a client-supplied X-Request-ID or generates 8 characters of a
       UUID4, keeps it in `request_id_var` while the request runs and echoes
       it in the response header.

Access line:
    GET /filmovi/7 404 3.2ms [a1b2c3d4] film=7

    Level follows the status class: 5xx → ERROR, 4xx → WARNING, else INFO.
    /health is not logged. Request bodies are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("filmovi.access")

# Coroutine-local: concurrent requests on one event loop each see their own ID.
# The exception handlers read it too, including the catch-all one that runs
# outside this middleware.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

QUIET_PATHS = frozenset({"/health"})


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        started = time.perf_counter()

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        path = request.url.path
        if path not in QUIET_PATHS:
            # The router fills path_params on the shared scope during call_next
            movie_id = request.scope.get("path_params", {}).get("movie_id")
            logger.log(
                _status_level(response.status_code),
                "%s %s %d %.1fms [%s]%s",
                request.method,
                path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
                rid,
                f" film={movie_id}" if movie_id is not None else "",
            )
        return response
