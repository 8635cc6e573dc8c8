"""Copies X-RateLimit-* headers onto every response of an admitted request.

The ``rate_limit(tier)`` dependency records the headers on
``request.state.rate_limit_headers``. Handlers that return their own
``JSONResponse`` (Problem Details for 400/404/500) bypass the injected
``Response``, so the headers are applied here instead. Headers already on
the response are left untouched.
"""

from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

RATE_LIMIT_HEADERS_STATE = "rate_limit_headers"


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        headers = getattr(request.state, RATE_LIMIT_HEADERS_STATE, None)
        if headers:
            for name, value in headers.items():
                response.headers.setdefault(name, value)
        return response
