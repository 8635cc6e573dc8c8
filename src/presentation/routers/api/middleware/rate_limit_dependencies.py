"""Rate limit dependencies for FastAPI.

``rate_limit(tier)`` builds a dependency that admits or rejects the request
under a fixed-window tier. Rejections raise HTTP 429 with RFC 6585 headers;
admitted requests get the X-RateLimit-* headers on their response, error
responses included (see RateLimitHeadersMiddleware).

Identifier preference:
    1. Authenticated credential id (``request.state.api_key_id``)
    2. Authenticated user id (``request.state.user_id``)
    3. Client address (X-Forwarded-For, X-Real-IP, peer)
    4. "unknown"

The route generator places this dependency after the auth dependency, so
the identity is already on ``request.state``.

Fail-Open Design:
    Any limiter failure admits the request.

Usage:
    router.add_api_route(
        "/events",
        record_event,
        methods=["POST"],
        dependencies=[
            Depends(require_api_key),
            Depends(rate_limit(RateLimitTier.COLLECTION)),
        ],
    )
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status

from src.core.container import get_logger, get_rate_limit
from src.core.result import Failure, Success
from src.domain.enums import RateLimitTier
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rate_limit_protocol import RateLimitProtocol
from src.domain.value_objects.rate_limit_rule import RateLimitResult
from src.presentation.routers.api.middleware.client_ip import (
    UNKNOWN_CLIENT,
    get_client_ip,
)
from src.presentation.routers.api.middleware.rate_limit_headers_middleware import (
    RATE_LIMIT_HEADERS_STATE,
)

DEFAULT_REJECTION = "Too many requests, please try again later."


def get_rate_limit_identifier(request: Request) -> str:
    """Pick the most specific identity known for this request."""
    api_key_id = getattr(request.state, "api_key_id", None)
    if api_key_id is not None:
        return f"key:{api_key_id}"
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return f"user:{user_id}"
    return f"ip:{get_client_ip(request) or UNKNOWN_CLIENT}"


def _headers(result: RateLimitResult) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset_seconds),
    }


def rate_limit(
    tier: RateLimitTier,
) -> Callable[..., Awaitable[RateLimitResult]]:
    """Build the admission dependency for one tier."""

    async def check_rate_limit(
        request: Request,
        response: Response,
        limiter: Annotated[RateLimitProtocol, Depends(get_rate_limit)],
        logger: Annotated[LoggerProtocol, Depends(get_logger)],
    ) -> RateLimitResult:
        identifier = get_rate_limit_identifier(request)
        rule = limiter.rule_for(tier)

        match await limiter.is_allowed(tier=tier, identifier=identifier):
            case Success(value=result):
                pass
            case Failure(error=error):
                logger.warning(
                    "rate_limit_check_failed_fail_open",
                    tier=tier.value,
                    identifier=identifier,
                    error_message=error.message,
                )
                return RateLimitResult.fail_open(rule.max_requests if rule else 0)

        if not result.allowed:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=rule.message if rule else DEFAULT_REJECTION,
                headers={"Retry-After": str(result.retry_after), **_headers(result)},
            )

        headers = _headers(result)
        setattr(request.state, RATE_LIMIT_HEADERS_STATE, headers)
        response.headers.update(headers)
        return result

    return check_rate_limit
