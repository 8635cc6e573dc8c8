"""Rate limit protocol (port) for fixed-window admission control.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides the ADAPTER (FixedWindowAdapter)
- The presentation dependency uses the protocol only

Usage:
    rate_limit: RateLimitProtocol = Depends(get_rate_limit)

    result = await rate_limit.is_allowed(
        tier=RateLimitTier.ANALYTICS,
        identifier=str(api_key.id),
    )
    if not result.value.allowed:
        raise HTTPException(429, headers={"Retry-After": str(result.value.retry_after)})
"""

from typing import Protocol

from src.core.result import Result
from src.domain.enums import RateLimitTier
from src.domain.errors import RateLimitError
from src.domain.value_objects.rate_limit_rule import RateLimitResult, RateLimitRule


class RateLimitProtocol(Protocol):
    """Protocol for fixed-window rate limiting.

    Fail-Open Design:
        If the counter store is unreachable or slow, ``is_allowed`` MUST
        return Success with allowed=True. Quota enforcement never takes
        the request path down with it.
    """

    def rule_for(self, tier: RateLimitTier) -> RateLimitRule | None:
        """Configured rule for a tier, or None when the tier is unknown."""
        ...

    async def is_allowed(
        self,
        *,
        tier: RateLimitTier,
        identifier: str,
    ) -> Result[RateLimitResult, RateLimitError]:
        """Count the current request against ``tier`` for ``identifier``.

        Args:
            tier: Quota tier of the endpoint.
            identifier: Client identifier (credential id, user id or address).

        Returns:
            Success(RateLimitResult) with the decision and header values.
            Failure(RateLimitError) only when the tier is not configured.
        """
        ...

    async def reset(
        self,
        *,
        tier: RateLimitTier,
        identifier: str,
    ) -> Result[None, RateLimitError]:
        """Drop the current window for ``identifier``.

        Does NOT fail open: the caller needs to know whether it worked.
        """
        ...
