"""Rate limit error type.

A denied request is NOT an error: it is a successful check returning
allowed=False. RateLimitError describes a misconfiguration (unknown tier)
that no fail-open default can paper over.
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitError(DomainError):
    """Rate limit system failure."""

    pass
