"""Cache and counter key construction.

Every Redis key the service writes is built here so that writers and
invalidation patterns never drift apart. Keys follow
{prefix}:{domain}:{resource}:{parts...}.

Usage:
    keys = CacheKeys(prefix=settings.redis_key_prefix)

    keys.event_summary(
        user_id=user_id,
        event_type="click",
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 7),
        app_id=None,
    )
    # "beacon:analytics:summary:{user_id}:click:2024-03-01:2024-03-07:all"
"""

import re
from dataclasses import dataclass
from datetime import date
from uuid import UUID

ALL_APPS = "all"

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


def escape_glob(value: str) -> str:
    """Escape Redis glob metacharacters in a user-supplied key part."""
    return _GLOB_SPECIALS.sub(r"\\\1", value)


@dataclass
class CacheKeys:
    """Centralized key construction.

    Attributes:
        prefix: Namespace prepended to every key (typically "beacon").
    """

    prefix: str

    # -------------------------------------------------------------------------
    # Summary cache
    # -------------------------------------------------------------------------

    def event_summary(
        self,
        *,
        user_id: UUID,
        event_type: str,
        start_date: date,
        end_date: date,
        app_id: UUID | None,
    ) -> str:
        """Fingerprint of one summary query.

        Pattern: {prefix}:analytics:summary:{user}:{event}:{start}:{end}:{app|all}

        Keyword-only, so the same logical query always yields the same key.
        """
        scope = str(app_id) if app_id is not None else ALL_APPS
        return (
            f"{self.prefix}:analytics:summary:{user_id}:{event_type}:"
            f"{start_date.isoformat()}:{end_date.isoformat()}:{scope}"
        )

    def event_summary_patterns(
        self,
        *,
        user_id: UUID,
        event_type: str | None = None,
        app_id: UUID | None = None,
    ) -> list[str]:
        """Globs matching a user's cached summaries.

        Narrowed by event type and/or app when given. Narrowing by app also
        targets the unscoped ("all") entries, since they include that app's
        data.
        """
        event_part = escape_glob(event_type) if event_type is not None else "*"
        base = f"{self.prefix}:analytics:summary:{user_id}:{event_part}:*"
        if app_id is None:
            return [base]
        return [f"{base}:{app_id}", f"{base}:{ALL_APPS}"]

    # -------------------------------------------------------------------------
    # Rolling counters
    # -------------------------------------------------------------------------

    def event_count(self, *, app_id: UUID, event_type: str, day: str) -> str:
        """Pattern: {prefix}:count:{app_id}:{event_type}:{YYYY-MM-DD}"""
        return f"{self.prefix}:count:{app_id}:{event_type}:{day}"

    def unique_visitors(self, *, app_id: UUID, day: str) -> str:
        """Pattern: {prefix}:unique:{app_id}:{YYYY-MM-DD}"""
        return f"{self.prefix}:unique:{app_id}:{day}"
