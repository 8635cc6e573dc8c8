"""Redis-backed storage for fixed-window rate limiting.

The whole read-rollover-compare-increment-expire sequence runs inside one
Lua script (EVALSHA), so concurrent requests for the same key can never lose
an increment or split a window.

Errors are returned as Failure; the adapter above decides to fail open.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any

from redis.exceptions import NoScriptError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.value_objects.rate_limit_rule import RateLimitRule
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


@dataclass(frozen=True, slots=True)
class WindowState:
    """State of a window after one hit.

    Attributes:
        allowed: Whether this hit was admitted.
        request_count: Requests counted in the window (excluding a denied hit).
        window_start_ms: When the window opened (epoch milliseconds).
    """

    allowed: bool
    request_count: int
    window_start_ms: int


@dataclass(slots=True)
class _LuaRefs:
    """Holds loaded Lua script SHA references."""

    fixed_window_sha: str | None = None


class RedisStorage:
    """Executes the fixed-window script against Redis.

    Args:
        redis_client: An async Redis client (redis.asyncio.Redis compatible).
    """

    def __init__(self, *, redis_client: Any) -> None:
        self.redis = redis_client
        self._lua = _LuaRefs()
        self._script_lock = asyncio.Lock()

    async def hit(
        self,
        *,
        key: str,
        rule: RateLimitRule,
        now_ms: int,
    ) -> Result[WindowState, CacheError]:
        """Count one request against ``key``.

        Args:
            key: Full Redis key of the window.
            rule: Quota and window length.
            now_ms: Current time in epoch milliseconds.
        """
        try:
            resp = await self._run(key=key, rule=rule, now_ms=now_ms)
            return Success(
                value=WindowState(
                    allowed=bool(int(resp[0])),
                    request_count=int(resp[1]),
                    window_start_ms=int(float(resp[2])),
                )
            )
        except Exception as exc:
            return Failure(
                error=CacheError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                    message="Rate limit window update failed",
                    details={"key": key, "error": str(exc), "type": type(exc).__name__},
                )
            )

    async def clear(self, *, key: str) -> Result[None, CacheError]:
        """Remove the window entry so the next hit opens a fresh window."""
        try:
            await self.redis.delete(key)
            return Success(value=None)
        except Exception as exc:
            return Failure(
                error=CacheError(
                    code=ErrorCode.RATE_LIMIT_CHECK_FAILED,
                    infrastructure_code=InfrastructureErrorCode.CACHE_DELETE_ERROR,
                    message="Failed to reset rate limit window",
                    details={"key": key, "error": str(exc)},
                )
            )

    # ---------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------
    async def _run(self, *, key: str, rule: RateLimitRule, now_ms: int) -> Any:
        args = (
            int(rule.max_requests),
            int(rule.window_ms),
            int(now_ms),
            int(rule.ttl_seconds),
        )
        sha = await self._ensure_script()
        try:
            return await self.redis.evalsha(sha, 1, key, *args)
        except NoScriptError:
            # Server restarted or SCRIPT FLUSH ran; reload once
            self._lua.fixed_window_sha = None
            sha = await self._ensure_script()
            return await self.redis.evalsha(sha, 1, key, *args)

    async def _ensure_script(self) -> str:
        """Load the fixed-window script into Redis and cache its SHA."""
        if self._lua.fixed_window_sha:
            return self._lua.fixed_window_sha
        async with self._script_lock:
            if self._lua.fixed_window_sha:
                return self._lua.fixed_window_sha
            script = await _read_lua_script("lua_scripts/fixed_window.lua")
            sha = await self.redis.script_load(script)
            if isinstance(sha, bytes):
                sha = sha.decode("utf-8")
            self._lua.fixed_window_sha = sha
            return sha


def _read_lua_script_sync(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def _read_lua_script(rel_path: str) -> str:
    """Read a Lua script next to this module without blocking the loop."""
    full_path = Path(__file__).parent / rel_path
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(_read_lua_script_sync, full_path))
