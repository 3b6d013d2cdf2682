"""Fixed-window rate limiting keyed by client IP."""

import logging
import math
import time
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import redis.asyncio as redis
from fastapi import Request, Response

from app.core.config import Settings
from app.core.errors import RateLimited

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the window resets

    def headers(self) -> Dict[str, str]:
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class MemoryRateLimitStore:
    """Per-process counters. Hits never await, so one event loop is safe."""

    def __init__(self, sweep_threshold: int = 10000, clock=time.monotonic):
        self._windows: Dict[str, Tuple[int, float]] = {}
        self.sweep_threshold = sweep_threshold
        self.clock = clock

    async def hit(self, key: str, window_seconds: int) -> Tuple[int, float]:
        """Count a hit and return (hits in window, seconds until reset)."""
        now = self.clock()
        if len(self._windows) > self.sweep_threshold:
            self._sweep(now)

        count, reset_at = self._windows.get(key, (0, 0.0))
        if reset_at <= now:
            count, reset_at = 0, now + window_seconds
        count += 1
        self._windows[key] = (count, reset_at)
        return count, reset_at - now

    def _sweep(self, now: float) -> None:
        expired = [k for k, (_, reset_at) in self._windows.items() if reset_at <= now]
        for k in expired:
            del self._windows[k]

    async def reset(self, key: str) -> None:
        self._windows.pop(key, None)


class RedisRateLimitStore:
    """Counters shared by every worker pointed at the same Redis."""

    def __init__(self, client: redis.Redis, prefix: str = "ratelimit"):
        self.redis = client
        self.prefix = prefix

    async def hit(self, key: str, window_seconds: int) -> Tuple[int, float]:
        redis_key = f"{self.prefix}:{key}"
        count = await self.redis.incr(redis_key)
        if count == 1:
            await self.redis.expire(redis_key, window_seconds)
            return count, float(window_seconds)

        ttl = await self.redis.ttl(redis_key)
        if ttl < 0:
            # Key lost its expiry; start the window over.
            await self.redis.expire(redis_key, window_seconds)
            ttl = window_seconds
        return count, float(ttl)

    async def reset(self, key: str) -> None:
        await self.redis.delete(f"{self.prefix}:{key}")


class RateLimiter:
    def __init__(self, name: str, max_requests: int, window_seconds: int, store, message: Optional[str] = None):
        self.name = name
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.store = store
        self.message = message

    async def check(self, client_id: str) -> RateLimitResult:
        count, reset_after = await self.store.hit(f"{self.name}:{client_id}", self.window_seconds)
        result = RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=max(math.ceil(reset_after), 0),
        )
        if not result.allowed:
            logger.warning(
                f"Rate limit '{self.name}' exceeded for {client_id}: "
                f"{count} requests in {self.window_seconds}s window"
            )
        return result

    async def enforce(self, client_id: str) -> RateLimitResult:
        result = await self.check(client_id)
        if not result.allowed:
            raise RateLimited(self.message, headers=result.headers())
        return result


def create_store(settings: Settings):
    if settings.redis_url:
        return RedisRateLimitStore(redis.from_url(settings.redis_url, decode_responses=True))
    return MemoryRateLimitStore()


def create_limiters(settings: Settings, store=None) -> Dict[str, RateLimiter]:
    store = store or create_store(settings)
    form_minutes = settings.form_rate_window_seconds // 60
    return {
        "global": RateLimiter(
            "global",
            settings.global_rate_limit,
            settings.global_rate_window_seconds,
            store,
        ),
        "form": RateLimiter(
            "form",
            settings.form_rate_limit,
            settings.form_rate_window_seconds,
            store,
            message=f"Too many requests. Please wait {form_minutes} minutes and try again.",
        ),
    }


def client_ip(request: Request, trust_proxy: bool = False) -> str:
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


async def form_rate_limit(request: Request, response: Response) -> None:
    """Route dependency applying the per-IP form submission limit."""
    settings = request.app.state.settings
    limiter = request.app.state.limiters["form"]
    result = await limiter.enforce(client_ip(request, settings.trust_proxy))
    for name, value in result.headers().items():
        response.headers[name] = value
