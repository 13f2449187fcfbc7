from __future__ import annotations
import logging
import time
from dataclasses import dataclass

import redis.asyncio as redis
from redis.exceptions import RedisError
from fastapi import Depends, HTTPException, Request

from mediahub.core.config import settings


log = logging.getLogger(__name__)

WINDOW_SECONDS = 60

@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_seconds: int

class TokenRateLimiter:
    def __init__(self, redis_url: str):
        self.r = redis.from_url(redis_url, decode_responses=True)

    async def allow(self, *, key: str, limit: int, window_seconds: int) -> RateLimitResult:
        now = int(time.time())
        window = now // window_seconds
        rkey = f"rl:{key}:{window}"

        # INCR with expiry
        val = await self.r.incr(rkey)
        if val == 1:
            await self.r.expire(rkey, window_seconds)

        remaining = max(0, limit - val)
        reset = window_seconds - (now % window_seconds)
        return RateLimitResult(allowed=val <= limit, remaining=remaining, reset_seconds=reset)


# Create once (reuse Redis pool)
_limiter = TokenRateLimiter(settings.redis_url)


def get_limiter() -> TokenRateLimiter:
    return _limiter


def _client_key(request: Request) -> str:
    # X-Forwarded-For is client-controlled; only honour it behind a known proxy.
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_or_429(request: Request, limiter: TokenRateLimiter = Depends(get_limiter)) -> None:
    if not settings.rate_limit_enabled:
        return

    limit = settings.rate_limit_per_minute
    try:
        rl = await limiter.allow(
            key=f"gdrive:{_client_key(request)}",
            limit=limit,
            window_seconds=WINDOW_SECONDS,
        )
    except RedisError:
        # Limiter backend down: serve the request rather than fail it.
        log.exception("rate limiter unavailable; allowing request")
        return

    if not rl.allowed:
        raise HTTPException(
            status_code=429,
            detail="Rate limit exceeded",
            headers={"Retry-After": str(rl.reset_seconds)},
        )
