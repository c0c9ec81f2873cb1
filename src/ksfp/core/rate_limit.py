"""
Rate Limiting Module

Sliding-window attempt limiting backed by Redis, falling back to in-memory
storage when Redis is unavailable.

Used to cap OTP verification attempts per phone number before any request
reaches the auth backend.
"""

import logging
import time

from redis.asyncio import Redis

from ksfp.core.redis import get_redis

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}


async def _check_rate_limit_redis(
    client: Redis,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using Redis.

    Uses a sliding window algorithm with Redis sorted sets.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "otp_attempts:+254712345678")
        limit: Maximum attempts allowed
        window_seconds: Time window in seconds

    Returns:
        True if the attempt is allowed, False if the limit is exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check rate limit using in-memory storage.

    Only covers the current process.
    """
    now = time.time()
    window_start = now - window_seconds

    attempts = [ts for ts in _memory_store.get(key, []) if ts > window_start]

    if len(attempts) >= limit:
        _memory_store[key] = attempts
        return False

    attempts.append(now)
    _memory_store[key] = attempts
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Record an attempt and report whether it is within the limit.

    Tries Redis first, falls back to in-memory storage.

    Args:
        key: Unique key for this limit
        limit: Maximum attempts allowed in the window
        window_seconds: Time window in seconds

    Returns:
        True if the attempt is allowed, False if the limit is exceeded
    """
    client = await get_redis()

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def reset_rate_limit(key: str) -> None:
    """Clear recorded attempts for a key (e.g. after a successful verification)."""
    _memory_store.pop(key, None)

    client = await get_redis()
    if client is not None:
        try:
            await client.delete(key)
        except Exception as e:
            logger.warning(f"Redis rate limit reset failed for {key}: {e}")


__all__ = [
    "check_rate_limit",
    "reset_rate_limit",
]
