"""Redis client for the shared flight-lock backend."""

import redis.asyncio as redis

from booking_engine.config import get_settings

settings = get_settings()

# Global Redis client
_redis_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Get Redis client instance."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
