"""Per-flight critical sections.

Every mutation touching a flight's seats, counters, reservations or waiting
list runs while that flight's lock is held. Flights never share a lock.
"""

import asyncio
import uuid
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import redis.asyncio as redis

from booking_engine.config import get_settings
from booking_engine.exceptions import FlightLockError

settings = get_settings()


class FlightLocks(ABC):
    """Hands out one exclusive critical section per flight."""

    @abstractmethod
    def hold(self, flight_id: str):
        """Async context manager holding the flight's lock."""


class LocalFlightLocks(FlightLocks):
    """In-process locks, one ``asyncio.Lock`` per flight."""

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, flight_id: str) -> asyncio.Lock:
        lock = self._locks.get(flight_id)
        if lock is None:
            lock = self._locks[flight_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, flight_id: str) -> AsyncGenerator[None, None]:
        async with self._lock_for(flight_id):
            yield

    def locked(self, flight_id: str) -> bool:
        lock = self._locks.get(flight_id)
        return lock is not None and lock.locked()


class DistributedLock:
    """
    Redis-based lock for one key.

    Uses SET NX EX for acquisition and a Lua compare-and-delete so only the
    owner can release.
    """

    RELEASE_SCRIPT = """
    if redis.call("get", KEYS[1]) == ARGV[1] then
        return redis.call("del", KEYS[1])
    else
        return 0
    end
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        key: str,
        timeout_seconds: int | None = None,
        retry_delay_ms: int | None = None,
        max_retries: int | None = None,
    ):
        """
        Initialize distributed lock.

        Args:
            redis_client: Redis client instance
            key: Lock key name
            timeout_seconds: Lock expiration time in seconds
            retry_delay_ms: Delay between retry attempts in milliseconds
            max_retries: Maximum number of retry attempts
        """
        self.redis = redis_client
        self.key = f"lock:{key}"
        self.timeout_seconds = timeout_seconds or settings.LOCK_TIMEOUT_SECONDS
        self.retry_delay_ms = retry_delay_ms or settings.LOCK_RETRY_DELAY_MS
        self.max_retries = max_retries or settings.LOCK_MAX_RETRIES
        self.token: str | None = None
        self._release_script = self.redis.register_script(self.RELEASE_SCRIPT)

    async def acquire(self, blocking: bool = True) -> bool:
        """
        Acquire the lock.

        Args:
            blocking: If True, retry until lock is acquired or max retries reached.
                     If False, try once and return immediately.

        Returns:
            True if lock was acquired, False otherwise.
        """
        self.token = str(uuid.uuid4())
        retries = 0

        while True:
            acquired = await self.redis.set(
                self.key,
                self.token,
                nx=True,
                ex=self.timeout_seconds,
            )

            if acquired:
                return True

            if not blocking or retries >= self.max_retries:
                self.token = None
                return False

            retries += 1
            await asyncio.sleep(self.retry_delay_ms / 1000)

    async def release(self) -> bool:
        """
        Release the lock.

        Returns:
            True if lock was released, False if we didn't own the lock.
        """
        if self.token is None:
            return False

        result = await self._release_script(keys=[self.key], args=[self.token])
        self.token = None
        return bool(result)


class RedisFlightLocks(FlightLocks):
    """Flight locks shared by every process pointing at the same Redis."""

    def __init__(self, redis_client: redis.Redis, timeout_seconds: int | None = None):
        self.redis = redis_client
        self.timeout_seconds = timeout_seconds

    @asynccontextmanager
    async def hold(self, flight_id: str) -> AsyncGenerator[DistributedLock, None]:
        lock = DistributedLock(self.redis, f"flight:{flight_id}", self.timeout_seconds)
        if not await lock.acquire(blocking=True):
            raise FlightLockError(f"Failed to acquire lock for flight: {flight_id}")

        try:
            yield lock
        finally:
            await lock.release()
