"""Flight lock tests for the in-process and Redis backends."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from booking_engine.engine import BookingEngine
from booking_engine.exceptions import FlightLockError
from booking_engine.flight_lock import DistributedLock, LocalFlightLocks, RedisFlightLocks

from tests.conftest import LAST_SEAT, TEST_FLIGHTS


class FakeRedis:
    """Just enough of redis.asyncio.Redis for SET NX EX locks."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.expirations: dict[str, int] = {}

    async def set(self, key, value, nx=False, ex=None):
        if nx and key in self.store:
            return None
        self.store[key] = value
        self.expirations[key] = ex
        return True

    def register_script(self, script):
        async def release(keys, args):
            if self.store.get(keys[0]) == args[0]:
                del self.store[keys[0]]
                return 1
            return 0

        return release


class TestLocalFlightLocks:
    @pytest.mark.asyncio
    async def test_hold_is_exclusive_per_flight(self):
        locks = LocalFlightLocks()
        order = []

        async def worker(name):
            async with locks.hold("FL100"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert order == ["a-in", "a-out", "b-in", "b-out"]

    @pytest.mark.asyncio
    async def test_flights_do_not_share_locks(self):
        locks = LocalFlightLocks()

        async with locks.hold("FL100"):
            assert locks.locked("FL100")
            async with locks.hold("FL200"):
                assert locks.locked("FL200")

        assert not locks.locked("FL100")
        assert not locks.locked("FL999")


class TestDistributedLock:
    @pytest.mark.asyncio
    async def test_acquire_and_release(self):
        redis = FakeRedis()
        lock = DistributedLock(redis, "flight:FL100", timeout_seconds=30)

        assert await lock.acquire() is True
        assert redis.store["lock:flight:FL100"] == lock.token
        assert redis.expirations["lock:flight:FL100"] == 30

        assert await lock.release() is True
        assert "lock:flight:FL100" not in redis.store

    @pytest.mark.asyncio
    async def test_second_owner_cannot_acquire(self):
        redis = FakeRedis()
        first = DistributedLock(redis, "flight:FL100")
        second = DistributedLock(redis, "flight:FL100", retry_delay_ms=1, max_retries=2)

        await first.acquire()

        assert await second.acquire(blocking=False) is False
        assert await second.acquire(blocking=True) is False
        assert await second.release() is False

    @pytest.mark.asyncio
    async def test_release_only_by_owner(self):
        redis = FakeRedis()
        lock = DistributedLock(redis, "flight:FL100")
        await lock.acquire()
        redis.store["lock:flight:FL100"] = "someone-else"

        assert await lock.release() is False
        assert redis.store["lock:flight:FL100"] == "someone-else"


class TestRedisFlightLocks:
    @pytest.mark.asyncio
    async def test_hold_acquires_and_releases(self):
        redis = FakeRedis()
        locks = RedisFlightLocks(redis, timeout_seconds=10)

        async with locks.hold("FL100"):
            assert "lock:flight:FL100" in redis.store

        assert redis.store == {}

    @pytest.mark.asyncio
    async def test_hold_releases_on_error(self):
        redis = FakeRedis()
        locks = RedisFlightLocks(redis)

        with pytest.raises(RuntimeError):
            async with locks.hold("FL100"):
                raise RuntimeError("boom")

        assert redis.store == {}

    @pytest.mark.asyncio
    async def test_hold_raises_when_lock_unavailable(self):
        locks = RedisFlightLocks(FakeRedis())

        with patch.object(DistributedLock, "acquire", AsyncMock(return_value=False)):
            with pytest.raises(FlightLockError):
                async with locks.hold("FL100"):
                    pass

    @pytest.mark.asyncio
    async def test_engine_runs_on_redis_locks(self, settings, clock, alice):
        engine = BookingEngine(settings=settings, clock=clock, locks=RedisFlightLocks(FakeRedis()))
        engine.seed(TEST_FLIGHTS)

        reservation = await engine.hold("FL100", LAST_SEAT, alice)
        booking = await engine.confirm(reservation.id, payment_succeeded=True)

        assert booking.seat_id == LAST_SEAT
        assert engine.locks.redis.store == {}
