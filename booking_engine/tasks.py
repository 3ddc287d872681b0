"""Background tasks for the booking engine."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime

from booking_engine.models import WaitingListEntry
from booking_engine.services.reservation_service import ReservationManager
from booking_engine.services.waiting_list_service import WaitingListEngine

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    """What one sweep changed."""

    # flight id -> holds expired / offers lapsed on that flight
    expired_flights: dict[str, int] = field(default_factory=dict)
    lapsed_offer_flights: dict[str, int] = field(default_factory=dict)
    promoted: list[WaitingListEntry] = field(default_factory=list)

    @property
    def affected_flights(self) -> list[str]:
        return sorted(set(self.expired_flights) | set(self.lapsed_offer_flights))

    def freed_seats(self, flight_id: str) -> int:
        """Seats this sweep put back up for offer on a flight."""
        return self.expired_flights.get(flight_id, 0) + self.lapsed_offer_flights.get(flight_id, 0)


class ExpirySweeper:
    """
    Periodic expiry of holds and waiting-list offers.

    Each sweep:
    1. Expires holds past their deadline, releasing the seats
    2. Drops waiting-list offers past their deadline
    3. Promotes one waiter per freed seat or lapsed offer on every
       flight touched by 1 or 2
    """

    def __init__(
        self,
        reservations: ReservationManager,
        waiting_list: WaitingListEngine,
        interval_seconds: float = 5.0,
    ):
        self.reservations = reservations
        self.waiting_list = waiting_list
        self.interval_seconds = interval_seconds

    async def sweep(self, now: datetime | None = None) -> SweepResult:
        """Run one pass. Sweeping twice at the same instant changes nothing."""
        result = SweepResult(
            expired_flights=await self.reservations.expire_due(now),
            lapsed_offer_flights=await self.waiting_list.expire_offers(now),
        )

        for flight_id in result.affected_flights:
            try:
                entries = await self.waiting_list.promote_many(
                    flight_id, result.freed_seats(flight_id)
                )
            except Exception:
                logger.exception(f"Error promoting waiting list for flight {flight_id}")
                continue
            result.promoted.extend(entries)

        if result.affected_flights:
            logger.info(
                f"Sweep expired holds on {len(result.expired_flights)} flights, "
                f"offers on {len(result.lapsed_offer_flights)} flights, "
                f"promoted {len(result.promoted)} waiters"
            )
        return result

    async def run(self) -> None:
        """Sweep forever, every ``interval_seconds``."""
        logger.info("Starting expiry sweeper")

        while True:
            try:
                await self.sweep()
            except Exception as e:
                logger.error(f"Error in expiry sweeper: {e}", exc_info=True)

            await asyncio.sleep(self.interval_seconds)


class BackgroundTaskManager:
    """Manager for background tasks."""

    def __init__(self):
        self.tasks: list[asyncio.Task] = []

    async def start(self, sweeper: ExpirySweeper) -> None:
        """Start all background tasks."""
        self.tasks.append(asyncio.create_task(sweeper.run()))
        logger.info("Background tasks started")

    async def stop(self) -> None:
        """Stop all background tasks."""
        for task in self.tasks:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self.tasks.clear()
        logger.info("Background tasks stopped")


# Global instance
background_tasks = BackgroundTaskManager()
