"""Booking engine facade.

Wires the clock, repositories, flight locks, services and sweeper together
and exposes the operations the API layer calls.
"""

import logging
from datetime import timedelta
from typing import Any

from booking_engine.catalog import DEMO_FLIGHTS, load_catalog
from booking_engine.clock import Clock, SystemClock
from booking_engine.config import Settings, get_settings
from booking_engine.flight_lock import FlightLocks, LocalFlightLocks, RedisFlightLocks
from booking_engine.models import (
    Booking,
    Flight,
    Passenger,
    Reservation,
    SystemLogEntry,
    TicketClass,
    WaitingListEntry,
)
from booking_engine.redis_client import get_redis
from booking_engine.repositories import (
    InMemoryReservationRepository,
    InMemoryWaitingListRepository,
    Repositories,
)
from booking_engine.services import (
    BookingLedger,
    FlightService,
    ReservationManager,
    SeatInventory,
    WaitingListEngine,
)
from booking_engine.system_log import SystemLog
from booking_engine.tasks import ExpirySweeper

logger = logging.getLogger(__name__)


def build_flight_locks(settings: Settings) -> FlightLocks:
    """Pick the lock backend named by ``LOCK_BACKEND``."""
    if settings.LOCK_BACKEND == "redis":
        logger.info("Using Redis flight locks")
        return RedisFlightLocks(get_redis(), settings.LOCK_TIMEOUT_SECONDS)
    if settings.LOCK_BACKEND != "local":
        raise ValueError(f"Unknown lock backend: {settings.LOCK_BACKEND}")
    return LocalFlightLocks()


class BookingEngine:
    """One airline's seats, holds, waiting lists and bookings."""

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Clock | None = None,
        repositories: Repositories | None = None,
        locks: FlightLocks | None = None,
    ):
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.repositories = repositories or Repositories(
            reservations=InMemoryReservationRepository(self.settings.HISTORY_LIMIT),
            waiting_lists=InMemoryWaitingListRepository(self.settings.HISTORY_LIMIT),
        )
        self.locks = locks or build_flight_locks(self.settings)

        self.system_log = SystemLog(self.clock, self.settings.SYSTEM_LOG_CAPACITY)
        self.flights = FlightService(self.repositories)
        self.inventory = SeatInventory(self.repositories, self.settings.LIMITED_SEATS_THRESHOLD)
        self.ledger = BookingLedger(self.repositories.bookings)
        self.reservations = ReservationManager(
            self.repositories,
            self.inventory,
            self.ledger,
            self.locks,
            self.clock,
            self.system_log,
            hold_duration=timedelta(seconds=self.settings.RESERVATION_TIMEOUT_SECONDS),
        )
        self.waiting_list = WaitingListEngine(
            self.repositories,
            self.inventory,
            self.reservations,
            self.locks,
            self.clock,
            self.system_log,
            offer_duration=timedelta(seconds=self.settings.OFFER_TIMEOUT_SECONDS),
        )
        self.sweeper = ExpirySweeper(
            self.reservations,
            self.waiting_list,
            interval_seconds=self.settings.SWEEP_INTERVAL_SECONDS,
        )

    def seed(self, flights: list[tuple[Flight, int]] | None = None) -> None:
        """Load the demo catalog, or the given flights."""
        load_catalog(
            self.repositories,
            DEMO_FLIGHTS if flights is None else flights,
            self.settings.LIMITED_SEATS_THRESHOLD,
        )

    # Flights

    def search_flights(
        self,
        origin: str | None = None,
        destination: str | None = None,
        date: str | None = None,
    ) -> list[Flight]:
        return self.flights.search_flights(origin, destination, date)

    def available_dates(self, origin: str | None = None, destination: str | None = None) -> list[str]:
        return self.flights.available_dates(origin, destination)

    def get_flight_by_id(self, flight_id: str) -> Flight | None:
        return self.repositories.flights.get(flight_id)

    # Reservations

    async def hold(self, flight_id: str, seat_id: str, passenger: Passenger) -> Reservation:
        return await self.reservations.hold(flight_id, seat_id, passenger)

    async def confirm(self, reservation_id: str, payment_succeeded: bool) -> Booking | None:
        return await self.reservations.confirm(reservation_id, payment_succeeded)

    async def cancel_reservation(self, reservation_id: str) -> bool:
        return await self.reservations.cancel(reservation_id)

    def get_reservation_by_id(self, reservation_id: str) -> Reservation | None:
        return self.reservations.get_reservation(reservation_id)

    # Waiting list

    async def join(
        self,
        flight_id: str,
        passenger: Passenger,
        ticket_class: TicketClass,
    ) -> WaitingListEntry:
        return await self.waiting_list.join(flight_id, passenger, ticket_class)

    async def accept(self, entry_id: str, flight_id: str) -> Reservation | None:
        return await self.waiting_list.accept(entry_id, flight_id)

    def waiting_list_position(self, entry_id: str, flight_id: str) -> int:
        return self.waiting_list.position(entry_id, flight_id)

    def pending_offers(self, passenger_id: str) -> list[WaitingListEntry]:
        return self.waiting_list.pending_offers(passenger_id)

    def queue_overview(self, flight_id: str) -> dict[str, Any]:
        return self.waiting_list.queue_overview(flight_id)

    # Bookings

    def find_booking_by_reference(self, reference: str) -> Booking | None:
        return self.ledger.find_by_reference(reference)

    # Admin

    def list_system_logs(
        self,
        limit: int | None = None,
        flight_id: str | None = None,
    ) -> list[SystemLogEntry]:
        return self.system_log.list_entries(limit, flight_id)

    def statistics(self) -> dict[str, Any]:
        return self.flights.statistics()


_engine: BookingEngine | None = None


def get_engine() -> BookingEngine:
    """Get the process-wide engine, seeding it on first use if configured."""
    global _engine
    if _engine is None:
        _engine = BookingEngine()
        if _engine.settings.SEED_DEMO_DATA:
            _engine.seed()
    return _engine


def reset_engine() -> None:
    """Drop the process-wide engine."""
    global _engine
    _engine = None
