"""Storage abstractions for the booking engine."""

from dataclasses import dataclass, field

from booking_engine.repositories.base import (
    BookingRepository,
    FlightRepository,
    ReservationRepository,
    SeatRepository,
    WaitingListRepository,
)
from booking_engine.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryFlightRepository,
    InMemoryReservationRepository,
    InMemorySeatRepository,
    InMemoryWaitingListRepository,
)


@dataclass
class Repositories:
    """One repository per entity, injected into the services."""

    flights: FlightRepository = field(default_factory=InMemoryFlightRepository)
    seats: SeatRepository = field(default_factory=InMemorySeatRepository)
    reservations: ReservationRepository = field(default_factory=InMemoryReservationRepository)
    bookings: BookingRepository = field(default_factory=InMemoryBookingRepository)
    waiting_lists: WaitingListRepository = field(default_factory=InMemoryWaitingListRepository)


__all__ = [
    "Repositories",
    "BookingRepository",
    "FlightRepository",
    "ReservationRepository",
    "SeatRepository",
    "WaitingListRepository",
    "InMemoryBookingRepository",
    "InMemoryFlightRepository",
    "InMemoryReservationRepository",
    "InMemorySeatRepository",
    "InMemoryWaitingListRepository",
]
