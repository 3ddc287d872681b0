"""In-memory repositories."""

import itertools
from collections import OrderedDict

from booking_engine.models import (
    Booking,
    Flight,
    Reservation,
    Seat,
    WaitingListEntry,
)
from booking_engine.repositories.base import (
    BookingRepository,
    FlightRepository,
    ReservationRepository,
    SeatRepository,
    WaitingListRepository,
)

# Closed reservations and lapsed offer ids kept for late lookups
DEFAULT_HISTORY_LIMIT = 10_000


class InMemoryFlightRepository(FlightRepository):
    def __init__(self):
        self._flights: dict[str, Flight] = {}

    def get(self, flight_id: str) -> Flight | None:
        flight = self._flights.get(flight_id)
        return flight.model_copy(deep=True) if flight else None

    def list_all(self) -> list[Flight]:
        return [f.model_copy(deep=True) for f in self._flights.values()]

    def save(self, flight: Flight) -> None:
        self._flights[flight.id] = flight.model_copy(deep=True)


class InMemorySeatRepository(SeatRepository):
    def __init__(self):
        # flight_id -> seat_id -> seat, insertion order is cabin order
        self._seats: dict[str, dict[str, Seat]] = {}

    def get(self, flight_id: str, seat_id: str) -> Seat | None:
        seat = self._seats.get(flight_id, {}).get(seat_id)
        return seat.model_copy(deep=True) if seat else None

    def list_for_flight(self, flight_id: str) -> list[Seat]:
        return [s.model_copy(deep=True) for s in self._seats.get(flight_id, {}).values()]

    def save(self, seat: Seat) -> None:
        self._seats.setdefault(seat.flight_id, {})[seat.id] = seat.model_copy(deep=True)


class InMemoryReservationRepository(ReservationRepository):
    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._active: dict[str, Reservation] = {}
        self._closed: OrderedDict[str, Reservation] = OrderedDict()
        self.history_limit = history_limit

    def add(self, reservation: Reservation) -> None:
        self._active[reservation.id] = reservation.model_copy(deep=True)

    def get(self, reservation_id: str) -> Reservation | None:
        reservation = self._active.get(reservation_id) or self._closed.get(reservation_id)
        return reservation.model_copy(deep=True) if reservation else None

    def list_active(self, flight_id: str | None = None) -> list[Reservation]:
        return [
            r.model_copy(deep=True)
            for r in self._active.values()
            if flight_id is None or r.flight_id == flight_id
        ]

    def close(self, reservation: Reservation) -> None:
        self._active.pop(reservation.id, None)
        self._closed[reservation.id] = reservation.model_copy(deep=True)
        while len(self._closed) > self.history_limit:
            self._closed.popitem(last=False)


class InMemoryBookingRepository(BookingRepository):
    def __init__(self):
        self._bookings: dict[str, Booking] = {}
        self._by_reference: dict[str, str] = {}

    def add(self, booking: Booking) -> None:
        if booking.id in self._bookings:
            raise ValueError(f"Booking {booking.id} already recorded")
        self._bookings[booking.id] = booking.model_copy(deep=True)
        self._by_reference[booking.booking_reference.upper()] = booking.id

    def get(self, booking_id: str) -> Booking | None:
        booking = self._bookings.get(booking_id)
        return booking.model_copy(deep=True) if booking else None

    def find_by_reference(self, reference: str) -> Booking | None:
        booking_id = self._by_reference.get(reference.strip().upper())
        return self.get(booking_id) if booking_id else None

    def list_all(self) -> list[Booking]:
        return [b.model_copy(deep=True) for b in self._bookings.values()]


class InMemoryWaitingListRepository(WaitingListRepository):
    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._entries: dict[str, dict[str, WaitingListEntry]] = {}
        self._lapsed: OrderedDict[str, None] = OrderedDict()
        self.history_limit = history_limit
        self._sequence = itertools.count(1)

    def next_sequence(self) -> int:
        return next(self._sequence)

    def add(self, entry: WaitingListEntry) -> None:
        self._entries.setdefault(entry.flight_id, {})[entry.id] = entry.model_copy(deep=True)

    def get(self, flight_id: str, entry_id: str) -> WaitingListEntry | None:
        entry = self._entries.get(flight_id, {}).get(entry_id)
        return entry.model_copy(deep=True) if entry else None

    def list_for_flight(self, flight_id: str) -> list[WaitingListEntry]:
        return [e.model_copy(deep=True) for e in self._entries.get(flight_id, {}).values()]

    def flight_ids(self) -> list[str]:
        return [flight_id for flight_id, entries in self._entries.items() if entries]

    def save(self, entry: WaitingListEntry) -> None:
        entries = self._entries.get(entry.flight_id, {})
        if entry.id in entries:
            entries[entry.id] = entry.model_copy(deep=True)

    def remove(self, entry: WaitingListEntry, lapsed: bool = False) -> None:
        self._entries.get(entry.flight_id, {}).pop(entry.id, None)
        if lapsed:
            self._lapsed[entry.id] = None
            while len(self._lapsed) > self.history_limit:
                self._lapsed.popitem(last=False)

    def was_lapsed(self, entry_id: str) -> bool:
        return entry_id in self._lapsed
