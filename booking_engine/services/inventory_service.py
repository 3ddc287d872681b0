"""Seat inventory: per-seat status and per-flight counters."""

from collections import Counter
from datetime import datetime

from booking_engine.exceptions import NotFoundError, SeatStateError
from booking_engine.models import Flight, Seat, SeatStatus, TicketClass
from booking_engine.repositories import Repositories


class SeatInventory:
    """
    Source of truth for seat status and flight aggregate counts.

    Methods here do not lock; callers must hold the flight's critical
    section. Each transition writes the seat and its flight's counters
    together with no suspension point in between.
    """

    def __init__(self, repositories: Repositories, limited_threshold: int = 10):
        self.repositories = repositories
        self.limited_threshold = limited_threshold

    def get_flight(self, flight_id: str) -> Flight:
        flight = self.repositories.flights.get(flight_id)
        if flight is None:
            raise NotFoundError("Flight", flight_id)
        return flight

    def get_seat(self, flight_id: str, seat_id: str) -> Seat:
        seat = self.repositories.seats.get(flight_id, seat_id)
        if seat is None:
            raise NotFoundError("Seat", seat_id)
        return seat

    def list_seats(
        self,
        flight_id: str,
        status: SeatStatus | None = None,
        ticket_class: TicketClass | None = None,
    ) -> list[Seat]:
        """Read-only snapshot of a flight's seats with optional filtering."""
        self.get_flight(flight_id)
        seats = self.repositories.seats.list_for_flight(flight_id)
        if status:
            seats = [s for s in seats if s.status == status]
        if ticket_class:
            seats = [s for s in seats if s.ticket_class == ticket_class]
        return seats

    def first_available_seat(
        self,
        flight_id: str,
        preferred_class: TicketClass | None = None,
    ) -> Seat | None:
        """First free seat of the preferred class, else the first free seat."""
        available = self.list_seats(flight_id, status=SeatStatus.AVAILABLE)
        if preferred_class:
            for seat in available:
                if seat.ticket_class == preferred_class:
                    return seat
        return available[0] if available else None

    def reserve(
        self,
        flight_id: str,
        seat_id: str,
        passenger_id: str,
        until: datetime,
    ) -> bool:
        """
        Move a seat from Available to Reserved.

        Returns:
            False if the seat is already taken
        """
        flight = self.get_flight(flight_id)
        seat = self.get_seat(flight_id, seat_id)

        if seat.status != SeatStatus.AVAILABLE:
            return False

        seat.status = SeatStatus.RESERVED
        seat.reserved_by = passenger_id
        seat.reserved_until = until
        self._commit(flight, seat, SeatStatus.AVAILABLE, SeatStatus.RESERVED)
        return True

    def release(self, flight_id: str, seat_id: str) -> Seat:
        """Move a seat from Reserved back to Available."""
        flight = self.get_flight(flight_id)
        seat = self.get_seat(flight_id, seat_id)

        if seat.status != SeatStatus.RESERVED:
            raise SeatStateError(
                f"Cannot release seat {seat.seat_number} on {flight_id}: status is {seat.status.value}"
            )

        seat.status = SeatStatus.AVAILABLE
        seat.reserved_by = None
        seat.reserved_until = None
        self._commit(flight, seat, SeatStatus.RESERVED, SeatStatus.AVAILABLE)
        return seat

    def book(self, flight_id: str, seat_id: str) -> Seat:
        """Move a seat from Reserved to Booked."""
        flight = self.get_flight(flight_id)
        seat = self.get_seat(flight_id, seat_id)

        if seat.status != SeatStatus.RESERVED:
            raise SeatStateError(
                f"Cannot book seat {seat.seat_number} on {flight_id}: status is {seat.status.value}"
            )

        seat.status = SeatStatus.BOOKED
        seat.reserved_by = None
        seat.reserved_until = None
        self._commit(flight, seat, SeatStatus.RESERVED, SeatStatus.BOOKED)
        return seat

    def _commit(
        self,
        flight: Flight,
        seat: Seat,
        from_status: SeatStatus,
        to_status: SeatStatus,
    ) -> None:
        flight.apply_transition(from_status, to_status, self.limited_threshold)
        self.repositories.seats.save(seat)
        self.repositories.flights.save(flight)

    def seat_counts(self, flight_id: str) -> dict[SeatStatus, int]:
        counts = Counter(s.status for s in self.repositories.seats.list_for_flight(flight_id))
        return {status: counts.get(status, 0) for status in SeatStatus}

    def counts_match(self, flight_id: str) -> bool:
        """Check the flight counters against a recount of its seats."""
        flight = self.get_flight(flight_id)
        counts = self.seat_counts(flight_id)
        return (
            flight.counters_consistent()
            and counts[SeatStatus.AVAILABLE] == flight.available_seats
            and counts[SeatStatus.RESERVED] == flight.reserved_seats
            and counts[SeatStatus.BOOKED] == flight.booked_seats
        )
