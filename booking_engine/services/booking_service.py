"""Booking ledger."""

from datetime import datetime

from ulid import ULID

from booking_engine.models import Booking, Flight, Reservation
from booking_engine.repositories import BookingRepository


def generate_booking_reference(flight_number: str) -> str:
    """Customer-facing reference, e.g. ``AA1234-X7K9M2``."""
    return f"{flight_number.replace(' ', '')}-{str(ULID())[-6:]}"


class BookingLedger:
    """Append-only store of paid bookings."""

    def __init__(self, bookings: BookingRepository):
        self.bookings = bookings

    def create_booking(
        self,
        reservation: Reservation,
        flight: Flight,
        booked_at: datetime,
    ) -> Booking:
        """Build the booking for a paid reservation and record it."""
        reference = generate_booking_reference(flight.flight_number)
        while self.bookings.find_by_reference(reference) is not None:
            reference = generate_booking_reference(flight.flight_number)

        booking = Booking(
            id=f"BKG-{ULID()}",
            booking_reference=reference,
            reservation_id=reservation.id,
            flight_id=flight.id,
            flight_number=flight.flight_number,
            passenger=reservation.passenger,
            seat_id=reservation.seat_id,
            seat_number=reservation.seat_number,
            ticket_class=reservation.ticket_class,
            price=flight.price.for_class(reservation.ticket_class),
            reserved_at=reservation.reserved_at,
            booked_at=booked_at,
        )
        self.bookings.add(booking)
        return booking

    def get_booking(self, booking_id: str) -> Booking | None:
        """Get booking by ID."""
        return self.bookings.get(booking_id)

    def find_by_reference(self, reference: str) -> Booking | None:
        """Get booking by reference, ignoring case."""
        return self.bookings.find_by_reference(reference)

    def list_for_passenger(self, passenger_id: str) -> list[Booking]:
        """Get bookings for a passenger, newest first."""
        bookings = [b for b in self.bookings.list_all() if b.passenger.id == passenger_id]
        return sorted(bookings, key=lambda b: b.booked_at, reverse=True)

    def list_all(self) -> list[Booking]:
        return self.bookings.list_all()
