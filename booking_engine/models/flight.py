"""Flight model."""

import enum
from decimal import Decimal

from pydantic import BaseModel

from booking_engine.models.seat import SeatStatus, TicketClass


class FlightStatus(str, enum.Enum):
    """Flight availability status enum."""

    SEATS_AVAILABLE = "Seats Available"
    LIMITED_SEATS = "Limited Seats"
    FULLY_BOOKED = "Fully Booked"


def flight_status_for(available_seats: int, limited_threshold: int = 10) -> FlightStatus:
    """Status is a pure function of the available seat count."""
    if available_seats > limited_threshold:
        return FlightStatus.SEATS_AVAILABLE
    if available_seats > 0:
        return FlightStatus.LIMITED_SEATS
    return FlightStatus.FULLY_BOOKED


class FarePrices(BaseModel):
    """Per-class fares for a flight."""

    economy: Decimal
    business: Decimal
    first_class: Decimal

    def for_class(self, ticket_class: TicketClass) -> Decimal:
        if ticket_class == TicketClass.FIRST:
            return self.first_class
        if ticket_class == TicketClass.BUSINESS:
            return self.business
        return self.economy


_COUNTER_FIELDS = {
    SeatStatus.AVAILABLE: "available_seats",
    SeatStatus.RESERVED: "reserved_seats",
    SeatStatus.BOOKED: "booked_seats",
}


class Flight(BaseModel):
    """A scheduled flight with aggregate seat counters.

    ``available_seats + reserved_seats + booked_seats == total_seats`` holds
    whenever the flight is observable outside its critical section.
    """

    id: str
    flight_number: str
    origin: str
    destination: str
    date: str
    departure_time: str
    arrival_time: str
    total_seats: int
    available_seats: int
    reserved_seats: int = 0
    booked_seats: int = 0
    price: FarePrices
    status: FlightStatus = FlightStatus.SEATS_AVAILABLE

    def apply_transition(
        self,
        from_status: SeatStatus,
        to_status: SeatStatus,
        limited_threshold: int = 10,
    ) -> None:
        """Move one seat between counters and recompute the status."""
        from_field = _COUNTER_FIELDS[from_status]
        to_field = _COUNTER_FIELDS[to_status]
        setattr(self, from_field, getattr(self, from_field) - 1)
        setattr(self, to_field, getattr(self, to_field) + 1)
        self.refresh_status(limited_threshold)

    def refresh_status(self, limited_threshold: int = 10) -> None:
        self.status = flight_status_for(self.available_seats, limited_threshold)

    def counters_consistent(self) -> bool:
        return (
            self.available_seats + self.reserved_seats + self.booked_seats
            == self.total_seats
        )
