"""Flight and seat schemas."""

from datetime import datetime
from decimal import Decimal

from booking_engine.models import FlightStatus, SeatStatus, TicketClass
from booking_engine.schemas.common import BaseSchema


class FareResponse(BaseSchema):
    """Per-class fares."""

    economy: Decimal
    business: Decimal
    first_class: Decimal


class FlightResponse(BaseSchema):
    """Schema for flight response."""

    id: str
    flight_number: str
    origin: str
    destination: str
    date: str
    departure_time: str
    arrival_time: str
    total_seats: int
    available_seats: int
    reserved_seats: int
    booked_seats: int
    price: FareResponse
    status: FlightStatus


class SeatResponse(BaseSchema):
    """Schema for seat response."""

    id: str
    flight_id: str
    seat_number: str
    row: int
    ticket_class: TicketClass
    status: SeatStatus
    reserved_until: datetime | None = None


class FlightDatesResponse(BaseSchema):
    """Departure dates for a route."""

    origin: str | None = None
    destination: str | None = None
    dates: list[str]
