"""Seat model."""

import enum
from datetime import datetime

from pydantic import BaseModel


class TicketClass(str, enum.Enum):
    """Ticket class enum."""

    ECONOMY = "Economy"
    BUSINESS = "Business"
    FIRST = "First Class"


class SeatStatus(str, enum.Enum):
    """Seat status enum."""

    AVAILABLE = "Available"
    RESERVED = "Reserved"
    BOOKED = "Booked"


class Seat(BaseModel):
    """A seat on one flight.

    Created once with the flight and never destroyed. Cycles
    Available -> Reserved -> Available/Booked; Booked is terminal.
    """

    id: str
    flight_id: str
    seat_number: str
    row: int
    ticket_class: TicketClass
    status: SeatStatus = SeatStatus.AVAILABLE
    reserved_by: str | None = None
    reserved_until: datetime | None = None
