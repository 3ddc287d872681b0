"""Booking model."""

import enum
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from booking_engine.models.passenger import Passenger
from booking_engine.models.seat import TicketClass


class BookingStatus(str, enum.Enum):
    """Booking status enum."""

    CONFIRMED = "Confirmed"


class Booking(BaseModel):
    """A paid booking. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    booking_reference: str
    reservation_id: str
    flight_id: str
    flight_number: str
    passenger: Passenger
    seat_id: str
    seat_number: str
    ticket_class: TicketClass
    price: Decimal
    reserved_at: datetime
    booked_at: datetime
    status: BookingStatus = BookingStatus.CONFIRMED

    @property
    def passenger_id(self) -> str:
        return self.passenger.id
