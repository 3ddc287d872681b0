"""Reservation model."""

import enum
from datetime import datetime

from pydantic import BaseModel

from booking_engine.models.passenger import Passenger
from booking_engine.models.seat import TicketClass


class ReservationStatus(str, enum.Enum):
    """Reservation status enum."""

    RESERVED = "Reserved"
    CONFIRMED = "Confirmed"
    EXPIRED = "Expired"
    PAYMENT_FAILED = "Payment Failed"
    CANCELLED = "Cancelled"


class ReservationSource(str, enum.Enum):
    """How the hold was created."""

    DIRECT = "direct"
    WAITING_LIST = "waiting_list"


class Reservation(BaseModel):
    """A timed hold binding one passenger to one seat on one flight."""

    id: str
    flight_id: str
    seat_id: str
    seat_number: str
    ticket_class: TicketClass
    passenger: Passenger
    reserved_at: datetime
    expires_at: datetime
    status: ReservationStatus = ReservationStatus.RESERVED
    source: ReservationSource = ReservationSource.DIRECT
    closed_at: datetime | None = None

    @property
    def passenger_id(self) -> str:
        return self.passenger.id

    @property
    def is_live(self) -> bool:
        return self.status == ReservationStatus.RESERVED
