"""Reservation schemas."""

from datetime import datetime

from pydantic import Field

from booking_engine.models import ReservationSource, ReservationStatus, TicketClass
from booking_engine.schemas.booking import BookingResponse
from booking_engine.schemas.common import BaseSchema
from booking_engine.schemas.passenger import PassengerSchema


class ReservationCreate(BaseSchema):
    """Schema for holding a seat."""

    flight_id: str = Field(..., min_length=1)
    seat_id: str = Field(..., min_length=1)
    passenger: PassengerSchema


class PaymentResult(BaseSchema):
    """Outcome reported by the payment collaborator."""

    payment_succeeded: bool


class ReservationResponse(BaseSchema):
    """Schema for reservation response."""

    id: str
    flight_id: str
    seat_id: str
    seat_number: str
    ticket_class: TicketClass
    passenger: PassengerSchema
    reserved_at: datetime
    expires_at: datetime
    status: ReservationStatus
    source: ReservationSource
    closed_at: datetime | None = None


class ConfirmationResponse(BaseSchema):
    """Result of applying a payment outcome."""

    reservation: ReservationResponse
    booking: BookingResponse | None = None
