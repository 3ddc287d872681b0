"""Booking schemas."""

from datetime import datetime
from decimal import Decimal

from booking_engine.models import BookingStatus, TicketClass
from booking_engine.schemas.common import BaseSchema
from booking_engine.schemas.passenger import PassengerSchema


class BookingResponse(BaseSchema):
    """Schema for booking response."""

    id: str
    booking_reference: str
    reservation_id: str
    flight_id: str
    flight_number: str
    passenger: PassengerSchema
    seat_id: str
    seat_number: str
    ticket_class: TicketClass
    price: Decimal
    reserved_at: datetime
    booked_at: datetime
    status: BookingStatus
