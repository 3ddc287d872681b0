"""System log and admin schemas."""

from datetime import datetime
from decimal import Decimal

from booking_engine.schemas.common import BaseSchema


class SystemLogResponse(BaseSchema):
    """Schema for system log entry response."""

    id: str
    timestamp: datetime
    action: str
    details: str
    flight_id: str | None = None
    passenger_id: str | None = None


class StatisticsResponse(BaseSchema):
    """System-wide totals."""

    total_flights: int
    total_seats: int
    available_seats: int
    reserved_seats: int
    booked_seats: int
    active_reservations: int
    waiting_list_size: int
    total_bookings: int
    revenue: Decimal


class SweepResponse(BaseSchema):
    """What a manual sweep changed."""

    expired_flights: list[str]
    lapsed_offer_flights: list[str]
    promoted_entries: list[str]
