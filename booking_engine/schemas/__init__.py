"""Pydantic schemas for API request/response."""

from booking_engine.schemas.booking import BookingResponse
from booking_engine.schemas.common import ErrorResponse, SuccessResponse
from booking_engine.schemas.flight import FlightDatesResponse, FlightResponse, SeatResponse
from booking_engine.schemas.passenger import PassengerSchema
from booking_engine.schemas.reservation import (
    ConfirmationResponse,
    PaymentResult,
    ReservationCreate,
    ReservationResponse,
)
from booking_engine.schemas.system_log import (
    StatisticsResponse,
    SweepResponse,
    SystemLogResponse,
)
from booking_engine.schemas.waiting_list import (
    QueueOverviewResponse,
    QueuePositionResponse,
    WaitingListEntryResponse,
    WaitingListJoin,
)

__all__ = [
    "BookingResponse",
    "ConfirmationResponse",
    "ErrorResponse",
    "FlightDatesResponse",
    "FlightResponse",
    "PassengerSchema",
    "PaymentResult",
    "QueueOverviewResponse",
    "QueuePositionResponse",
    "ReservationCreate",
    "ReservationResponse",
    "SeatResponse",
    "StatisticsResponse",
    "SuccessResponse",
    "SweepResponse",
    "SystemLogResponse",
    "WaitingListEntryResponse",
    "WaitingListJoin",
]
