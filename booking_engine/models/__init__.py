"""Domain models."""

from booking_engine.models.booking import Booking, BookingStatus
from booking_engine.models.flight import FarePrices, Flight, FlightStatus, flight_status_for
from booking_engine.models.passenger import Passenger, PassengerType
from booking_engine.models.reservation import (
    Reservation,
    ReservationSource,
    ReservationStatus,
)
from booking_engine.models.seat import Seat, SeatStatus, TicketClass
from booking_engine.models.system_log import SystemLogEntry
from booking_engine.models.waiting_list import WaitingListEntry, priority_for

__all__ = [
    "Booking",
    "BookingStatus",
    "FarePrices",
    "Flight",
    "FlightStatus",
    "flight_status_for",
    "Passenger",
    "PassengerType",
    "Reservation",
    "ReservationSource",
    "ReservationStatus",
    "Seat",
    "SeatStatus",
    "TicketClass",
    "SystemLogEntry",
    "WaitingListEntry",
    "priority_for",
]
