"""Services package."""

from booking_engine.services.booking_service import BookingLedger, generate_booking_reference
from booking_engine.services.flight_service import FlightService
from booking_engine.services.inventory_service import SeatInventory
from booking_engine.services.reservation_service import ReservationManager
from booking_engine.services.waiting_list_service import WaitingListEngine, order_entries

__all__ = [
    "BookingLedger",
    "FlightService",
    "ReservationManager",
    "SeatInventory",
    "WaitingListEngine",
    "generate_booking_reference",
    "order_entries",
]
