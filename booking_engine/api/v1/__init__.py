"""API v1 routers package."""

from booking_engine.api.v1.admin import router as admin_router
from booking_engine.api.v1.bookings import router as bookings_router
from booking_engine.api.v1.flights import router as flights_router
from booking_engine.api.v1.reservations import router as reservations_router
from booking_engine.api.v1.waiting_list import router as waiting_list_router

__all__ = [
    "flights_router",
    "reservations_router",
    "waiting_list_router",
    "bookings_router",
    "admin_router",
]
