"""API v1 main router."""

from fastapi import APIRouter

from booking_engine.api.v1.admin import router as admin_router
from booking_engine.api.v1.bookings import router as bookings_router
from booking_engine.api.v1.flights import router as flights_router
from booking_engine.api.v1.reservations import router as reservations_router
from booking_engine.api.v1.waiting_list import router as waiting_list_router

router = APIRouter(prefix="/v1")

router.include_router(flights_router, prefix="/flights", tags=["Flights"])
router.include_router(reservations_router, prefix="/reservations", tags=["Reservations"])
router.include_router(waiting_list_router, prefix="/waiting-list", tags=["Waiting List"])
router.include_router(bookings_router, prefix="/bookings", tags=["Bookings"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
