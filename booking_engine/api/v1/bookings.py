"""Bookings API endpoints."""

from fastapi import APIRouter, HTTPException, status

from booking_engine.api.v1.dependencies import EngineDep
from booking_engine.schemas import BookingResponse

router = APIRouter()


@router.get(
    "/reference/{booking_reference}",
    response_model=BookingResponse,
    summary="Find booking by reference",
)
async def find_booking(booking_reference: str, engine: EngineDep) -> BookingResponse:
    """Look up a booking by its customer-facing reference, ignoring case."""
    booking = engine.find_booking_by_reference(booking_reference)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return BookingResponse.model_validate(booking)


@router.get(
    "/passenger/{passenger_id}",
    response_model=list[BookingResponse],
    summary="Get passenger bookings",
)
async def get_passenger_bookings(passenger_id: str, engine: EngineDep) -> list[BookingResponse]:
    """Get all bookings for a passenger, newest first."""
    return [BookingResponse.model_validate(b) for b in engine.ledger.list_for_passenger(passenger_id)]


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get booking details",
)
async def get_booking(booking_id: str, engine: EngineDep) -> BookingResponse:
    booking = engine.ledger.get_booking(booking_id)
    if not booking:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return BookingResponse.model_validate(booking)
