"""Reservations API endpoints."""

from fastapi import APIRouter, HTTPException, status

from booking_engine.api.v1.dependencies import EngineDep, to_passenger
from booking_engine.exceptions import (
    LateConfirmationError,
    NotFoundError,
    SeatUnavailableError,
)
from booking_engine.schemas import (
    BookingResponse,
    ConfirmationResponse,
    PaymentResult,
    ReservationCreate,
    ReservationResponse,
    SuccessResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Hold a seat",
)
async def hold_seat(
    reservation_data: ReservationCreate,
    engine: EngineDep,
) -> ReservationResponse:
    """
    Place a timed hold on one seat.

    The hold expires after a configurable timeout (default 10 minutes)
    unless payment is confirmed first.
    """
    try:
        reservation = await engine.hold(
            flight_id=reservation_data.flight_id,
            seat_id=reservation_data.seat_id,
            passenger=to_passenger(reservation_data.passenger),
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except SeatUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    return ReservationResponse.model_validate(reservation)


@router.get(
    "",
    response_model=list[ReservationResponse],
    summary="List active holds",
)
async def list_reservations(
    engine: EngineDep,
    flight_id: str | None = None,
    passenger_id: str | None = None,
) -> list[ReservationResponse]:
    reservations = engine.reservations.list_active(flight_id, passenger_id)
    return [ReservationResponse.model_validate(r) for r in reservations]


@router.get(
    "/{reservation_id}",
    response_model=ReservationResponse,
    summary="Get reservation details",
)
async def get_reservation(reservation_id: str, engine: EngineDep) -> ReservationResponse:
    reservation = engine.get_reservation_by_id(reservation_id)
    if not reservation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reservation not found",
        )
    return ReservationResponse.model_validate(reservation)


@router.post(
    "/{reservation_id}/confirm",
    response_model=ConfirmationResponse,
    summary="Apply payment outcome",
)
async def confirm_reservation(
    reservation_id: str,
    payment: PaymentResult,
    engine: EngineDep,
) -> ConfirmationResponse:
    """
    Apply the payment outcome to a hold.

    Repeating a confirmation is harmless: closed holds are returned as they
    are without booking twice.
    """
    if not engine.get_reservation_by_id(reservation_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reservation not found",
        )

    try:
        booking = await engine.confirm(reservation_id, payment.payment_succeeded)
    except LateConfirmationError as e:
        # Payment was taken for a released seat; clients route this to support
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail={
                "error": "late_confirmation",
                "message": str(e),
                "reservation_id": e.reservation_id,
            },
        )

    return ConfirmationResponse(
        reservation=ReservationResponse.model_validate(engine.get_reservation_by_id(reservation_id)),
        booking=BookingResponse.model_validate(booking) if booking else None,
    )


@router.delete(
    "/{reservation_id}",
    response_model=SuccessResponse,
    summary="Cancel hold",
)
async def cancel_reservation(reservation_id: str, engine: EngineDep) -> SuccessResponse:
    """Release a held seat before payment."""
    try:
        cancelled = await engine.cancel_reservation(reservation_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    if not cancelled:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Reservation is no longer active",
        )

    return SuccessResponse(message="Reservation cancelled successfully")
