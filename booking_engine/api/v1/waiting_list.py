"""Waiting list API endpoints."""

from fastapi import APIRouter, HTTPException, status

from booking_engine.api.v1.dependencies import EngineDep, to_passenger
from booking_engine.exceptions import NotFoundError, OfferExpiredError
from booking_engine.schemas import (
    QueueOverviewResponse,
    QueuePositionResponse,
    ReservationResponse,
    WaitingListEntryResponse,
    WaitingListJoin,
)

router = APIRouter()


@router.post(
    "",
    response_model=WaitingListEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Join waiting list",
)
async def join_waiting_list(
    join_data: WaitingListJoin,
    engine: EngineDep,
) -> WaitingListEntryResponse:
    """
    Queue for a seat on a flight.

    VIP and Frequent Flyer passengers, and higher ticket classes, are
    offered seats first.
    """
    try:
        entry = await engine.join(
            flight_id=join_data.flight_id,
            passenger=to_passenger(join_data.passenger),
            ticket_class=join_data.ticket_class,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    return WaitingListEntryResponse.model_validate(entry)


@router.get(
    "/offers/{passenger_id}",
    response_model=list[WaitingListEntryResponse],
    summary="Get open seat offers",
)
async def get_pending_offers(passenger_id: str, engine: EngineDep) -> list[WaitingListEntryResponse]:
    return [WaitingListEntryResponse.model_validate(e) for e in engine.pending_offers(passenger_id)]


@router.get(
    "/{flight_id}",
    response_model=QueueOverviewResponse,
    summary="Get waiting list",
)
async def get_waiting_list(flight_id: str, engine: EngineDep) -> QueueOverviewResponse:
    """Get a flight's queue in service order, split into lanes."""
    try:
        overview = engine.queue_overview(flight_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )

    def entries(key: str) -> list[WaitingListEntryResponse]:
        return [WaitingListEntryResponse.model_validate(e) for e in overview[key]]

    return QueueOverviewResponse(
        flight_id=flight_id,
        total=overview["total"],
        entries=entries("entries"),
        priority_lane=entries("priority_lane"),
        normal_lane=entries("normal_lane"),
        notified=entries("notified"),
    )


@router.get(
    "/{flight_id}/entries/{entry_id}/position",
    response_model=QueuePositionResponse,
    summary="Get live queue position",
)
async def get_position(flight_id: str, entry_id: str, engine: EngineDep) -> QueuePositionResponse:
    try:
        position = engine.waiting_list_position(entry_id, flight_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return QueuePositionResponse(entry_id=entry_id, flight_id=flight_id, position=position)


@router.post(
    "/{flight_id}/entries/{entry_id}/accept",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Accept seat offer",
)
async def accept_offer(flight_id: str, entry_id: str, engine: EngineDep) -> ReservationResponse:
    """Turn an open offer into a seat hold that then needs payment."""
    try:
        reservation = await engine.accept(entry_id, flight_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except OfferExpiredError as e:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail=str(e),
        )

    if not reservation:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No open offer for this entry",
        )

    return ReservationResponse.model_validate(reservation)
