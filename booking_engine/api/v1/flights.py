"""Flights API endpoints."""

from fastapi import APIRouter, HTTPException, status

from booking_engine.api.v1.dependencies import EngineDep
from booking_engine.exceptions import NotFoundError
from booking_engine.models import SeatStatus, TicketClass
from booking_engine.schemas import FlightDatesResponse, FlightResponse, SeatResponse

router = APIRouter()


@router.get(
    "",
    response_model=list[FlightResponse],
    summary="Search flights",
)
async def search_flights(
    engine: EngineDep,
    origin: str | None = None,
    destination: str | None = None,
    date: str | None = None,
) -> list[FlightResponse]:
    """
    Search flights by route and date.

    Origin and destination match case-insensitively on any part of the
    airport name; the date must be exact (YYYY-MM-DD).
    """
    flights = engine.search_flights(origin, destination, date)
    return [FlightResponse.model_validate(f) for f in flights]


@router.get(
    "/dates",
    response_model=FlightDatesResponse,
    summary="Get departure dates for a route",
)
async def get_available_dates(
    engine: EngineDep,
    origin: str | None = None,
    destination: str | None = None,
) -> FlightDatesResponse:
    return FlightDatesResponse(
        origin=origin,
        destination=destination,
        dates=engine.available_dates(origin, destination),
    )


@router.get(
    "/{flight_id}",
    response_model=FlightResponse,
    summary="Get flight details",
)
async def get_flight(flight_id: str, engine: EngineDep) -> FlightResponse:
    """Get flight details with live seat counters."""
    flight = engine.get_flight_by_id(flight_id)
    if not flight:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flight not found",
        )
    return FlightResponse.model_validate(flight)


@router.get(
    "/{flight_id}/seats",
    response_model=list[SeatResponse],
    summary="Get seat map",
)
async def get_seats(
    flight_id: str,
    engine: EngineDep,
    status_filter: SeatStatus | None = None,
    ticket_class: TicketClass | None = None,
) -> list[SeatResponse]:
    """Get a flight's seats, optionally filtered by status and class."""
    try:
        seats = engine.inventory.list_seats(flight_id, status_filter, ticket_class)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return [SeatResponse.model_validate(s) for s in seats]
