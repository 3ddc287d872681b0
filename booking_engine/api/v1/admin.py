"""Admin API endpoints."""

from fastapi import APIRouter, Query

from booking_engine.api.v1.dependencies import EngineDep
from booking_engine.schemas import StatisticsResponse, SweepResponse, SystemLogResponse

router = APIRouter()


@router.get(
    "/logs",
    response_model=list[SystemLogResponse],
    summary="Get system log",
)
async def get_system_logs(
    engine: EngineDep,
    limit: int | None = Query(None, ge=1),
    flight_id: str | None = None,
) -> list[SystemLogResponse]:
    """Get recent state transitions, newest first."""
    return [SystemLogResponse.model_validate(e) for e in engine.list_system_logs(limit, flight_id)]


@router.get(
    "/statistics",
    response_model=StatisticsResponse,
    summary="Get system statistics",
)
async def get_statistics(engine: EngineDep) -> StatisticsResponse:
    return StatisticsResponse(**engine.statistics())


@router.post(
    "/sweep",
    response_model=SweepResponse,
    summary="Run expiry sweep now",
)
async def run_sweep(engine: EngineDep) -> SweepResponse:
    """Expire due holds and offers and promote waiters without waiting for the timer."""
    result = await engine.sweeper.sweep()
    return SweepResponse(
        expired_flights=sorted(result.expired_flights),
        lapsed_offer_flights=sorted(result.lapsed_offer_flights),
        promoted_entries=[e.id for e in result.promoted],
    )
