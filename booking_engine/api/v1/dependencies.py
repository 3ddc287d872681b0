"""API dependencies."""

from typing import Annotated

from fastapi import Depends

from booking_engine.engine import BookingEngine, get_engine
from booking_engine.models import Passenger
from booking_engine.schemas import PassengerSchema

EngineDep = Annotated[BookingEngine, Depends(get_engine)]


def to_passenger(passenger: PassengerSchema) -> Passenger:
    """Convert request passenger details into the domain model."""
    return Passenger(**passenger.model_dump())
