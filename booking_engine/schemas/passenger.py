"""Passenger schemas."""

from pydantic import Field

from booking_engine.models import PassengerType
from booking_engine.schemas.common import BaseSchema


class PassengerSchema(BaseSchema):
    """Passenger details sent with holds and waiting-list joins."""

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = ""
    phone: str = ""
    type: PassengerType = PassengerType.NORMAL
    loyalty_points: int | None = Field(None, ge=0)
