"""Passenger model."""

import enum

from pydantic import BaseModel


class PassengerType(str, enum.Enum):
    """Loyalty tier enum."""

    NORMAL = "Normal"
    FREQUENT_FLYER = "Frequent Flyer"
    VIP = "VIP"


class Passenger(BaseModel):
    """Person holding or waiting for a seat."""

    id: str
    name: str
    email: str = ""
    phone: str = ""
    type: PassengerType = PassengerType.NORMAL
    loyalty_points: int | None = None
