"""Waiting list schemas."""

from datetime import datetime

from pydantic import Field

from booking_engine.models import TicketClass
from booking_engine.schemas.common import BaseSchema
from booking_engine.schemas.passenger import PassengerSchema


class WaitingListJoin(BaseSchema):
    """Schema for joining a flight's waiting list."""

    flight_id: str = Field(..., min_length=1)
    ticket_class: TicketClass
    passenger: PassengerSchema


class WaitingListEntryResponse(BaseSchema):
    """Schema for waiting list entry response."""

    id: str
    flight_id: str
    passenger: PassengerSchema
    ticket_class: TicketClass
    priority: int
    joined_at: datetime
    position: int
    notified: bool
    notified_at: datetime | None = None
    notification_expires_at: datetime | None = None


class QueuePositionResponse(BaseSchema):
    """Live rank of an entry; -1 when it is no longer queued."""

    entry_id: str
    flight_id: str
    position: int


class QueueOverviewResponse(BaseSchema):
    """Ordered queue with the priority and normal lanes."""

    flight_id: str
    total: int
    entries: list[WaitingListEntryResponse]
    priority_lane: list[WaitingListEntryResponse]
    normal_lane: list[WaitingListEntryResponse]
    notified: list[WaitingListEntryResponse]
