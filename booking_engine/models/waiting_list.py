"""Waiting list entry model and priority rules."""

from datetime import datetime

from pydantic import BaseModel

from booking_engine.models.passenger import Passenger, PassengerType
from booking_engine.models.seat import TicketClass

CLASS_WEIGHTS = {
    TicketClass.FIRST: 3,
    TicketClass.BUSINESS: 2,
    TicketClass.ECONOMY: 1,
}

PASSENGER_WEIGHTS = {
    PassengerType.VIP: 10,
    PassengerType.FREQUENT_FLYER: 5,
    PassengerType.NORMAL: 0,
}


def priority_for(ticket_class: TicketClass, passenger_type: PassengerType) -> int:
    """Higher value is served first."""
    return CLASS_WEIGHTS[ticket_class] + PASSENGER_WEIGHTS[passenger_type]


class WaitingListEntry(BaseModel):
    """A passenger queued for a seat on one flight.

    ``position`` is the rank at join time and is not kept up to date; use
    the waiting list engine for the live rank.
    """

    id: str
    flight_id: str
    passenger: Passenger
    ticket_class: TicketClass
    joined_at: datetime
    sequence: int
    position: int
    notified: bool = False
    notified_at: datetime | None = None
    notification_expires_at: datetime | None = None

    @property
    def priority(self) -> int:
        return priority_for(self.ticket_class, self.passenger.type)

    @property
    def in_priority_lane(self) -> bool:
        """VIP, Frequent Flyer, Business and First share the priority lane."""
        return (
            self.passenger.type != PassengerType.NORMAL
            or self.ticket_class != TicketClass.ECONOMY
        )

    def sort_key(self) -> tuple[int, datetime, int]:
        # priority desc, joined_at asc, insertion order for identical timestamps
        return (-self.priority, self.joined_at, self.sequence)

    def offer_open(self, now: datetime) -> bool:
        return (
            self.notified
            and self.notification_expires_at is not None
            and self.notification_expires_at > now
        )
