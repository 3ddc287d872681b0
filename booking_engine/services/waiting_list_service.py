"""
Waiting list engine.

Passengers queue per flight when no seat suits them. When a seat frees up
the highest-priority waiter gets a time-boxed offer; accepting it turns the
offer into a regular hold. Priority is class weight plus loyalty weight,
ties go to whoever joined first. The order is recomputed from the backing
list on every read, so there is no heap to keep in sync.
"""

import logging
from datetime import datetime, timedelta
from typing import Any

from ulid import ULID

from booking_engine.clock import Clock
from booking_engine.exceptions import OfferExpiredError
from booking_engine.flight_lock import FlightLocks
from booking_engine.models import (
    Passenger,
    Reservation,
    ReservationSource,
    TicketClass,
    WaitingListEntry,
)
from booking_engine.repositories import Repositories
from booking_engine.services.inventory_service import SeatInventory
from booking_engine.services.reservation_service import ReservationManager
from booking_engine.system_log import SystemLog

logger = logging.getLogger(__name__)


def order_entries(entries: list[WaitingListEntry]) -> list[WaitingListEntry]:
    """Priority descending, then join time ascending."""
    return sorted(entries, key=lambda e: e.sort_key())


class WaitingListEngine:
    """Per-flight priority waiting lists and seat offers."""

    def __init__(
        self,
        repositories: Repositories,
        inventory: SeatInventory,
        reservations: ReservationManager,
        locks: FlightLocks,
        clock: Clock,
        system_log: SystemLog,
        offer_duration: timedelta = timedelta(minutes=5),
    ):
        self.repositories = repositories
        self.inventory = inventory
        self.reservations = reservations
        self.locks = locks
        self.clock = clock
        self.system_log = system_log
        self.offer_duration = offer_duration

        # Payment failures and cancellations promote inside the same critical section
        reservations.on_seat_released = self.promote_locked

    @property
    def entries(self):
        return self.repositories.waiting_lists

    async def join(
        self,
        flight_id: str,
        passenger: Passenger,
        ticket_class: TicketClass,
    ) -> WaitingListEntry:
        """
        Add a passenger to a flight's waiting list.

        The entry's position is its rank at join time and is not updated
        afterwards; see ``position``.

        Raises:
            NotFoundError: If the flight does not exist
        """
        async with self.locks.hold(flight_id):
            self.inventory.get_flight(flight_id)

            position = len(self.entries.list_for_flight(flight_id)) + 1
            entry = WaitingListEntry(
                id=f"WL-{ULID()}",
                flight_id=flight_id,
                passenger=passenger,
                ticket_class=ticket_class,
                joined_at=self.clock.now(),
                sequence=self.entries.next_sequence(),
                position=position,
            )
            self.entries.add(entry)

            self.system_log.append(
                "Joined waiting list",
                f"{passenger.name} joined waiting list at position {position}",
                flight_id=flight_id,
                passenger_id=passenger.id,
            )
            return entry

    async def promote(self, flight_id: str) -> WaitingListEntry | None:
        """
        Offer a free seat to the highest-priority waiter.

        Returns:
            The notified entry, or None if there was no free seat or nobody
            left to notify
        """
        async with self.locks.hold(flight_id):
            return self.promote_locked(flight_id)

    async def promote_many(self, flight_id: str, count: int) -> list[WaitingListEntry]:
        """
        Offer up to ``count`` freed seats, one waiter each, in priority order.

        Stops early once the flight has no free seat or nobody is left to
        notify.
        """
        promoted = []
        async with self.locks.hold(flight_id):
            for _ in range(count):
                entry = self.promote_locked(flight_id)
                if entry is None:
                    break
                promoted.append(entry)
        return promoted

    def promote_locked(self, flight_id: str) -> WaitingListEntry | None:
        """Promote one waiter. Caller must hold the flight lock."""
        flight = self.inventory.get_flight(flight_id)
        if flight.available_seats <= 0:
            return None

        candidates = [e for e in self.entries.list_for_flight(flight_id) if not e.notified]
        if not candidates:
            return None

        entry = order_entries(candidates)[0]
        now = self.clock.now()
        entry.notified = True
        entry.notified_at = now
        entry.notification_expires_at = now + self.offer_duration
        self.entries.save(entry)

        minutes = int(self.offer_duration.total_seconds() // 60)
        self.system_log.append(
            "Passenger notified",
            f"{entry.passenger.name} notified of available seat. "
            f"Must confirm within {minutes} minutes.",
            flight_id=flight_id,
            passenger_id=entry.passenger.id,
        )
        return entry

    async def accept(self, entry_id: str, flight_id: str) -> Reservation | None:
        """
        Turn an open offer into a seat hold.

        A seat of the requested class is preferred; any free seat is used
        otherwise.

        Returns:
            The new reservation, or None if the entry is gone, was never
            notified, or no seat is actually free

        Raises:
            NotFoundError: If the flight does not exist
            OfferExpiredError: If the offer deadline has passed
        """
        async with self.locks.hold(flight_id):
            self.inventory.get_flight(flight_id)

            entry = self.entries.get(flight_id, entry_id)
            if entry is None:
                if self.entries.was_lapsed(entry_id):
                    raise OfferExpiredError(entry_id)
                return None

            if not entry.notified:
                return None

            if not entry.offer_open(self.clock.now()):
                raise OfferExpiredError(entry_id)

            seat = self.inventory.first_available_seat(flight_id, entry.ticket_class)
            if seat is None:
                logger.warning(f"Offer {entry_id} accepted but flight {flight_id} has no free seat")
                return None

            reservation = self.reservations.hold_locked(
                flight_id,
                seat.id,
                entry.passenger,
                source=ReservationSource.WAITING_LIST,
            )
            self.entries.remove(entry)

            self.system_log.append(
                "Waiting list offer accepted",
                f"{entry.passenger.name} accepted offer for seat {seat.seat_number}, now in payment",
                flight_id=flight_id,
                passenger_id=entry.passenger.id,
            )
            return reservation

    async def expire_offers(self, now: datetime | None = None) -> dict[str, int]:
        """
        Drop entries whose offer deadline has passed.

        The passenger has to rejoin to queue again. A failure on one flight
        is logged and does not stop the others.

        Returns:
            Lapsed offers per flight, for flights that lost at least one
        """
        now = now or self.clock.now()

        affected: dict[str, int] = {}
        for flight_id in self.entries.flight_ids():
            try:
                async with self.locks.hold(flight_id):
                    lapsed = self._expire_offers_locked(flight_id, now)
            except Exception:
                logger.exception(f"Error expiring offers for flight {flight_id}")
                continue
            if lapsed:
                affected[flight_id] = lapsed
        return affected

    def _expire_offers_locked(self, flight_id: str, now: datetime) -> int:
        count = 0
        for entry in self.entries.list_for_flight(flight_id):
            if not entry.notified or entry.notification_expires_at > now:
                continue

            self.entries.remove(entry, lapsed=True)
            self.system_log.append(
                "Waiting list offer expired",
                f"{entry.passenger.name}'s seat offer expired. Moving to next in queue.",
                flight_id=flight_id,
                passenger_id=entry.passenger.id,
            )
            count += 1
        return count

    def list_entries(self, flight_id: str) -> list[WaitingListEntry]:
        """Entries in service order."""
        self.inventory.get_flight(flight_id)
        return order_entries(self.entries.list_for_flight(flight_id))

    def position(self, entry_id: str, flight_id: str) -> int:
        """Live 1-based rank of an entry, or -1 if it is not queued."""
        for rank, entry in enumerate(self.list_entries(flight_id), start=1):
            if entry.id == entry_id:
                return rank
        return -1

    def pending_offers(self, passenger_id: str) -> list[WaitingListEntry]:
        """Open offers for a passenger across all flights."""
        now = self.clock.now()
        return [
            entry
            for flight_id in self.entries.flight_ids()
            for entry in self.entries.list_for_flight(flight_id)
            if entry.passenger.id == passenger_id and entry.offer_open(now)
        ]

    def queue_overview(self, flight_id: str) -> dict[str, Any]:
        """Ordered queue split into the priority and normal lanes."""
        ordered = self.list_entries(flight_id)
        return {
            "flight_id": flight_id,
            "entries": ordered,
            "priority_lane": [e for e in ordered if e.in_priority_lane],
            "normal_lane": [e for e in ordered if not e.in_priority_lane],
            "notified": [e for e in ordered if e.notified],
            "total": len(ordered),
        }

    def total_waiting(self) -> int:
        return sum(
            len(self.entries.list_for_flight(flight_id))
            for flight_id in self.entries.flight_ids()
        )
