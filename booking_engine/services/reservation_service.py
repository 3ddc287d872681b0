"""Reservation manager: timed seat holds and their terminal transitions."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from ulid import ULID

from booking_engine.clock import Clock
from booking_engine.exceptions import (
    LateConfirmationError,
    NotFoundError,
    SeatUnavailableError,
)
from booking_engine.flight_lock import FlightLocks
from booking_engine.models import (
    Booking,
    Passenger,
    Reservation,
    ReservationSource,
    ReservationStatus,
)
from booking_engine.repositories import Repositories
from booking_engine.services.booking_service import BookingLedger
from booking_engine.services.inventory_service import SeatInventory
from booking_engine.system_log import SystemLog

logger = logging.getLogger(__name__)


class ReservationManager:
    """
    Creates, confirms, cancels and expires seat holds.

    Reserved -> Confirmed | Expired | Payment Failed | Cancelled, all
    terminal. Every transition runs inside the flight's critical section
    together with the matching seat transition.
    """

    def __init__(
        self,
        repositories: Repositories,
        inventory: SeatInventory,
        ledger: BookingLedger,
        locks: FlightLocks,
        clock: Clock,
        system_log: SystemLog,
        hold_duration: timedelta = timedelta(minutes=10),
    ):
        self.repositories = repositories
        self.inventory = inventory
        self.ledger = ledger
        self.locks = locks
        self.clock = clock
        self.system_log = system_log
        self.hold_duration = hold_duration
        # Called with the flight id, lock held, whenever a seat goes back to Available
        self.on_seat_released: Callable[[str], object] | None = None

    async def hold(
        self,
        flight_id: str,
        seat_id: str,
        passenger: Passenger,
    ) -> Reservation:
        """
        Place a timed hold on one seat.

        Args:
            flight_id: Flight ID
            seat_id: Seat ID
            passenger: Passenger taking the hold

        Returns:
            The live reservation, expiring after the hold duration

        Raises:
            NotFoundError: If the flight or seat does not exist
            SeatUnavailableError: If the seat is not Available
        """
        async with self.locks.hold(flight_id):
            return self.hold_locked(flight_id, seat_id, passenger)

    def hold_locked(
        self,
        flight_id: str,
        seat_id: str,
        passenger: Passenger,
        source: ReservationSource = ReservationSource.DIRECT,
    ) -> Reservation:
        """Hold a seat. Caller must hold the flight lock."""
        flight = self.inventory.get_flight(flight_id)
        seat = self.inventory.get_seat(flight_id, seat_id)

        now = self.clock.now()
        expires_at = now + self.hold_duration

        if not self.inventory.reserve(flight_id, seat_id, passenger.id, expires_at):
            raise SeatUnavailableError(flight_id, seat_id)

        reservation = Reservation(
            id=f"RES-{ULID()}",
            flight_id=flight_id,
            seat_id=seat_id,
            seat_number=seat.seat_number,
            ticket_class=seat.ticket_class,
            passenger=passenger,
            reserved_at=now,
            expires_at=expires_at,
            source=source,
        )
        self.repositories.reservations.add(reservation)

        self.system_log.append(
            "Seat reserved",
            f"{passenger.name} reserved seat {seat.seat_number} on flight {flight.flight_number}",
            flight_id=flight_id,
            passenger_id=passenger.id,
        )
        return reservation

    async def confirm(
        self,
        reservation_id: str,
        payment_succeeded: bool,
    ) -> Booking | None:
        """
        Apply the payment outcome to a hold.

        Unknown or already closed reservations are a no-op so payment
        retries never double-book.

        Returns:
            The booking when payment succeeded, otherwise None

        Raises:
            LateConfirmationError: If a successful payment arrives after the
                hold was expired by the sweeper
        """
        reservation = self.repositories.reservations.get(reservation_id)
        if reservation is None:
            logger.warning(f"Confirmation for unknown reservation {reservation_id}")
            return None

        async with self.locks.hold(reservation.flight_id):
            # Re-read inside the critical section; the sweeper may have won
            reservation = self.repositories.reservations.get(reservation_id)

            if not reservation.is_live:
                if payment_succeeded and reservation.status == ReservationStatus.EXPIRED:
                    self._report_late_confirmation(reservation)
                    raise LateConfirmationError(reservation_id)
                logger.info(
                    f"Ignoring confirmation for reservation {reservation_id} "
                    f"in state {reservation.status.value}"
                )
                return None

            if payment_succeeded:
                return self._book_locked(reservation)

            self._close_and_release_locked(reservation, ReservationStatus.PAYMENT_FAILED)
            self.system_log.append(
                "Payment failed",
                f"Payment failed for {reservation.passenger.name}, "
                f"seat {reservation.seat_number} released",
                flight_id=reservation.flight_id,
                passenger_id=reservation.passenger_id,
            )
            self._seat_released(reservation.flight_id)
            return None

    async def cancel(self, reservation_id: str) -> bool:
        """
        Cancel a live hold and release its seat.

        Returns:
            True if the hold was cancelled, False if it was no longer live

        Raises:
            NotFoundError: If the reservation id is unknown
        """
        reservation = self.repositories.reservations.get(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", reservation_id)

        async with self.locks.hold(reservation.flight_id):
            reservation = self.repositories.reservations.get(reservation_id)
            if not reservation.is_live:
                return False

            self._close_and_release_locked(reservation, ReservationStatus.CANCELLED)
            self.system_log.append(
                "Reservation cancelled",
                f"{reservation.passenger.name} released seat {reservation.seat_number}",
                flight_id=reservation.flight_id,
                passenger_id=reservation.passenger_id,
            )
            self._seat_released(reservation.flight_id)
            return True

    async def expire_due(self, now: datetime | None = None) -> dict[str, int]:
        """
        Expire every hold whose deadline has passed.

        A failure on one flight is logged and does not stop the others.

        Returns:
            Seats released per flight, for flights that had at least one
            hold expired
        """
        now = now or self.clock.now()
        due_flights = sorted(
            {r.flight_id for r in self.repositories.reservations.list_active() if r.expires_at <= now}
        )

        affected: dict[str, int] = {}
        for flight_id in due_flights:
            try:
                async with self.locks.hold(flight_id):
                    expired = self._expire_flight_locked(flight_id, now)
            except Exception:
                logger.exception(f"Error expiring reservations for flight {flight_id}")
                continue
            if expired:
                affected[flight_id] = expired
        return affected

    def _expire_flight_locked(self, flight_id: str, now: datetime) -> int:
        count = 0
        for reservation in self.repositories.reservations.list_active(flight_id):
            if not reservation.is_live or reservation.expires_at > now:
                continue

            self._close_and_release_locked(reservation, ReservationStatus.EXPIRED, now)
            self.system_log.append(
                "Payment timeout",
                f"Seat {reservation.seat_number} released due to payment timeout",
                flight_id=flight_id,
                passenger_id=reservation.passenger_id,
            )
            count += 1
        return count

    def _book_locked(self, reservation: Reservation) -> Booking:
        now = self.clock.now()
        self.inventory.book(reservation.flight_id, reservation.seat_id)
        flight = self.inventory.get_flight(reservation.flight_id)
        booking = self.ledger.create_booking(reservation, flight, booked_at=now)

        reservation.status = ReservationStatus.CONFIRMED
        reservation.closed_at = now
        self.repositories.reservations.close(reservation)

        self.system_log.append(
            "Booking confirmed",
            f"{reservation.passenger.name} confirmed booking for seat {reservation.seat_number} "
            f"({booking.booking_reference})",
            flight_id=reservation.flight_id,
            passenger_id=reservation.passenger_id,
        )
        return booking

    def _close_and_release_locked(
        self,
        reservation: Reservation,
        status: ReservationStatus,
        now: datetime | None = None,
    ) -> None:
        self.inventory.release(reservation.flight_id, reservation.seat_id)
        reservation.status = status
        reservation.closed_at = now or self.clock.now()
        self.repositories.reservations.close(reservation)

    def _seat_released(self, flight_id: str) -> None:
        if self.on_seat_released is not None:
            self.on_seat_released(flight_id)

    def _report_late_confirmation(self, reservation: Reservation) -> None:
        self.system_log.append(
            "Late confirmation",
            f"Payment succeeded for {reservation.passenger.name} after seat "
            f"{reservation.seat_number} was released; manual reconciliation required",
            flight_id=reservation.flight_id,
            passenger_id=reservation.passenger_id,
            level=logging.CRITICAL,
        )

    def get_reservation(self, reservation_id: str) -> Reservation | None:
        """Get a live or closed reservation by ID."""
        return self.repositories.reservations.get(reservation_id)

    def list_active(
        self,
        flight_id: str | None = None,
        passenger_id: str | None = None,
    ) -> list[Reservation]:
        """Live holds, oldest first."""
        reservations = self.repositories.reservations.list_active(flight_id)
        if passenger_id:
            reservations = [r for r in reservations if r.passenger_id == passenger_id]
        return sorted(reservations, key=lambda r: r.reserved_at)
