"""Seat inventory and flight counter tests."""

from datetime import timedelta

import pytest

from booking_engine.exceptions import NotFoundError, SeatStateError
from booking_engine.models import FlightStatus, SeatStatus, TicketClass, flight_status_for

from tests.conftest import LAST_SEAT


class TestFlightStatus:
    @pytest.mark.parametrize(
        "available,expected",
        [
            (11, FlightStatus.SEATS_AVAILABLE),
            (10, FlightStatus.LIMITED_SEATS),
            (1, FlightStatus.LIMITED_SEATS),
            (0, FlightStatus.FULLY_BOOKED),
        ],
    )
    def test_status_thresholds(self, available, expected):
        assert flight_status_for(available) == expected

    def test_seeded_statuses(self, engine):
        assert engine.get_flight_by_id("FL100").status == FlightStatus.LIMITED_SEATS
        assert engine.get_flight_by_id("FL200").status == FlightStatus.SEATS_AVAILABLE
        assert engine.get_flight_by_id("FL300").status == FlightStatus.FULLY_BOOKED


class TestSeatTransitions:
    def test_reserve_moves_counters(self, engine, clock):
        until = clock.now() + timedelta(minutes=10)

        assert engine.inventory.reserve("FL200", "FL200-1A", "P-1", until) is True

        seat = engine.inventory.get_seat("FL200", "FL200-1A")
        flight = engine.get_flight_by_id("FL200")
        assert seat.status == SeatStatus.RESERVED
        assert seat.reserved_by == "P-1"
        assert seat.reserved_until == until
        assert (flight.available_seats, flight.reserved_seats, flight.booked_seats) == (59, 1, 0)
        assert engine.inventory.counts_match("FL200")

    def test_reserve_taken_seat_returns_false(self, engine, clock):
        until = clock.now() + timedelta(minutes=10)
        engine.inventory.reserve("FL200", "FL200-1A", "P-1", until)

        assert engine.inventory.reserve("FL200", "FL200-1A", "P-2", until) is False
        assert engine.inventory.get_seat("FL200", "FL200-1A").reserved_by == "P-1"
        assert engine.get_flight_by_id("FL200").reserved_seats == 1

    def test_release_and_book(self, engine, clock):
        until = clock.now() + timedelta(minutes=10)
        engine.inventory.reserve("FL200", "FL200-1A", "P-1", until)
        engine.inventory.reserve("FL200", "FL200-1B", "P-2", until)

        engine.inventory.release("FL200", "FL200-1A")
        engine.inventory.book("FL200", "FL200-1B")

        released = engine.inventory.get_seat("FL200", "FL200-1A")
        booked = engine.inventory.get_seat("FL200", "FL200-1B")
        assert released.status == SeatStatus.AVAILABLE
        assert released.reserved_by is None
        assert booked.status == SeatStatus.BOOKED
        flight = engine.get_flight_by_id("FL200")
        assert (flight.available_seats, flight.reserved_seats, flight.booked_seats) == (59, 0, 1)
        assert engine.inventory.counts_match("FL200")

    def test_book_requires_reserved_seat(self, engine):
        with pytest.raises(SeatStateError):
            engine.inventory.book("FL200", "FL200-1A")

    def test_release_requires_reserved_seat(self, engine):
        with pytest.raises(SeatStateError):
            engine.inventory.release("FL300", "FL300-1A")

    def test_last_seat_flips_status_to_fully_booked(self, engine, clock):
        engine.inventory.reserve("FL100", LAST_SEAT, "P-1", clock.now())

        assert engine.get_flight_by_id("FL100").status == FlightStatus.FULLY_BOOKED

        engine.inventory.release("FL100", LAST_SEAT)
        assert engine.get_flight_by_id("FL100").status == FlightStatus.LIMITED_SEATS


class TestQueries:
    def test_unknown_ids(self, engine):
        with pytest.raises(NotFoundError):
            engine.inventory.get_flight("FL999")
        with pytest.raises(NotFoundError):
            engine.inventory.get_seat("FL200", "FL200-99Z")

    def test_list_seats_filters(self, engine):
        assert len(engine.inventory.list_seats("FL200")) == 60
        assert len(engine.inventory.list_seats("FL200", ticket_class=TicketClass.FIRST)) == 12
        assert len(engine.inventory.list_seats("FL200", ticket_class=TicketClass.BUSINESS)) == 36
        assert [s.id for s in engine.inventory.list_seats("FL100", status=SeatStatus.AVAILABLE)] == [LAST_SEAT]

    def test_first_available_seat_prefers_class(self, engine):
        assert engine.inventory.first_available_seat("FL200").id == "FL200-1A"
        assert engine.inventory.first_available_seat("FL200", TicketClass.ECONOMY).id == "FL200-9A"
        # falls back to any free seat
        assert engine.inventory.first_available_seat("FL100", TicketClass.FIRST).id == LAST_SEAT
        assert engine.inventory.first_available_seat("FL300") is None

    def test_snapshots_are_copies(self, engine):
        seat = engine.inventory.get_seat("FL200", "FL200-1A")
        seat.status = SeatStatus.BOOKED

        assert engine.inventory.get_seat("FL200", "FL200-1A").status == SeatStatus.AVAILABLE
