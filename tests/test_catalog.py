"""Catalog seeding, flight search and statistics tests."""

from decimal import Decimal

import pytest

from booking_engine.catalog import DEMO_FLIGHTS, generate_seats, load_catalog
from booking_engine.models import FlightStatus, SeatStatus, TicketClass
from booking_engine.repositories import Repositories
from booking_engine.services import FlightService, SeatInventory


class TestGenerateSeats:
    def test_cabin_layout(self):
        seats = generate_seats("FL001", 180, booked_seats=0)

        assert len(seats) == 180
        assert seats[0].id == "FL001-1A"
        assert seats[5].seat_number == "1F"
        assert seats[-1].seat_number == "30F"
        assert {s.ticket_class for s in seats if s.row <= 2} == {TicketClass.FIRST}
        assert {s.ticket_class for s in seats if 3 <= s.row <= 8} == {TicketClass.BUSINESS}
        assert {s.ticket_class for s in seats if s.row >= 9} == {TicketClass.ECONOMY}

    def test_partial_last_row(self):
        seats = generate_seats("FL009", 245)

        assert len(seats) == 245
        assert seats[-1].seat_number == "41E"

    def test_first_seats_start_booked(self):
        seats = generate_seats("FL006", 260, booked_seats=259)

        booked = [s for s in seats if s.status == SeatStatus.BOOKED]
        assert len(booked) == 259
        assert [s.id for s in seats if s.status == SeatStatus.AVAILABLE] == ["FL006-44B"]


class TestDemoCatalog:
    @pytest.fixture
    def repositories(self) -> Repositories:
        repositories = Repositories()
        load_catalog(repositories, DEMO_FLIGHTS)
        return repositories

    def test_all_flights_loaded_consistently(self, repositories):
        inventory = SeatInventory(repositories)
        flights = repositories.flights.list_all()

        assert len(flights) == 23
        assert all(inventory.counts_match(f.id) for f in flights)

    def test_statuses(self, repositories):
        assert repositories.flights.get("FL001").status == FlightStatus.FULLY_BOOKED
        assert repositories.flights.get("FL006").status == FlightStatus.LIMITED_SEATS
        assert repositories.flights.get("FL006").available_seats == 1
        assert repositories.flights.get("FL011").status == FlightStatus.SEATS_AVAILABLE
        assert repositories.flights.get("FL011").available_seats == 67

    def test_search_is_case_insensitive_substring(self, repositories):
        service = FlightService(repositories)

        results = service.search_flights("accra", "london")

        assert [f.id for f in results] == ["FL006", "FL016"]
        assert [f.id for f in service.search_flights("ACC", "LHR", "2026-02-19")] == ["FL016"]
        assert service.search_flights("accra", "london", "2026-02-16") == []
        assert len(service.search_flights()) == 23

    def test_available_dates(self, repositories):
        service = FlightService(repositories)

        assert service.available_dates("Accra", "London") == ["2026-02-15", "2026-02-19"]
        assert service.available_dates("Nowhere") == []


class TestStatistics:
    @pytest.mark.asyncio
    async def test_totals(self, engine, alice, bob):
        reservation = await engine.hold("FL200", "FL200-1A", alice)
        await engine.confirm(reservation.id, payment_succeeded=True)
        await engine.hold("FL200", "FL200-9A", alice)
        await engine.join("FL300", bob, TicketClass.ECONOMY)

        stats = engine.statistics()

        assert stats["total_flights"] == 3
        assert stats["total_seats"] == 180
        assert stats["booked_seats"] == 60 + 59 + 1
        assert stats["reserved_seats"] == 1
        assert stats["available_seats"] == 1 + 58
        assert stats["active_reservations"] == 1
        assert stats["waiting_list_size"] == 1
        assert stats["total_bookings"] == 1
        assert stats["revenue"] == Decimal("2299")
