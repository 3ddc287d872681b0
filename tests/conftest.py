"""Shared fixtures: a small three-flight engine driven by a manual clock."""

from decimal import Decimal

import pytest

from booking_engine.clock import ManualClock
from booking_engine.config import Settings
from booking_engine.engine import BookingEngine
from booking_engine.flight_lock import LocalFlightLocks
from booking_engine.models import FarePrices, Flight, Passenger, PassengerType


def make_flight(
    flight_id: str,
    flight_number: str,
    origin: str = "Accra (ACC)",
    destination: str = "London (LHR)",
    date: str = "2026-02-15",
    total_seats: int = 60,
    booked_seats: int = 0,
) -> tuple[Flight, int]:
    """Catalog item: a flight and how many of its seats start Booked."""
    flight = Flight(
        id=flight_id,
        flight_number=flight_number,
        origin=origin,
        destination=destination,
        date=date,
        departure_time="22:30",
        arrival_time="06:15",
        total_seats=total_seats,
        available_seats=total_seats - booked_seats,
        booked_seats=booked_seats,
        price=FarePrices(
            economy=Decimal("549"),
            business=Decimal("1399"),
            first_class=Decimal("2299"),
        ),
    )
    return flight, booked_seats


# 60 seats: rows 1-2 First, 3-8 Business, 9-10 Economy
TEST_FLIGHTS = [
    # one seat left, 10F (Economy)
    make_flight("FL100", "NA 100", booked_seats=59),
    # empty
    make_flight("FL200", "NA 200", destination="Paris (CDG)", date="2026-02-17"),
    # full
    make_flight("FL300", "NA 300", origin="Lagos (LOS)", destination="Accra (ACC)", booked_seats=60),
]

LAST_SEAT = "FL100-10F"


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(SEED_DEMO_DATA=False, LOCK_BACKEND="local")


@pytest.fixture
def engine(settings, clock) -> BookingEngine:
    engine = BookingEngine(settings=settings, clock=clock, locks=LocalFlightLocks())
    engine.seed(TEST_FLIGHTS)
    return engine


@pytest.fixture
def alice() -> Passenger:
    return Passenger(id="P-ALICE", name="Alice Mensah", email="alice@example.com")


@pytest.fixture
def bob() -> Passenger:
    return Passenger(id="P-BOB", name="Bob Owusu", type=PassengerType.VIP, loyalty_points=12000)


@pytest.fixture
def carol() -> Passenger:
    return Passenger(id="P-CAROL", name="Carol Adeyemi", type=PassengerType.FREQUENT_FLYER)
