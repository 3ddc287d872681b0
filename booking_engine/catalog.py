"""Flight catalog seeding."""

import logging
import math
from decimal import Decimal

from booking_engine.models import (
    FarePrices,
    Flight,
    Seat,
    SeatStatus,
    TicketClass,
    flight_status_for,
)
from booking_engine.repositories import Repositories

logger = logging.getLogger(__name__)

SEAT_LETTERS = "ABCDEF"


def ticket_class_for_row(row: int) -> TicketClass:
    """Rows 1-2 are First, 3-8 Business, the rest Economy."""
    if row <= 2:
        return TicketClass.FIRST
    if row <= 8:
        return TicketClass.BUSINESS
    return TicketClass.ECONOMY


def generate_seats(flight_id: str, total_seats: int, booked_seats: int = 0) -> list[Seat]:
    """
    Lay out a six-abreast cabin.

    Seats are numbered ``<row><letter>`` front to back; the first
    ``booked_seats`` of them start out Booked.
    """
    seats = []
    for row in range(1, math.ceil(total_seats / len(SEAT_LETTERS)) + 1):
        for letter in SEAT_LETTERS:
            if len(seats) >= total_seats:
                break
            seat_number = f"{row}{letter}"
            seats.append(
                Seat(
                    id=f"{flight_id}-{seat_number}",
                    flight_id=flight_id,
                    seat_number=seat_number,
                    row=row,
                    ticket_class=ticket_class_for_row(row),
                    status=SeatStatus.BOOKED if len(seats) < booked_seats else SeatStatus.AVAILABLE,
                )
            )
    return seats


# id, flight number, origin, destination, date, departs, arrives, seats, booked, fares
_SCHEDULE = [
    ("FL001", "AA 1234", "New York (JFK)", "Los Angeles (LAX)", "2026-02-15", "08:00", "11:30", 180, 180, (299, 899, 1499)),
    ("FL002", "UA 5678", "San Francisco (SFO)", "Miami (MIA)", "2026-02-15", "14:00", "22:15", 200, 200, (349, 999, 1699)),
    ("FL003", "DL 9012", "Chicago (ORD)", "Seattle (SEA)", "2026-02-16", "09:30", "12:00", 150, 150, (279, 849, 1399)),
    ("FL004", "SW 3456", "Boston (BOS)", "Denver (DEN)", "2026-02-17", "11:00", "14:30", 175, 175, (259, 779, 1299)),
    ("FL005", "NAS 2001", "Accra (ACC)", "Lagos (LOS)", "2026-02-15", "06:00", "08:45", 160, 160, (189, 489, 899)),
    ("FL006", "NAS 2002", "Accra (ACC)", "London (LHR)", "2026-02-15", "22:30", "06:15", 260, 259, (549, 1399, 2299)),
    ("FL007", "NAS 2003", "Accra (ACC)", "New York (JFK)", "2026-02-16", "21:00", "07:30", 280, 279, (649, 1699, 2799)),
    ("FL008", "NAS 2004", "Accra (ACC)", "Paris (CDG)", "2026-02-17", "23:00", "06:00", 220, 219, (499, 1299, 2099)),
    ("FL009", "NAS 2005", "Accra (ACC)", "Dubai (DXB)", "2026-02-18", "14:00", "22:30", 240, 239, (399, 1099, 1799)),
    ("FL010", "NAS 2006", "Lagos (LOS)", "Accra (ACC)", "2026-02-15", "09:30", "11:15", 160, 159, (189, 489, 899)),
    ("FL011", "NAS 2007", "Accra (ACC)", "Johannesburg (JNB)", "2026-02-16", "10:00", "17:00", 200, 133, (349, 899, 1499)),
    ("FL012", "AA 1235", "New York (JFK)", "Los Angeles (LAX)", "2026-02-18", "09:15", "12:45", 180, 128, (299, 899, 1499)),
    ("FL013", "UA 5679", "San Francisco (SFO)", "Miami (MIA)", "2026-02-18", "15:30", "23:45", 200, 185, (349, 999, 1699)),
    ("FL014", "NAS 2008", "Accra (ACC)", "Lagos (LOS)", "2026-02-18", "07:00", "09:45", 160, 87, (189, 489, 899)),
    ("FL015", "DL 9013", "Chicago (ORD)", "Seattle (SEA)", "2026-02-19", "10:00", "12:30", 150, 112, (279, 849, 1399)),
    ("FL016", "NAS 2009", "Accra (ACC)", "London (LHR)", "2026-02-19", "23:15", "07:00", 260, 199, (549, 1399, 2299)),
    ("FL017", "NAS 2010", "Lagos (LOS)", "Accra (ACC)", "2026-02-19", "10:00", "11:45", 160, 122, (189, 489, 899)),
    ("FL018", "SW 3457", "Boston (BOS)", "Denver (DEN)", "2026-02-20", "12:00", "15:30", 175, 84, (259, 779, 1299)),
    ("FL019", "NAS 2011", "Accra (ACC)", "New York (JFK)", "2026-02-20", "21:30", "08:00", 280, 209, (649, 1699, 2799)),
    ("FL020", "NAS 2012", "Accra (ACC)", "Paris (CDG)", "2026-02-20", "22:30", "07:30", 220, 116, (499, 1299, 2099)),
    ("FL021", "AA 1236", "New York (JFK)", "Los Angeles (LAX)", "2026-02-21", "07:45", "11:15", 180, 112, (299, 899, 1499)),
    ("FL022", "NAS 2013", "Accra (ACC)", "Dubai (DXB)", "2026-02-21", "15:00", "23:30", 240, 216, (399, 1099, 1799)),
    ("FL023", "NAS 2014", "Accra (ACC)", "Johannesburg (JNB)", "2026-02-21", "11:00", "18:00", 200, 115, (349, 899, 1499)),
]


def _demo_flight(row: tuple) -> tuple[Flight, int]:
    flight_id, number, origin, destination, date, departs, arrives, total, booked, fares = row
    economy, business, first_class = fares
    flight = Flight(
        id=flight_id,
        flight_number=number,
        origin=origin,
        destination=destination,
        date=date,
        departure_time=departs,
        arrival_time=arrives,
        total_seats=total,
        available_seats=total - booked,
        booked_seats=booked,
        price=FarePrices(
            economy=Decimal(economy),
            business=Decimal(business),
            first_class=Decimal(first_class),
        ),
    )
    return flight, booked


DEMO_FLIGHTS: list[tuple[Flight, int]] = [_demo_flight(row) for row in _SCHEDULE]


def load_catalog(
    repositories: Repositories,
    flights: list[tuple[Flight, int]],
    limited_threshold: int = 10,
) -> None:
    """
    Store flights and their generated seats.

    Each item is a flight and its number of pre-booked seats. Counters and
    status are recomputed from the generated seats, so the stored flight
    always agrees with its cabin.
    """
    for flight, booked_seats in flights:
        seats = generate_seats(flight.id, flight.total_seats, booked_seats)
        for seat in seats:
            repositories.seats.save(seat)

        flight = flight.model_copy(deep=True)
        flight.available_seats = sum(1 for s in seats if s.status == SeatStatus.AVAILABLE)
        flight.reserved_seats = 0
        flight.booked_seats = sum(1 for s in seats if s.status == SeatStatus.BOOKED)
        flight.status = flight_status_for(flight.available_seats, limited_threshold)
        repositories.flights.save(flight)

    logger.info(f"Loaded {len(flights)} flights into the catalog")
