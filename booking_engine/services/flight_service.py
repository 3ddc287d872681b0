"""Flight search and system-wide statistics."""

from decimal import Decimal
from typing import Any

from booking_engine.models import Flight
from booking_engine.repositories import Repositories


def _matches(value: str, query: str | None) -> bool:
    return not query or query.lower() in value.lower()


class FlightService:
    """Read-only queries over the flight catalog."""

    def __init__(self, repositories: Repositories):
        self.repositories = repositories

    def search_flights(
        self,
        origin: str | None = None,
        destination: str | None = None,
        date: str | None = None,
    ) -> list[Flight]:
        """
        Find flights by route and date.

        Origin and destination match as case-insensitive substrings, so
        ``"accra"`` finds ``"Accra (ACC)"``. The date must match exactly.
        Empty filters match everything.
        """
        return [
            f for f in self.repositories.flights.list_all()
            if _matches(f.origin, origin)
            and _matches(f.destination, destination)
            and (not date or f.date == date)
        ]

    def available_dates(
        self,
        origin: str | None = None,
        destination: str | None = None,
    ) -> list[str]:
        """Sorted distinct departure dates for a route."""
        return sorted({f.date for f in self.search_flights(origin, destination)})

    def statistics(self) -> dict[str, Any]:
        """Totals for the admin dashboard."""
        flights = self.repositories.flights.list_all()
        bookings = self.repositories.bookings.list_all()
        waiting = sum(
            len(self.repositories.waiting_lists.list_for_flight(flight_id))
            for flight_id in self.repositories.waiting_lists.flight_ids()
        )

        return {
            "total_flights": len(flights),
            "total_seats": sum(f.total_seats for f in flights),
            "available_seats": sum(f.available_seats for f in flights),
            "reserved_seats": sum(f.reserved_seats for f in flights),
            "booked_seats": sum(f.booked_seats for f in flights),
            "active_reservations": len(self.repositories.reservations.list_active()),
            "waiting_list_size": waiting,
            "total_bookings": len(bookings),
            "revenue": sum((b.price for b in bookings), Decimal("0")),
        }
