"""Repository interfaces.

Services only talk to these; the storage behind them is injected.
Implementations hand out copies, so a caller's changes are only visible
after ``save``.
"""

from abc import ABC, abstractmethod

from booking_engine.models import (
    Booking,
    Flight,
    Reservation,
    Seat,
    WaitingListEntry,
)


class FlightRepository(ABC):
    @abstractmethod
    def get(self, flight_id: str) -> Flight | None: ...

    @abstractmethod
    def list_all(self) -> list[Flight]: ...

    @abstractmethod
    def save(self, flight: Flight) -> None: ...


class SeatRepository(ABC):
    @abstractmethod
    def get(self, flight_id: str, seat_id: str) -> Seat | None: ...

    @abstractmethod
    def list_for_flight(self, flight_id: str) -> list[Seat]:
        """Seats in cabin order."""

    @abstractmethod
    def save(self, seat: Seat) -> None: ...


class ReservationRepository(ABC):
    @abstractmethod
    def add(self, reservation: Reservation) -> None: ...

    @abstractmethod
    def get(self, reservation_id: str) -> Reservation | None:
        """Return a live or closed reservation."""

    @abstractmethod
    def list_active(self, flight_id: str | None = None) -> list[Reservation]: ...

    @abstractmethod
    def close(self, reservation: Reservation) -> None:
        """Remove from the active set, keeping the terminal record."""


class BookingRepository(ABC):
    @abstractmethod
    def add(self, booking: Booking) -> None: ...

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None: ...

    @abstractmethod
    def find_by_reference(self, reference: str) -> Booking | None: ...

    @abstractmethod
    def list_all(self) -> list[Booking]: ...


class WaitingListRepository(ABC):
    @abstractmethod
    def next_sequence(self) -> int: ...

    @abstractmethod
    def add(self, entry: WaitingListEntry) -> None: ...

    @abstractmethod
    def get(self, flight_id: str, entry_id: str) -> WaitingListEntry | None: ...

    @abstractmethod
    def list_for_flight(self, flight_id: str) -> list[WaitingListEntry]:
        """Entries in join order."""

    @abstractmethod
    def flight_ids(self) -> list[str]: ...

    @abstractmethod
    def save(self, entry: WaitingListEntry) -> None: ...

    @abstractmethod
    def remove(self, entry: WaitingListEntry, lapsed: bool = False) -> None:
        """Drop an entry; ``lapsed`` records that its offer expired."""

    @abstractmethod
    def was_lapsed(self, entry_id: str) -> bool: ...
