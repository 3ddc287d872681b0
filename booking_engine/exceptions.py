"""Booking engine errors."""


class BookingEngineError(Exception):
    """Base class for booking engine errors."""

    pass


class NotFoundError(BookingEngineError):
    """Unknown flight, seat, reservation, entry or booking id."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class SeatUnavailableError(BookingEngineError):
    """Hold attempted on a seat that is not Available."""

    def __init__(self, flight_id: str, seat_id: str):
        super().__init__(f"Seat {seat_id} on flight {flight_id} is not available")
        self.flight_id = flight_id
        self.seat_id = seat_id


class OfferExpiredError(BookingEngineError):
    """Waiting-list offer accepted after its deadline."""

    def __init__(self, entry_id: str):
        super().__init__(
            f"Offer {entry_id} is no longer valid; rejoin the waiting list if still interested"
        )
        self.entry_id = entry_id


class LateConfirmationError(BookingEngineError):
    """Successful payment arrived for a hold that already expired.

    Money may have been captured for a seat that is no longer held, so the
    caller must route this to manual reconciliation.
    """

    def __init__(self, reservation_id: str):
        super().__init__(
            f"Payment for reservation {reservation_id} arrived after the hold expired; "
            "contact support with your reference"
        )
        self.reservation_id = reservation_id


class SeatStateError(BookingEngineError):
    """Seat transition attempted from the wrong state."""

    pass


class FlightLockError(BookingEngineError):
    """Raised when a flight's critical section cannot be entered."""

    pass
