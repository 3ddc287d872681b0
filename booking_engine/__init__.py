"""Flight booking engine: seat holds, priority waiting lists and bookings."""

__version__ = "1.0.0"
