"""Booking value types as the engine consumes them.

Bookings are owned by the persistence layer and handed in per call; the
engine never stores or mutates them.
"""

from dataclasses import dataclass
from typing import Any, Union

from booking_engine.scheduling.time_window import TimeWindow

BookingId = Union[int, str]


@dataclass(frozen=True)
class Booking:
    """An existing booking on a resource."""

    id: BookingId
    resource_id: Any
    window: TimeWindow
    status: str


@dataclass(frozen=True)
class ProposedBooking:
    """A window the caller wants to book on a resource."""

    resource_id: Any
    window: TimeWindow


def booking_id_sort_key(booking_id: BookingId) -> tuple:
    """Total order over mixed ids: ints first (numerically), then strings."""
    if isinstance(booking_id, int) and not isinstance(booking_id, bool):
        return (0, booking_id, "")
    return (1, 0, str(booking_id))
