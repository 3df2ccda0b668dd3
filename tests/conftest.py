"""Shared test fixtures and helpers."""

from datetime import datetime
from typing import Optional, Union

import pytest

from booking_engine.scheduling.availability import AvailabilityEvaluator
from booking_engine.scheduling.booking import Booking, ProposedBooking
from booking_engine.scheduling.conflicts import ConflictDetector
from booking_engine.scheduling.status import StatusClassifier
from booking_engine.scheduling.time_window import TimeWindow
from booking_engine.schemas.booking_schema import AppointmentRecord

DAY = (2025, 1, 15)
RESOURCE_ID = 4


def at(hour: int, minute: int = 0) -> datetime:
    """A naive datetime on the sample day."""
    return datetime(*DAY, hour, minute)


def window(start: tuple[int, int], end: tuple[int, int]) -> TimeWindow:
    return TimeWindow(at(*start), at(*end))


def make_booking(
    booking_id: Union[int, str],
    hour: int,
    minute: int = 0,
    duration_minutes: int = 60,
    status: Optional[str] = "agendada",
    resource_id: Union[int, str] = RESOURCE_ID,
) -> Booking:
    """Helper to create a Booking on the sample day."""
    return Booking(
        id=booking_id,
        resource_id=resource_id,
        window=TimeWindow.from_duration(at(hour, minute), duration_minutes),
        status=status,
    )


def propose(
    start: tuple[int, int], end: tuple[int, int], resource_id: Union[int, str] = RESOURCE_ID
) -> ProposedBooking:
    return ProposedBooking(resource_id=resource_id, window=window(start, end))


SAMPLE_DAY_ROWS = [
    (1, 9, "agendada"),
    (2, 10, "cancelada"),
    (3, 11, "cancelada_paciente"),
    (4, 14, "confirmada"),
    (5, 15, "faltou"),
]


@pytest.fixture
def sample_day() -> list[Booking]:
    """Dr. João Silva's day: two blocking bookings and three freed ones."""
    return [make_booking(i, hour, status=status) for i, hour, status in SAMPLE_DAY_ROWS]


@pytest.fixture
def sample_records() -> list[AppointmentRecord]:
    return [
        AppointmentRecord(
            id=i,
            resource_id=RESOURCE_ID,
            scheduled_date=at(hour),
            duration_minutes=60,
            status=status,
            doctor_name="Dr. João Silva",
        )
        for i, hour, status in SAMPLE_DAY_ROWS
    ]


@pytest.fixture
def classifier():
    return StatusClassifier()


@pytest.fixture
def detector():
    return ConflictDetector()


@pytest.fixture
def evaluator():
    return AvailabilityEvaluator()
