"""Boundary models for booking-store rows and availability checks."""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from booking_engine.scheduling.booking import Booking, ProposedBooking
from booking_engine.scheduling.conflicts import ConflictResult, ConflictType
from booking_engine.scheduling.time_window import TimeWindow


class AppointmentRecord(BaseModel):
    """An appointment row as the booking store returns it."""

    id: Union[int, str]
    resource_id: Union[int, str]
    scheduled_date: datetime
    duration_minutes: int = Field(gt=0)
    status: Optional[str] = None
    doctor_name: Optional[str] = None

    def window(self) -> TimeWindow:
        return TimeWindow.from_duration(self.scheduled_date, self.duration_minutes)

    def to_booking(self) -> Booking:
        return Booking(
            id=self.id,
            resource_id=self.resource_id,
            window=self.window(),
            status=self.status or "",
        )


class AvailabilityRequest(BaseModel):
    """Validated "is this window free?" request from a booking form."""

    resource_id: Union[int, str]
    start: datetime
    duration_minutes: int = Field(gt=0)
    exclude_booking_id: Optional[Union[int, str]] = None

    def window(self) -> TimeWindow:
        return TimeWindow.from_duration(self.start, self.duration_minutes)

    def proposed(self) -> ProposedBooking:
        return ProposedBooking(resource_id=self.resource_id, window=self.window())


class ConflictSummary(BaseModel):
    """Serializable view of one conflict."""

    conflict_type: ConflictType
    booking_id: Union[int, str]
    status: str
    booking_start: datetime
    booking_end: datetime
    overlap_start: datetime
    overlap_end: datetime

    @classmethod
    def from_result(cls, result: ConflictResult) -> "ConflictSummary":
        booking = result.conflicting_booking
        return cls(
            conflict_type=result.conflict_type,
            booking_id=booking.id,
            status=booking.status,
            booking_start=booking.window.start,
            booking_end=booking.window.end,
            overlap_start=result.overlap.start,
            overlap_end=result.overlap.end,
        )


class AvailabilityResponse(BaseModel):
    """Availability verdict for a single proposed window."""

    available: bool
    conflict_type: ConflictType = ConflictType.NONE
    conflicts: list[ConflictSummary] = Field(default_factory=list)
    needs_review: bool = False
    unknown_status_booking_ids: list[Union[int, str]] = Field(default_factory=list)
    request_id: Optional[str] = None
