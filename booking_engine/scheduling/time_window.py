"""Half-open time intervals ``[start, end)``.

Back-to-back windows never overlap: a booking ending at 10:00 does not
conflict with one starting at 10:00. Inputs are assumed to share the
resource's timezone; no normalization happens here.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from booking_engine.errors import ValidationError


@dataclass(frozen=True)
class TimeWindow:
    """An immutable ``[start, end)`` interval with ``end > start``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.start, datetime) or not isinstance(self.end, datetime):
            raise ValidationError(
                f"TimeWindow bounds must be datetimes, got {type(self.start).__name__} "
                f"and {type(self.end).__name__}"
            )
        if (self.start.tzinfo is None) != (self.end.tzinfo is None):
            raise ValidationError("TimeWindow bounds must both be naive or both be timezone-aware")
        if self.end <= self.start:
            raise ValidationError(
                f"TimeWindow end must be after start: [{self.start.isoformat()}, "
                f"{self.end.isoformat()})"
            )

    @classmethod
    def from_duration(cls, start: datetime, duration_minutes: int) -> "TimeWindow":
        """Build a window of ``duration_minutes`` (a positive int) from ``start``."""
        if (
            isinstance(duration_minutes, bool)
            or not isinstance(duration_minutes, int)
            or duration_minutes <= 0
        ):
            raise ValidationError(
                f"duration_minutes must be a positive integer, got {duration_minutes!r}"
            )
        return cls(start, start + timedelta(minutes=duration_minutes))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        return self.start < other.end and other.start < self.end

    def intersection(self, other: "TimeWindow") -> Optional["TimeWindow"]:
        """The shared sub-window, or None when the windows do not overlap."""
        if not self.overlaps(other):
            return None
        return TimeWindow(max(self.start, other.start), min(self.end, other.end))

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def is_adjacent_to(self, other: "TimeWindow") -> bool:
        """True when one window ends exactly where the other starts."""
        return self.end == other.start or other.end == self.start

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"
