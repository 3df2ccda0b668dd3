"""
Conflict detection for a proposed booking.

Detects scheduling conflicts between a proposed window and the existing
bookings of the same resource, considering:
- resource (only bookings on the proposed resource compete)
- the booking being edited (excluded, so a reschedule never conflicts
  with its own prior self)
- status (only BLOCKING bookings occupy time)

Results are ordered by overlap duration, longest first, then by booking
id, so the verdict is identical for any ordering of the candidates.

Usage:
    proposed = ProposedBooking(resource_id=4, window=TimeWindow.from_duration(start, 60))
    result = detect(proposed, candidates, exclude_booking_id=12)
    if result.has_conflict:
        ...  # switch on result.conflict_type
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from booking_engine.scheduling.booking import (
    Booking,
    BookingId,
    ProposedBooking,
    booking_id_sort_key,
)
from booking_engine.scheduling.status import StatusClassifier, default_classifier
from booking_engine.scheduling.time_window import TimeWindow

logger = logging.getLogger(__name__)


class ConflictType(str, Enum):
    """How a proposed window collides with an existing booking."""

    NONE = "none"
    OVERLAP = "overlap"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of checking a proposed window against one booking (or none)."""

    has_conflict: bool
    conflict_type: ConflictType = ConflictType.NONE
    conflicting_booking: Optional[Booking] = None
    overlap: Optional[TimeWindow] = None

    @classmethod
    def none(cls) -> "ConflictResult":
        return cls(has_conflict=False)


class ConflictDetector:
    """Finds blocking bookings that collide with a proposed window."""

    def __init__(self, classifier: Optional[StatusClassifier] = None) -> None:
        self.classifier = classifier or default_classifier

    def _competitors(
        self,
        proposed: ProposedBooking,
        candidates: Iterable[Booking],
        exclude_booking_id: Optional[BookingId],
    ) -> list[Booking]:
        competitors = []
        for booking in candidates:
            if booking.resource_id != proposed.resource_id:
                continue
            if exclude_booking_id is not None and booking.id == exclude_booking_id:
                continue
            if not self.classifier.is_blocking(booking.status):
                continue
            competitors.append(booking)
        return competitors

    def detect_all(
        self,
        proposed: ProposedBooking,
        candidates: Iterable[Booking],
        exclude_booking_id: Optional[BookingId] = None,
    ) -> list[ConflictResult]:
        """Every blocking booking overlapping the proposed window, worst first."""
        results = []
        for booking in self._competitors(proposed, candidates, exclude_booking_id):
            overlap = booking.window.intersection(proposed.window)
            if overlap is None:
                continue
            conflict_type = (
                ConflictType.DUPLICATE
                if booking.window == proposed.window
                else ConflictType.OVERLAP
            )
            results.append(
                ConflictResult(
                    has_conflict=True,
                    conflict_type=conflict_type,
                    conflicting_booking=booking,
                    overlap=overlap,
                )
            )

        results.sort(
            key=lambda r: (
                -r.overlap.duration,
                booking_id_sort_key(r.conflicting_booking.id),
                r.conflicting_booking.window.start,
                r.conflicting_booking.window.end,
                r.conflicting_booking.status,
            )
        )
        if results:
            logger.debug(
                "Proposed %s on resource %s conflicts with %d booking(s): %s",
                proposed.window,
                proposed.resource_id,
                len(results),
                [r.conflicting_booking.id for r in results],
            )
        return results

    def detect(
        self,
        proposed: ProposedBooking,
        candidates: Iterable[Booking],
        exclude_booking_id: Optional[BookingId] = None,
    ) -> ConflictResult:
        """The primary conflict (largest overlap, lowest id), or a NONE result."""
        results = self.detect_all(proposed, candidates, exclude_booking_id)
        return results[0] if results else ConflictResult.none()


_default_detector = ConflictDetector()


def detect(
    proposed: ProposedBooking,
    candidates: Iterable[Booking],
    exclude_booking_id: Optional[BookingId] = None,
) -> ConflictResult:
    return _default_detector.detect(proposed, candidates, exclude_booking_id)


def detect_all(
    proposed: ProposedBooking,
    candidates: Iterable[Booking],
    exclude_booking_id: Optional[BookingId] = None,
) -> list[ConflictResult]:
    return _default_detector.detect_all(proposed, candidates, exclude_booking_id)
