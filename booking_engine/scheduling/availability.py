"""
Single-window availability: "can I book this?"

``is_slot_freed_by`` is the per-booking question and today delegates to
``StatusClassifier.is_freed``. Resource-specific rules hook in here via
``still_blocking`` (e.g. a clinic that keeps ``faltou`` blocking until a
no-show fee is settled) without touching the classifier.
"""

import logging
from typing import Iterable, Optional

from booking_engine.scheduling.booking import Booking
from booking_engine.scheduling.status import StatusCategory, StatusClassifier, default_classifier
from booking_engine.scheduling.time_window import TimeWindow

logger = logging.getLogger(__name__)


class AvailabilityEvaluator:
    """Answers availability questions for one classifier and override set."""

    def __init__(
        self,
        classifier: Optional[StatusClassifier] = None,
        still_blocking: Iterable[str] = (),
    ) -> None:
        self.classifier = classifier or default_classifier
        self.still_blocking = frozenset(still_blocking)

    def _overridden(self, status: Optional[str]) -> bool:
        return isinstance(status, str) and status in self.still_blocking

    def is_slot_freed_by(self, status: Optional[str]) -> bool:
        """Would a booking with this status still leave its slot bookable?"""
        if self._overridden(status):
            return False
        return self.classifier.is_freed(status)

    def _occupies(self, status: Optional[str]) -> bool:
        return self._overridden(status) or self.classifier.is_blocking(status)

    def is_window_free_among(self, window: TimeWindow, bookings: Iterable[Booking]) -> bool:
        """True iff no booking is both blocking and overlapping ``window``."""
        for booking in bookings:
            if self._occupies(booking.status) and booking.window.overlaps(window):
                logger.debug("Window %s blocked by booking %s", window, booking.id)
                return False
        return True

    def unknown_status_overlaps(
        self, window: TimeWindow, bookings: Iterable[Booking]
    ) -> list[Booking]:
        """Overlapping bookings whose status is unrecognized, for human review."""
        return [
            b
            for b in bookings
            if not self._overridden(b.status)
            and self.classifier.category(b.status) is StatusCategory.UNKNOWN
            and b.window.overlaps(window)
        ]


_default_evaluator = AvailabilityEvaluator()


def is_slot_freed_by(status: Optional[str]) -> bool:
    return _default_evaluator.is_slot_freed_by(status)


def is_window_free_among(window: TimeWindow, bookings: Iterable[Booking]) -> bool:
    """Empty ``bookings`` means the window is free."""
    return _default_evaluator.is_window_free_among(window, bookings)


def unknown_status_overlaps(window: TimeWindow, bookings: Iterable[Booking]) -> list[Booking]:
    return _default_evaluator.unknown_status_overlaps(window, bookings)
