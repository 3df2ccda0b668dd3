"""Appointment availability and conflict-detection engine."""

from booking_engine.errors import BookingEngineError, ConfigurationError, ValidationError
from booking_engine.scheduling import (
    AppointmentStatus,
    AvailabilityEvaluator,
    Booking,
    ConflictDetector,
    ConflictResult,
    ConflictType,
    ProposedBooking,
    QueryPredicateBuilder,
    StatusCategory,
    StatusClassifier,
    StatusTaxonomy,
    TimeWindow,
    blocking_status_list,
    category,
    detect,
    detect_all,
    excluded_statuses_for_conflict_check,
    freed_status_list,
    is_blocking,
    is_freed,
    is_slot_freed_by,
    is_window_free_among,
    to_sql_exclusion_clause,
    to_sql_inclusion_clause,
)

__version__ = "0.1.0"

__all__ = [
    "BookingEngineError", "ConfigurationError", "ValidationError",
    "AppointmentStatus", "StatusCategory", "StatusClassifier", "StatusTaxonomy",
    "is_blocking", "is_freed", "category", "blocking_status_list", "freed_status_list",
    "TimeWindow", "Booking", "ProposedBooking",
    "AvailabilityEvaluator", "is_slot_freed_by", "is_window_free_among",
    "ConflictDetector", "ConflictResult", "ConflictType", "detect", "detect_all",
    "QueryPredicateBuilder", "excluded_statuses_for_conflict_check",
    "to_sql_exclusion_clause", "to_sql_inclusion_clause",
]
