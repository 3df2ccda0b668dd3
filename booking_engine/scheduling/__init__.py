from booking_engine.scheduling.availability import (
    AvailabilityEvaluator,
    is_slot_freed_by,
    is_window_free_among,
)
from booking_engine.scheduling.booking import Booking, ProposedBooking
from booking_engine.scheduling.conflicts import (
    ConflictDetector,
    ConflictResult,
    ConflictType,
    detect,
    detect_all,
)
from booking_engine.scheduling.query import (
    QueryPredicateBuilder,
    excluded_statuses_for_conflict_check,
    to_sql_exclusion_clause,
    to_sql_inclusion_clause,
)
from booking_engine.scheduling.status import (
    AppointmentStatus,
    StatusCategory,
    StatusClassifier,
    StatusTaxonomy,
    blocking_status_list,
    category,
    freed_status_list,
    is_blocking,
    is_freed,
)
from booking_engine.scheduling.time_window import TimeWindow

__all__ = [
    "AppointmentStatus", "StatusCategory", "StatusClassifier", "StatusTaxonomy",
    "is_blocking", "is_freed", "category", "blocking_status_list", "freed_status_list",
    "TimeWindow", "Booking", "ProposedBooking",
    "AvailabilityEvaluator", "is_slot_freed_by", "is_window_free_among",
    "ConflictDetector", "ConflictResult", "ConflictType", "detect", "detect_all",
    "QueryPredicateBuilder", "excluded_statuses_for_conflict_check",
    "to_sql_exclusion_clause", "to_sql_inclusion_clause",
]
