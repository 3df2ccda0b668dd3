"""
"Check availability" facade used by booking forms.

Converts store rows to bookings, runs the conflict detector, and applies
the unknown-status policy the engine itself stays neutral on:

    allow_and_flag  unknown statuses do not block; the response carries
                    needs_review and the offending booking ids
    block           an overlapping unknown status makes the window unavailable

The engine answers for the snapshot it is given. Closing the race between
two concurrent checks is the booking store's job (uniqueness constraint
or transactional re-check at write time).
"""

from typing import Iterable, Optional

from booking_engine.config import UNKNOWN_STATUS_POLICIES, settings
from booking_engine.errors import ValidationError
from booking_engine.logging_context import get_request_logger, set_request_id
from booking_engine.scheduling.availability import AvailabilityEvaluator
from booking_engine.scheduling.conflicts import ConflictDetector, ConflictType
from booking_engine.schemas.booking_schema import (
    AppointmentRecord,
    AvailabilityRequest,
    AvailabilityResponse,
    ConflictSummary,
)

logger = get_request_logger(__name__)


def check_availability(
    request: AvailabilityRequest,
    records: Iterable[AppointmentRecord],
    request_id: Optional[str] = None,
    unknown_status_policy: Optional[str] = None,
    detector: Optional[ConflictDetector] = None,
    evaluator: Optional[AvailabilityEvaluator] = None,
) -> AvailabilityResponse:
    """
    Decide whether the requested window is bookable against ``records``.

    Returns a structured response; message wording is left to the caller,
    which switches on ``conflict_type``.
    """
    request_id = set_request_id(request_id)
    policy = unknown_status_policy or settings.policy.unknown_status_policy
    if policy not in UNKNOWN_STATUS_POLICIES:
        raise ValidationError(
            f"unknown_status_policy must be one of {UNKNOWN_STATUS_POLICIES}, got {policy!r}"
        )
    detector = detector or ConflictDetector()
    evaluator = evaluator or AvailabilityEvaluator(detector.classifier)

    proposed = request.proposed()
    bookings = [record.to_booking() for record in records]

    conflicts = detector.detect_all(proposed, bookings, request.exclude_booking_id)

    same_resource = [
        b
        for b in bookings
        if b.resource_id == request.resource_id
        and (request.exclude_booking_id is None or b.id != request.exclude_booking_id)
    ]
    unknown = evaluator.unknown_status_overlaps(proposed.window, same_resource)
    unknown_ids = [b.id for b in unknown]

    available = not conflicts and evaluator.is_window_free_among(proposed.window, same_resource)
    if unknown:
        logger.warning(
            "Unrecognized status on booking(s) %s overlapping %s (policy=%s)",
            unknown_ids,
            proposed.window,
            policy,
        )
        if policy == "block":
            available = False

    response = AvailabilityResponse(
        available=available,
        conflict_type=conflicts[0].conflict_type if conflicts else ConflictType.NONE,
        conflicts=[ConflictSummary.from_result(r) for r in conflicts],
        needs_review=bool(unknown) and policy == "allow_and_flag",
        unknown_status_booking_ids=unknown_ids,
        request_id=request_id,
    )
    logger.info(
        "Availability for resource %s at %s: available=%s conflicts=%d",
        request.resource_id,
        proposed.window,
        response.available,
        len(response.conflicts),
    )
    return response
