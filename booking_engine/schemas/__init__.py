from booking_engine.schemas.booking_schema import (
    AppointmentRecord,
    AvailabilityRequest,
    AvailabilityResponse,
    ConflictSummary,
)

__all__ = ["AppointmentRecord", "AvailabilityRequest", "AvailabilityResponse", "ConflictSummary"]
