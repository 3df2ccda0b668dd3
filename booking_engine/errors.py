"""Exception hierarchy for the booking engine.

Unknown statuses are deliberately absent: they are a soft condition
reported through ``StatusCategory.UNKNOWN``, never raised.
"""


class BookingEngineError(Exception):
    """Base class for all errors raised by the engine."""


class ValidationError(BookingEngineError, ValueError):
    """Malformed input to a constructor (inverted window, bad duration)."""


class ConfigurationError(BookingEngineError):
    """Status sets or settings are empty, malformed, or contradictory.

    Raised while the engine loads so a misconfigured deployment refuses to
    answer conflict queries instead of answering them permissively.
    """
