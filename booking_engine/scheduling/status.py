"""
Status classification: which booking statuses occupy a slot.

Every label falls in exactly one of three categories:

    BLOCKING  the booking occupies its window (agendada, confirmada, realizada)
    FREED     the booking is resolved and its window is reusable
              (the cancelada variants and faltou)
    UNKNOWN   anything else, including "" and None

UNKNOWN is never folded into FREED: an unrecognized status neither
unlocks a slot nor blocks it. Callers needing a yes/no answer apply their
own policy on top (see ``booking_engine.service``).

Matching is exact and case-sensitive; statuses are machine identifiers.

Usage:
    classifier = StatusClassifier()
    classifier.category("cancelada_paciente")  # StatusCategory.FREED
    is_blocking("AGENDADA")                    # False
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from booking_engine.config import settings
from booking_engine.errors import ConfigurationError

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^\w[\w-]*$")


class AppointmentStatus(str, Enum):
    """Lifecycle labels recognized by this version of the engine."""

    AGENDADA = "agendada"
    CONFIRMADA = "confirmada"
    REALIZADA = "realizada"
    CANCELADA = "cancelada"
    CANCELADA_PACIENTE = "cancelada_paciente"
    CANCELADA_DENTISTA = "cancelada_dentista"
    FALTOU = "faltou"


class StatusCategory(str, Enum):
    """Semantic category derived from a status label."""

    BLOCKING = "blocking"
    FREED = "freed"
    UNKNOWN = "unknown"


# Must cover every AppointmentStatus member; checked below at import.
CANONICAL_CATEGORIES: dict[AppointmentStatus, StatusCategory] = {
    AppointmentStatus.AGENDADA: StatusCategory.BLOCKING,
    AppointmentStatus.CONFIRMADA: StatusCategory.BLOCKING,
    AppointmentStatus.REALIZADA: StatusCategory.BLOCKING,
    AppointmentStatus.CANCELADA: StatusCategory.FREED,
    AppointmentStatus.CANCELADA_PACIENTE: StatusCategory.FREED,
    AppointmentStatus.CANCELADA_DENTISTA: StatusCategory.FREED,
    AppointmentStatus.FALTOU: StatusCategory.FREED,
}

NO_SHOW_STATUSES: tuple[str, ...] = (AppointmentStatus.FALTOU.value,)

_unmapped = [s.value for s in AppointmentStatus if s not in CANONICAL_CATEGORIES]
if _unmapped:
    raise ConfigurationError(f"Statuses without a category: {_unmapped}")


def _check_labels(name: str, labels: tuple[str, ...]) -> None:
    if not labels:
        raise ConfigurationError(f"{name} status set is empty")
    for label in labels:
        if not isinstance(label, str) or not _LABEL_RE.match(label):
            raise ConfigurationError(f"Malformed {name} status label: {label!r}")
    if len(set(labels)) != len(labels):
        raise ConfigurationError(f"{name} status set has duplicates: {list(labels)}")


@dataclass(frozen=True)
class StatusTaxonomy:
    """Ordered blocking and freed label sets, validated on construction."""

    blocking: tuple[str, ...]
    freed: tuple[str, ...]
    no_show: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocking", tuple(self.blocking))
        object.__setattr__(self, "freed", tuple(self.freed))
        object.__setattr__(self, "no_show", tuple(self.no_show))
        _check_labels("blocking", self.blocking)
        _check_labels("freed", self.freed)
        shared = sorted(set(self.blocking) & set(self.freed))
        if shared:
            raise ConfigurationError(f"Statuses both blocking and freed: {shared}")
        stray = sorted(set(self.no_show) - set(self.freed))
        if stray:
            raise ConfigurationError(f"No-show statuses missing from the freed set: {stray}")

    @classmethod
    def canonical(cls) -> "StatusTaxonomy":
        """The taxonomy shipped with the engine, in enumeration order."""
        return cls(
            blocking=tuple(
                s.value for s, c in CANONICAL_CATEGORIES.items() if c is StatusCategory.BLOCKING
            ),
            freed=tuple(
                s.value for s, c in CANONICAL_CATEGORIES.items() if c is StatusCategory.FREED
            ),
            no_show=NO_SHOW_STATUSES,
        )

    @classmethod
    def from_settings(cls) -> "StatusTaxonomy":
        return cls(
            blocking=settings.statuses.blocking,
            freed=settings.statuses.freed,
            no_show=settings.statuses.no_show,
        )


class StatusClassifier:
    """Maps status labels to categories for one taxonomy."""

    def __init__(self, taxonomy: Optional[StatusTaxonomy] = None) -> None:
        self.taxonomy = taxonomy or StatusTaxonomy.from_settings()
        self._categories: dict[str, StatusCategory] = {}
        for label in self.taxonomy.blocking:
            self._categories[label] = StatusCategory.BLOCKING
        for label in self.taxonomy.freed:
            self._categories[label] = StatusCategory.FREED

    def category(self, status: Any) -> StatusCategory:
        if not isinstance(status, str) or not status:
            return StatusCategory.UNKNOWN
        return self._categories.get(status, StatusCategory.UNKNOWN)

    def is_blocking(self, status: Any) -> bool:
        return self.category(status) is StatusCategory.BLOCKING

    def is_freed(self, status: Any) -> bool:
        """True for cancelled and no-show statuses alike."""
        return self.category(status) is StatusCategory.FREED

    def is_cancelled(self, status: Any) -> bool:
        """True for the cancellation variants only; a no-show is not a cancellation."""
        return self.is_freed(status) and status not in self.taxonomy.no_show

    def is_no_show(self, status: Any) -> bool:
        return self.is_freed(status) and status in self.taxonomy.no_show

    def blocking_status_list(self) -> list[str]:
        return list(self.taxonomy.blocking)

    def freed_status_list(self) -> list[str]:
        return list(self.taxonomy.freed)

    def cancelled_status_list(self) -> list[str]:
        return [s for s in self.taxonomy.freed if s not in self.taxonomy.no_show]


default_classifier = StatusClassifier()
logger.debug(
    "Status taxonomy: blocking=%s freed=%s",
    default_classifier.taxonomy.blocking,
    default_classifier.taxonomy.freed,
)


def is_blocking(status: Any) -> bool:
    """True iff the status occupies its time window."""
    return default_classifier.is_blocking(status)


def is_freed(status: Any) -> bool:
    """True iff the status is resolved (cancelled or no-show) and the slot is reusable."""
    return default_classifier.is_freed(status)


def is_cancelled(status: Any) -> bool:
    return default_classifier.is_cancelled(status)


def is_no_show(status: Any) -> bool:
    return default_classifier.is_no_show(status)


def category(status: Any) -> StatusCategory:
    return default_classifier.category(status)


def blocking_status_list() -> list[str]:
    return default_classifier.blocking_status_list()


def freed_status_list() -> list[str]:
    return default_classifier.freed_status_list()


def cancelled_status_list() -> list[str]:
    return default_classifier.cancelled_status_list()
