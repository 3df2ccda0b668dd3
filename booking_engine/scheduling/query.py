"""
Persistence-layer predicates that mirror the classifier.

A booking store uses these fragments to drop non-blocking history before
candidates ever reach the conflict detector. The rendered strings are
part of the contract: other code paths match on their exact shape.

    to_sql_inclusion_clause(freed_status_list())
        -> "('cancelada', 'cancelada_paciente', 'cancelada_dentista', 'faltou')"
    to_sql_exclusion_clause()
        -> "NOT IN ('agendada', 'confirmada', 'realizada')"
    conflict_candidate_predicate()
        -> "status NOT IN ('cancelada', 'cancelada_paciente', 'cancelada_dentista', 'faltou')"

An empty status list renders "(NULL)", which matches no row under either
IN or NOT IN, and a full predicate over an empty list renders "1=0".
"""

import logging
import re
from typing import Iterable, Optional

from booking_engine.config import settings
from booking_engine.errors import ValidationError
from booking_engine.scheduling.status import StatusClassifier, default_classifier

logger = logging.getLogger(__name__)

EMPTY_LIST_LITERAL = "(NULL)"
MATCH_NOTHING = "1=0"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _quote(label: str) -> str:
    return "'" + str(label).replace("'", "''") + "'"


class QueryPredicateBuilder:
    """Renders the classifier's status sets as SQL fragments."""

    def __init__(self, classifier: Optional[StatusClassifier] = None) -> None:
        self.classifier = classifier or default_classifier

    def excluded_statuses_for_conflict_check(self) -> list[str]:
        """Statuses a store may filter out before fetching conflict candidates."""
        return self.classifier.freed_status_list()

    def to_sql_inclusion_clause(self, statuses: Iterable[str]) -> str:
        statuses = list(statuses)
        if not statuses:
            logger.warning("Rendering an empty status list as %s", EMPTY_LIST_LITERAL)
            return EMPTY_LIST_LITERAL
        return "(" + ", ".join(_quote(s) for s in statuses) + ")"

    def to_sql_exclusion_clause(self) -> str:
        """Matches every booking left out of conflict checks (anything not blocking)."""
        return "NOT IN " + self.to_sql_inclusion_clause(self.classifier.blocking_status_list())

    def conflict_candidate_predicate(self, column: Optional[str] = None) -> str:
        """Full WHERE fragment keeping only rows that may still block a window."""
        column = column or settings.policy.status_column
        if not _IDENTIFIER_RE.match(column):
            raise ValidationError(f"Not a plain SQL column name: {column!r}")
        excluded = self.excluded_statuses_for_conflict_check()
        if not excluded:
            return MATCH_NOTHING
        return f"{column} NOT IN {self.to_sql_inclusion_clause(excluded)}"


_default_builder = QueryPredicateBuilder()


def excluded_statuses_for_conflict_check() -> list[str]:
    return _default_builder.excluded_statuses_for_conflict_check()


def to_sql_inclusion_clause(statuses: Iterable[str]) -> str:
    return _default_builder.to_sql_inclusion_clause(statuses)


def to_sql_exclusion_clause() -> str:
    return _default_builder.to_sql_exclusion_clause()


def conflict_candidate_predicate(column: Optional[str] = None) -> str:
    return _default_builder.conflict_candidate_predicate(column)
