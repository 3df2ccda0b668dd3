"""Tests for status classification."""

import pytest

from booking_engine.config import AppConfig, StatusConfig
from booking_engine.errors import ConfigurationError
from booking_engine.scheduling import status as status_module
from booking_engine.scheduling.conflicts import ConflictDetector
from booking_engine.scheduling.query import QueryPredicateBuilder
from booking_engine.scheduling.status import (
    AppointmentStatus,
    StatusCategory,
    StatusClassifier,
    StatusTaxonomy,
    blocking_status_list,
    cancelled_status_list,
    category,
    default_classifier,
    freed_status_list,
    is_blocking,
    is_cancelled,
    is_freed,
    is_no_show,
)

from tests.conftest import make_booking, propose

BLOCKING = ["agendada", "confirmada", "realizada"]
CANCELLED = ["cancelada", "cancelada_paciente", "cancelada_dentista"]
FREED = CANCELLED + ["faltou"]
UNRECOGNIZED = ["", None, "unknown_status", "importado_legado", "CANCELADA", "Cancelada", "AGENDADA"]


class TestIsBlocking:
    @pytest.mark.parametrize("status", BLOCKING)
    def test_blocking_statuses(self, status):
        assert is_blocking(status) is True

    @pytest.mark.parametrize("status", FREED)
    def test_freed_statuses_do_not_block(self, status):
        assert is_blocking(status) is False

    @pytest.mark.parametrize("status", UNRECOGNIZED)
    def test_unrecognized_statuses_do_not_block(self, status):
        assert is_blocking(status) is False

    def test_non_string_input_is_safe(self):
        assert is_blocking(42) is False
        assert is_blocking(["agendada"]) is False


class TestIsFreed:
    @pytest.mark.parametrize("status", FREED)
    def test_freed_statuses(self, status):
        assert is_freed(status) is True

    @pytest.mark.parametrize("status", BLOCKING)
    def test_blocking_statuses_are_not_freed(self, status):
        assert is_freed(status) is False

    @pytest.mark.parametrize("status", UNRECOGNIZED)
    def test_unrecognized_statuses_are_not_freed(self, status):
        assert is_freed(status) is False

    def test_case_sensitive(self):
        assert is_freed("CANCELADA") is False
        assert is_freed("Cancelada") is False
        assert is_blocking("AGENDADA") is False


class TestCancelledAndNoShow:
    @pytest.mark.parametrize("status", CANCELLED)
    def test_cancellation_variants(self, status):
        assert is_cancelled(status) is True
        assert is_no_show(status) is False

    def test_no_show_is_freed_but_not_cancelled(self):
        assert is_freed("faltou") is True
        assert is_cancelled("faltou") is False
        assert is_no_show("faltou") is True

    @pytest.mark.parametrize("status", BLOCKING + ["", None, "unknown_status"])
    def test_others_are_neither(self, status):
        assert is_cancelled(status) is False
        assert is_no_show(status) is False


class TestCategory:
    def test_three_categories(self):
        assert category("confirmada") == StatusCategory.BLOCKING
        assert category("cancelada_dentista") == StatusCategory.FREED
        assert category("importado_legado") == StatusCategory.UNKNOWN
        assert category(None) == StatusCategory.UNKNOWN
        assert category("") == StatusCategory.UNKNOWN

    @pytest.mark.parametrize("status", BLOCKING + FREED + UNRECOGNIZED)
    def test_never_both_blocking_and_freed(self, status):
        assert not (is_blocking(status) and is_freed(status))

    @pytest.mark.parametrize("status", BLOCKING + FREED + UNRECOGNIZED)
    def test_category_agrees_with_predicates(self, status):
        cat = category(status)
        assert (cat == StatusCategory.BLOCKING) == is_blocking(status)
        assert (cat == StatusCategory.FREED) == is_freed(status)

    def test_every_enum_member_is_recognized(self):
        for status in AppointmentStatus:
            assert category(status.value) != StatusCategory.UNKNOWN

    def test_enum_member_classifies_like_its_value(self):
        assert is_blocking(AppointmentStatus.AGENDADA) is True
        assert is_freed(AppointmentStatus.FALTOU) is True


class TestStatusLists:
    def test_blocking_list(self):
        statuses = blocking_status_list()
        assert statuses == BLOCKING
        assert len(statuses) == 3

    def test_freed_list(self):
        statuses = freed_status_list()
        assert statuses == FREED
        assert len(statuses) == 4

    def test_cancelled_list(self):
        statuses = cancelled_status_list()
        assert statuses == CANCELLED
        assert len(statuses) == 3

    def test_lists_are_copies(self):
        blocking_status_list().append("bogus")
        assert "bogus" not in blocking_status_list()


class TestStatusTaxonomy:
    def test_canonical_matches_defaults(self):
        taxonomy = StatusTaxonomy.canonical()
        assert list(taxonomy.blocking) == BLOCKING
        assert list(taxonomy.freed) == FREED

    def test_empty_blocking_rejected(self):
        with pytest.raises(ConfigurationError, match="blocking"):
            StatusTaxonomy(blocking=(), freed=("cancelada",))

    def test_empty_freed_rejected(self):
        with pytest.raises(ConfigurationError, match="freed"):
            StatusTaxonomy(blocking=("agendada",), freed=())

    def test_overlapping_sets_rejected(self):
        with pytest.raises(ConfigurationError, match="both blocking and freed"):
            StatusTaxonomy(blocking=("agendada", "faltou"), freed=("faltou",))

    def test_malformed_label_rejected(self):
        with pytest.raises(ConfigurationError, match="Malformed"):
            StatusTaxonomy(blocking=("agendada", "x'); DROP"), freed=("cancelada",))

    def test_duplicate_label_rejected(self):
        with pytest.raises(ConfigurationError, match="duplicates"):
            StatusTaxonomy(blocking=("agendada", "agendada"), freed=("cancelada",))

    def test_custom_taxonomy_classifier(self):
        classifier = StatusClassifier(
            StatusTaxonomy(
                blocking=("booked",), freed=("cancelled", "faltou"), no_show=("faltou",)
            )
        )
        assert classifier.is_blocking("booked") is True
        assert classifier.is_blocking("agendada") is False
        assert classifier.category("agendada") == StatusCategory.UNKNOWN
        assert classifier.cancelled_status_list() == ["cancelled"]

    def test_canonical_no_show(self):
        assert StatusTaxonomy.canonical().no_show == ("faltou",)

    def test_no_show_outside_freed_rejected(self):
        with pytest.raises(ConfigurationError, match="No-show"):
            StatusTaxonomy(
                blocking=("agendada",), freed=("cancelada", "no_show"), no_show=("faltou",)
            )

    def test_no_show_follows_custom_freed_set(self):
        classifier = StatusClassifier(
            StatusTaxonomy(
                blocking=("agendada",), freed=("cancelada", "no_show"), no_show=("no_show",)
            )
        )
        assert classifier.is_no_show("no_show") is True
        assert classifier.is_cancelled("no_show") is False
        assert classifier.cancelled_status_list() == ["cancelada"]


class TestDefaultTaxonomy:
    def test_bare_classifier_matches_module_functions(self):
        assert StatusClassifier().taxonomy == default_classifier.taxonomy
        for status in BLOCKING + FREED + UNRECOGNIZED:
            assert StatusClassifier().is_blocking(status) == is_blocking(status)
            assert StatusClassifier().is_freed(status) == is_freed(status)

    def test_bare_classifier_follows_configured_statuses(self, monkeypatch):
        configured = AppConfig(
            statuses=StatusConfig(
                blocking=("agendada", "confirmada", "realizada", "em_atendimento"),
                freed=("cancelada", "faltou"),
                no_show=("faltou",),
            )
        )
        monkeypatch.setattr(status_module, "settings", configured)

        classifier = StatusClassifier()
        assert classifier.is_blocking("em_atendimento") is True
        assert classifier.taxonomy == StatusTaxonomy.from_settings()

    def test_detector_and_predicate_agree_on_configured_statuses(self, monkeypatch):
        configured = AppConfig(
            statuses=StatusConfig(
                blocking=("agendada", "em_atendimento"),
                freed=("cancelada", "faltou"),
                no_show=("faltou",),
            )
        )
        monkeypatch.setattr(status_module, "settings", configured)

        result = ConflictDetector(StatusClassifier()).detect(
            propose((9, 0), (10, 0)), [make_booking(1, 9, status="em_atendimento")]
        )
        clause = QueryPredicateBuilder(StatusClassifier()).to_sql_exclusion_clause()
        assert result.has_conflict is True
        assert clause == "NOT IN ('agendada', 'em_atendimento')"
