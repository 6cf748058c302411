"""Tests for logging completions against the ledger."""

# pylint: disable=redefined-outer-name

from datetime import date

import pytest

from pmtracker.core.exceptions import ErrorCode, InvalidDateError, PreventativeMaintenanceNotFoundError
from pmtracker.models import CalibrationCompletionHistory, PmCompletionHistory
from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.services.maintenance import CompletionService, ObligationService
from tests.conftest import TODAY


@pytest.fixture
def service(db_session):
    return CompletionService(db_session)


# ============================================================================
# PM completions
# ============================================================================


class TestLogPmCompletion:
    def test_advances_next_due_and_keeps_anchor(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, recurrence="monthly", next_due="2025-01-31")

        result = service.log_pm_completion(pm.id, "2025-01-31", "2025-01-30", today=TODAY)

        assert result.is_success
        updated = result.data.preventative_maintenance
        assert updated.next_due == "2025-02-28"
        assert updated.schedule_anchor == "2025-01-31"
        assert updated.last_completed == "2025-01-30"
        assert result.data.record.due_date == "2025-01-31"

    def test_relog_updates_instead_of_duplicating(self, service, db_session, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-03-01")

        service.log_pm_completion(pm.id, "2025-03-01", "2025-03-02", "first pass", today=TODAY)
        result = service.log_pm_completion(pm.id, "2025-03-01", "2025-03-05", "second pass", today=TODAY)

        rows = db_session.query(PmCompletionHistory).filter_by(preventative_maintenance_id=pm.id).all()
        assert len(rows) == 1
        assert rows[0].completed_at == "2025-03-05"
        assert rows[0].notes == "second pass"
        assert result.data.record.completed_at == "2025-03-05"

    def test_relog_without_notes_keeps_existing_notes(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-03-01")

        service.log_pm_completion(pm.id, "2025-03-01", "2025-03-02", "filters swapped", today=TODAY)
        result = service.log_pm_completion(pm.id, "2025-03-01", "2025-03-03", today=TODAY)

        assert result.data.record.completed_at == "2025-03-03"
        assert result.data.record.notes == "filters swapped"

    def test_earlier_due_date_never_moves_next_due_backward(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, recurrence="monthly", next_due="2025-06-01", schedule_anchor="2025-01-01")

        result = service.log_pm_completion(pm.id, "2025-03-01", "2025-03-01", today=TODAY)

        assert result.is_success
        assert result.data.preventative_maintenance.next_due == "2025-06-01"

    def test_later_due_date_catches_up(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, recurrence="quarterly", next_due="2025-01-15")

        result = service.log_pm_completion(pm.id, "2025-07-15", "2025-07-15", today=TODAY)

        assert result.data.preventative_maintenance.next_due == "2025-10-15"

    def test_missing_anchor_is_backfilled(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-04-10", schedule_anchor=None)

        result = service.log_pm_completion(pm.id, "2025-04-10", today=TODAY)

        assert result.data.preventative_maintenance.schedule_anchor == "2025-04-10"
        assert result.data.preventative_maintenance.next_due == "2025-05-10"

    def test_completed_at_defaults_to_today(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-06-01")

        result = service.log_pm_completion(pm.id, "2025-06-01", today=TODAY)

        assert result.data.record.completed_at == "2025-06-15"

    def test_last_completed_is_maximum_after_out_of_order_logging(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-01-01")

        service.log_pm_completion(pm.id, "2025-03-01", "2025-03-04", today=TODAY)
        result = service.log_pm_completion(pm.id, "2025-01-01", "2025-01-02", today=TODAY)

        assert result.data.preventative_maintenance.last_completed == "2025-03-04"

    @pytest.mark.parametrize(
        "due_date,completed_at,field",
        [
            ("2025-02-30", None, "due_date"),
            ("03/01/2025", None, "due_date"),
            ("2025-03-01", "yesterday", "completed_at"),
        ],
    )
    def test_invalid_dates_are_rejected(self, service, enterprise, make_pm, due_date, completed_at, field):
        pm = make_pm(enterprise)

        result = service.log_pm_completion(pm.id, due_date, completed_at, today=TODAY)

        assert result.is_failure
        assert result.error.code is ErrorCode.INVALID_DATE
        assert result.error.details["field"] == field
        with pytest.raises(InvalidDateError) as exc_info:
            result.unwrap()
        assert exc_info.value.status_code == 400

    def test_unknown_pm(self, service):
        result = service.log_pm_completion(999, "2025-03-01", today=TODAY)

        assert result.is_failure
        with pytest.raises(PreventativeMaintenanceNotFoundError):
            result.unwrap()

    def test_history_newest_first(self, service, enterprise, make_pm):
        pm = make_pm(enterprise, next_due="2025-01-01")
        for due in ("2025-02-01", "2025-01-01", "2025-03-01"):
            service.log_pm_completion(pm.id, due, due, today=TODAY)

        history = service.list_pm_history(pm.id).unwrap()

        assert [row.due_date for row in history] == ["2025-03-01", "2025-02-01", "2025-01-01"]


# ============================================================================
# Calibration completions
# ============================================================================


class TestLogCalibrationCompletion:
    def test_lenient_frequency_advances_cal_due(self, service, db_session, bristol, make_asset):
        asset = make_asset(bristol, aid="SC-1", cal_due="2025-03-01", cal_freq="Annual")

        result = service.log_calibration_completion(asset.id, "2025-03-01", "2025-02-27", "in tolerance", today=TODAY)

        assert result.is_success
        assert result.data.asset.cal_due == "2026-03-01"
        assert result.data.asset.calibration_anchor == "2025-03-01"
        assert result.data.asset.last_calibration == "2025-02-27"
        assert db_session.query(CalibrationCompletionHistory).count() == 1

    def test_unrecognized_frequency_leaves_cal_due(self, service, bristol, make_asset):
        asset = make_asset(bristol, cal_due="2025-03-01", cal_freq="as needed")

        result = service.log_calibration_completion(asset.id, "2025-03-01", today=TODAY)

        assert result.is_success
        assert result.data.asset.cal_due == "2025-03-01"

    def test_ledgers_are_separate_per_source(self, service, db_session, bristol, make_asset, make_pm):
        asset = make_asset(bristol, cal_due="2025-06-01", cal_freq="monthly")
        pm = make_pm(bristol, next_due="2025-06-01", asset=asset)
        assert asset.id == pm.id

        service.log_calibration_completion(asset.id, "2025-06-01", "2025-06-01", today=TODAY)

        obligations = ObligationService(db_session).list_obligations()
        ledger = service.load_ledger(obligations, date(2025, 6, 1), date(2025, 6, 30))

        assert ("calibration:1", "2025-06-01") in ledger
        assert ("pm:1", "2025-06-01") not in ledger
        assert {o.source_type for o in obligations} == set(ObligationSourceType)
