"""
Completion service.

Logs completions into the PM and calibration ledgers and advances the
obligation's next due date. The ledger upsert and the next-due update run
in one transaction with the obligation row locked, so concurrent
completions cannot move a schedule backward.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.core.exceptions import BaseAppException, InvalidDateError
from pmtracker.repositories.asset_repository import AssetRepository
from pmtracker.repositories.completion_history_repository import (
    CalibrationCompletionHistoryRepository,
    CompletionHistoryRepository,
    PmCompletionHistoryRepository,
)
from pmtracker.repositories.preventative_maintenance_repository import (
    PreventativeMaintenanceRepository,
)
from pmtracker.schemas.common.enums import ObligationSourceType
from pmtracker.schemas.completion import (
    CalibrationCompletionResult,
    CompletionRecordResponse,
    PmCompletionResult,
)
from pmtracker.scheduling.obligation import MaintenanceObligation, obligation_key
from pmtracker.scheduling.reconciliation import (
    CompletionRecord,
    LedgerKey,
    advance_next_due,
    build_ledger,
)
from pmtracker.scheduling.recurrence import parse_recurrence
from pmtracker.services.base import BaseService, ServiceResult
from pmtracker.services.facility.asset_service import build_asset_response
from pmtracker.services.maintenance.preventative_maintenance_service import build_pm_response
from pmtracker.utils.date_utils import format_iso_date, is_iso_date, today_iso


def validate_completion_dates(
    due_date: str,
    completed_at: Optional[str],
    today: Optional[date] = None,
) -> Tuple[str, str]:
    """
    Validate completion input at the boundary.

    Returns:
        (due_date, completed_at) with completed_at defaulted to today

    Raises:
        InvalidDateError: If either date is not a valid YYYY-MM-DD string
    """
    if not is_iso_date(due_date):
        raise InvalidDateError("due_date", due_date)
    if completed_at is None or completed_at == "":
        completed_at = today_iso(today)
    elif not is_iso_date(completed_at):
        raise InvalidDateError("completed_at", completed_at)
    return due_date, completed_at


class CompletionService(BaseService):
    """Completion ledger writes and reads."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.pm_repository = PreventativeMaintenanceRepository(db_session)
        self.asset_repository = AssetRepository(db_session)
        self.pm_history = PmCompletionHistoryRepository(db_session)
        self.calibration_history = CalibrationCompletionHistoryRepository(db_session)

    # -------------------------------------------------------------------------
    # Logging completions
    # -------------------------------------------------------------------------

    def log_pm_completion(
        self,
        pm_id: int,
        due_date: str,
        completed_at: Optional[str] = None,
        notes: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[PmCompletionResult]:
        """
        Record completion of one PM occurrence.

        Re-logging the same due date replaces the completion date (and the
        notes, when given). ``next_due`` advances one interval past
        ``due_date`` unless it is already further ahead.

        Args:
            pm_id: PM task id
            due_date: ISO due date being completed
            completed_at: ISO completion date, defaults to today
            notes: Optional notes
            today: Reference date for the default completion date

        Returns:
            ServiceResult with the ledger row and the updated PM task
        """
        try:
            due_date, completed_at = validate_completion_dates(due_date, completed_at, today)

            with self.transaction():
                pm = self.pm_repository.get_for_update(pm_id)
                record = self.pm_history.upsert_completion(
                    pm.id, due_date, completed_at, notes, commit=False
                )

                updates = {}
                new_next_due = advance_next_due(pm.next_due, due_date, parse_recurrence(pm.recurrence))
                if new_next_due is not None:
                    updates["next_due"] = new_next_due
                # Backfill from the pre-advance next_due: the logged occurrence starts the series.
                if not pm.schedule_anchor:
                    updates["schedule_anchor"] = pm.next_due or due_date
                if updates:
                    self.pm_repository.update(pm, updates, commit=False)

            self.db.refresh(pm)
            self.db.refresh(record)
            last_completed = self.pm_history.max_completed_at(pm.id)
            self._log_operation(
                "log_pm_completion",
                {
                    "pm_id": pm.id,
                    "due_date": due_date,
                    "completed_at": completed_at,
                    "next_due": pm.next_due,
                },
            )
            return ServiceResult.success(
                PmCompletionResult(
                    record=CompletionRecordResponse.model_validate(record),
                    preventative_maintenance=build_pm_response(pm, last_completed),
                ),
                message="Completion logged",
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "log PM completion", pm_id)

    def log_calibration_completion(
        self,
        asset_id: int,
        due_date: str,
        completed_at: Optional[str] = None,
        notes: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ServiceResult[CalibrationCompletionResult]:
        """
        Record completion of one calibration occurrence.

        Same semantics as PM completions; the advancing field is the
        asset's ``cal_due`` and the rule comes from its free-text
        ``cal_freq``.
        """
        try:
            due_date, completed_at = validate_completion_dates(due_date, completed_at, today)

            with self.transaction():
                asset = self.asset_repository.get_for_update(asset_id)
                record = self.calibration_history.upsert_completion(
                    asset.id, due_date, completed_at, notes, commit=False
                )

                updates = {}
                rule = parse_recurrence(asset.cal_freq, lenient=True)
                new_cal_due = advance_next_due(asset.cal_due, due_date, rule)
                if new_cal_due is not None:
                    updates["cal_due"] = new_cal_due
                # Same pre-advance anchoring as PM tasks.
                if not asset.calibration_anchor:
                    updates["calibration_anchor"] = asset.cal_due or due_date
                if updates:
                    self.asset_repository.update(asset, updates, commit=False)

            self.db.refresh(asset)
            self.db.refresh(record)
            last_calibration = self.calibration_history.max_completed_at(asset.id)
            self._log_operation(
                "log_calibration_completion",
                {
                    "asset_id": asset.id,
                    "due_date": due_date,
                    "completed_at": completed_at,
                    "cal_due": asset.cal_due,
                },
            )
            return ServiceResult.success(
                CalibrationCompletionResult(
                    record=CompletionRecordResponse.model_validate(record),
                    asset=build_asset_response(asset, last_calibration),
                ),
                message="Calibration logged",
            )
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "log calibration completion", asset_id)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def list_pm_history(self, pm_id: int) -> ServiceResult[List[CompletionRecordResponse]]:
        try:
            self.pm_repository.get_by_id(pm_id)
            return ServiceResult.success(self._history(self.pm_history, pm_id))
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list PM completion history", pm_id)

    def list_calibration_history(self, asset_id: int) -> ServiceResult[List[CompletionRecordResponse]]:
        try:
            self.asset_repository.get_by_id(asset_id)
            return ServiceResult.success(self._history(self.calibration_history, asset_id))
        except BaseAppException as e:
            return ServiceResult.from_app_exception(e)
        except SQLAlchemyError as e:
            return self._handle_exception(e, "list calibration history", asset_id)

    @staticmethod
    def _history(repository: CompletionHistoryRepository, obligation_id: int) -> List[CompletionRecordResponse]:
        return [
            CompletionRecordResponse.model_validate(row)
            for row in repository.list_for_obligation(obligation_id)
        ]

    # -------------------------------------------------------------------------
    # Ledger for reconciliation
    # -------------------------------------------------------------------------

    def load_ledger(
        self,
        obligations: Iterable[MaintenanceObligation],
        window_start: date,
        window_end: date,
    ) -> Dict[LedgerKey, CompletionRecord]:
        """
        Completion records of ``obligations`` with due dates in the window.

        Args:
            obligations: Obligations being reconciled
            window_start: Inclusive window start
            window_end: Inclusive window end

        Returns:
            Ledger keyed by ``(obligation key, due date)``
        """
        start, end = format_iso_date(window_start), format_iso_date(window_end)
        ids: Dict[ObligationSourceType, List[int]] = {source: [] for source in ObligationSourceType}
        for obligation in obligations:
            ids[obligation.source_type].append(obligation.id)

        repositories = {
            ObligationSourceType.PM: self.pm_history,
            ObligationSourceType.CALIBRATION: self.calibration_history,
        }
        records: List[CompletionRecord] = []
        for source_type, obligation_ids in ids.items():
            if not obligation_ids:
                continue
            for row in repositories[source_type].list_in_window(start, end, obligation_ids):
                records.append(
                    CompletionRecord(
                        obligation_key=obligation_key(source_type, row.obligation_id),
                        due_date=row.due_date,
                        completed_at=row.completed_at,
                        notes=row.notes,
                    )
                )
        return build_ledger(records)
