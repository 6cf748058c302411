# pmtracker/repositories/completion_history_repository.py
"""
Completion History Repositories.

Ledger storage for PM and calibration completions. Both tables share one
shape, ``(obligation id, due_date)`` unique, so a single generic
repository serves both.
"""

from typing import Dict, Iterable, List, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pmtracker.config.logging import get_logger
from pmtracker.core.exceptions import RepositoryError
from pmtracker.models import CalibrationCompletionHistory, PmCompletionHistory
from pmtracker.repositories.base.base_repository import BaseRepository, ModelType

logger = get_logger(__name__)

_NATIVE_UPSERT = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


class CompletionHistoryRepository(BaseRepository[ModelType]):
    """
    Generic completion ledger repository.

    Subclasses bind the model and the name of its obligation foreign key.
    """

    obligation_column: str = ""

    def __init__(self, model: Type[ModelType], session: Session):
        super().__init__(model, session)
        self._obligation = getattr(model, self.obligation_column)

    # ============================================================================
    # WRITE OPERATIONS
    # ============================================================================

    def upsert_completion(
        self,
        obligation_id: int,
        due_date: str,
        completed_at: Optional[str],
        notes: Optional[str] = None,
        commit: bool = True,
    ) -> ModelType:
        """
        Insert or update the ledger row for ``(obligation_id, due_date)``.

        ``completed_at`` always replaces the stored value; ``notes`` replace
        it only when given.

        Args:
            obligation_id: PM id or asset id
            due_date: ISO due date
            completed_at: ISO completion date
            notes: Optional notes
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            The stored ledger row
        """
        dialect = self.db.get_bind().dialect.name
        try:
            if dialect in _NATIVE_UPSERT:
                self._native_upsert(dialect, obligation_id, due_date, completed_at, notes)
            else:
                self._read_then_write(obligation_id, due_date, completed_at, notes)

            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Completion upsert failed: {str(e)}") from e

        record = self.find_for_due_date(obligation_id, due_date)
        logger.info(
            f"Logged completion for {self.model.__name__} "
            f"{obligation_id} due {due_date}: {completed_at}"
        )
        return record

    def _native_upsert(
        self,
        dialect: str,
        obligation_id: int,
        due_date: str,
        completed_at: Optional[str],
        notes: Optional[str],
    ) -> None:
        insert = _NATIVE_UPSERT[dialect]
        stmt = insert(self.model).values(
            **{
                self.obligation_column: obligation_id,
                "due_date": due_date,
                "completed_at": completed_at,
                "notes": notes,
            }
        )
        set_ = {
            "completed_at": stmt.excluded.completed_at,
            "updated_at": func.now(),
        }
        if notes is not None:
            set_["notes"] = stmt.excluded.notes

        stmt = stmt.on_conflict_do_update(
            index_elements=[self.obligation_column, "due_date"],
            set_=set_,
        )
        self.db.execute(stmt)

    def _read_then_write(
        self,
        obligation_id: int,
        due_date: str,
        completed_at: Optional[str],
        notes: Optional[str],
    ) -> None:
        record = self.find_for_due_date(obligation_id, due_date)
        if record is None:
            self.db.add(
                self.model(
                    **{
                        self.obligation_column: obligation_id,
                        "due_date": due_date,
                        "completed_at": completed_at,
                        "notes": notes,
                    }
                )
            )
            return

        record.completed_at = completed_at
        if notes is not None:
            record.notes = notes

    # ============================================================================
    # READ OPERATIONS
    # ============================================================================

    def find_for_due_date(self, obligation_id: int, due_date: str) -> Optional[ModelType]:
        stmt = (
            select(self.model)
            .where(self._obligation == obligation_id, self.model.due_date == due_date)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_obligation(self, obligation_id: int) -> List[ModelType]:
        """Ledger rows of one obligation, newest due date first."""
        stmt = (
            select(self.model)
            .where(self._obligation == obligation_id)
            .order_by(self.model.due_date.desc(), self.model.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def list_in_window(
        self,
        window_start: str,
        window_end: str,
        obligation_ids: Optional[Iterable[int]] = None,
    ) -> List[ModelType]:
        """
        Ledger rows whose due date falls inside an inclusive ISO window.

        Args:
            window_start: Inclusive ISO start
            window_end: Inclusive ISO end
            obligation_ids: Restrict to these obligations

        Returns:
            Matching rows
        """
        stmt = select(self.model).where(
            self.model.due_date >= window_start,
            self.model.due_date <= window_end,
        )
        if obligation_ids is not None:
            stmt = stmt.where(self._obligation.in_(list(obligation_ids)))
        return list(self.db.execute(stmt).scalars())

    def max_completed_at(self, obligation_id: int) -> Optional[str]:
        """Latest completion date recorded for one obligation."""
        stmt = select(func.max(self.model.completed_at)).where(
            self._obligation == obligation_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def max_completed_by_obligation(
        self,
        obligation_ids: Optional[Iterable[int]] = None,
    ) -> Dict[int, str]:
        """Map obligation id -> latest completion date."""
        stmt = select(self._obligation, func.max(self.model.completed_at)).where(
            self.model.completed_at.isnot(None)
        )
        if obligation_ids is not None:
            stmt = stmt.where(self._obligation.in_(list(obligation_ids)))
        stmt = stmt.group_by(self._obligation)
        return {obligation_id: latest for obligation_id, latest in self.db.execute(stmt)}


class PmCompletionHistoryRepository(CompletionHistoryRepository[PmCompletionHistory]):
    """PM completion ledger."""

    obligation_column = "preventative_maintenance_id"

    def __init__(self, session: Session):
        super().__init__(PmCompletionHistory, session)


class CalibrationCompletionHistoryRepository(
    CompletionHistoryRepository[CalibrationCompletionHistory]
):
    """Calibration completion ledger."""

    obligation_column = "asset_id"

    def __init__(self, session: Session):
        super().__init__(CalibrationCompletionHistory, session)
