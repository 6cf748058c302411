# --- File: pmtracker/schemas/completion.py ---
"""
Completion ledger schemas.

Dates arrive as plain strings and are validated by the completion service
so that malformed dates surface as 400 responses.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from pmtracker.schemas.asset import AssetResponse
from pmtracker.schemas.common.base import ApiSchema, BaseResponseSchema
from pmtracker.schemas.preventative_maintenance import PreventativeMaintenanceResponse

__all__ = [
    "CompletionCreate",
    "CompletionRecordResponse",
    "PmCompletionResult",
    "CalibrationCompletionResult",
]


class CompletionCreate(ApiSchema):
    """Log completion of one occurrence."""

    due_date: str = Field(..., description="Due date being completed (YYYY-MM-DD)")
    completed_at: Optional[str] = Field(
        None,
        description="Completion date (YYYY-MM-DD); defaults to today",
    )
    notes: Optional[str] = None


class CompletionRecordResponse(BaseResponseSchema):
    """One ledger row."""

    due_date: str
    completed_at: Optional[str] = None
    notes: Optional[str] = None


class PmCompletionResult(ApiSchema):
    record: CompletionRecordResponse
    preventative_maintenance: PreventativeMaintenanceResponse


class CalibrationCompletionResult(ApiSchema):
    record: CompletionRecordResponse
    asset: AssetResponse
