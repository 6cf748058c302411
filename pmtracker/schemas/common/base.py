# --- File: pmtracker/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pmtracker.utils.date_utils import is_iso_date

__all__ = [
    "BaseSchema",
    "ApiSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "validate_optional_iso_date",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All internal schemas should inherit from this to ensure consistent
    behaviour (validation, ORM loading, whitespace handling).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        arbitrary_types_allowed=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class ApiSchema(BaseSchema):
    """
    Schema exchanged over HTTP.

    Fields are snake_case in Python and camelCase on the wire; input is
    accepted under either name.
    """

    model_config = ConfigDict(alias_generator=to_camel)


class BaseCreateSchema(ApiSchema):
    """Base schema for create operations."""
    pass


class BaseResponseSchema(ApiSchema):
    """Base schema for API responses of persisted entities."""

    id: int = Field(..., description="Unique identifier")


def validate_optional_iso_date(value: Any, field_name: str) -> Optional[str]:
    """Shared validator body: empty -> None, otherwise strict YYYY-MM-DD."""
    if value is None or value == "":
        return None
    if not is_iso_date(value):
        raise ValueError(f"{field_name} must be a valid YYYY-MM-DD date")
    return value
