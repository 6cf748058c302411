from pmtracker.schemas.common.base import (
    ApiSchema,
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
)
from pmtracker.schemas.common.enums import (
    ComplianceStatus,
    ObligationSourceType,
    RecurrenceRule,
)

__all__ = [
    "ApiSchema",
    "BaseCreateSchema",
    "BaseResponseSchema",
    "BaseSchema",
    "ComplianceStatus",
    "ObligationSourceType",
    "RecurrenceRule",
]
