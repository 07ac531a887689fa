"""Top-up Service schemas package.

Re-exports the raw record schemas so callers can write
``from services.topup_service.schemas import CompanyRecord``.
"""

from services.topup_service.schemas.company import CompanyRecord  # noqa: F401
from services.topup_service.schemas.fields import (  # noqa: F401
    Flag,
    RecordId,
    is_numeric,
)
from services.topup_service.schemas.user import UserRecord  # noqa: F401

__all__ = [
    "CompanyRecord",
    "UserRecord",
    "Flag",
    "RecordId",
    "is_numeric",
]
