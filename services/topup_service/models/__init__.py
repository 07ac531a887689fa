"""Top-up Service models package.

Re-exports all entities so that
``from services.topup_service.models import Company`` works.

When adding a new entity, add both its import and its __all__ entry.
"""

from services.topup_service.models.company import Company  # noqa: F401
from services.topup_service.models.token_change import TokenChange  # noqa: F401
from services.topup_service.models.user import User  # noqa: F401

__all__ = [
    "Company",
    "User",
    "TokenChange",
]
