"""User entity."""

from dataclasses import dataclass
from typing import Any, Optional, Union

from services.topup_service.schemas import UserRecord, is_numeric


@dataclass
class User:
    """A user loaded for one run.

    ``uuid`` is generated at load time; ``id`` is whatever the input carried
    and may repeat across users.
    """

    uuid: str
    id: Any
    first_name: Any
    last_name: Any
    company_id: Optional[Union[int, float, str]]
    active_status: bool
    email: Any
    email_status: bool
    tokens: Any

    @classmethod
    def from_record(cls, record: UserRecord, uuid: str) -> "User":
        return cls(
            uuid=uuid,
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            company_id=record.company_id,
            active_status=record.active_status,
            email=record.email,
            email_status=record.email_status,
            tokens=record.tokens,
        )

    def top_up(self, amount) -> None:
        self.tokens = self.tokens + amount

    def is_active(self) -> bool:
        return self.active_status

    def is_valid(self) -> bool:
        """A user needs a company id and a numeric token balance."""
        return self.company_id is not None and is_numeric(self.tokens)
