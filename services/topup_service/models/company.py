"""Company entity."""

from dataclasses import dataclass
from typing import Any, Optional, Union

from services.topup_service.schemas import CompanyRecord, is_numeric


@dataclass(frozen=True)
class Company:
    id: Optional[Union[int, float, str]]
    name: Any
    top_up: Any
    email_status: bool

    @classmethod
    def from_record(cls, record: CompanyRecord) -> "Company":
        return cls(
            id=record.id,
            name=record.name,
            top_up=record.top_up,
            email_status=record.email_status,
        )

    def is_valid(self) -> bool:
        """A company needs an id and a non-negative numeric top up amount."""
        return self.id is not None and is_numeric(self.top_up) and self.top_up >= 0
