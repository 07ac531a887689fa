"""TokenChange record, one user top up made during a run."""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TokenChange:
    company_id: Union[int, float, str]
    user_uuid: str
    previous_tokens: Any
    new_tokens: Any
    email_sent: bool

    @property
    def difference(self):
        return self.new_tokens - self.previous_tokens
