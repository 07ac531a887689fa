"""Raw user record schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from services.topup_service.schemas.fields import Flag, RecordId


class UserRecord(BaseModel):
    # Input ids may repeat across records; never used as a key.
    id: Any = None
    first_name: Any = None
    last_name: Any = None
    company_id: RecordId = None
    active_status: Flag = False
    email: Any = None
    email_status: Flag = False
    tokens: Any = None

    model_config = ConfigDict(extra="ignore")
