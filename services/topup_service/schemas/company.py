"""Raw company record schema."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from services.topup_service.schemas.fields import Flag, RecordId


class CompanyRecord(BaseModel):
    """A company as it appears in the companies file.

    Values are kept as found; validity (id present, non-negative numeric
    top_up) is decided on the entity, not here.
    """

    id: RecordId = None
    name: Any = None
    top_up: Any = None
    email_status: Flag = False

    model_config = ConfigDict(extra="ignore")
