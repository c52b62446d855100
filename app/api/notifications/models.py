import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class NotificationStatus(BaseModel):
    customer_id: uuid.UUID
    last_sent: datetime | None = None
    is_sent: bool = False
    cycle_date: date | None = None
    model_config = ConfigDict(from_attributes=True)


class CheckResult(BaseModel):
    evaluated: int
    due: int
    sent: int
    failed: int
