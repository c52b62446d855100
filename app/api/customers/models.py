# app/api/customers/models.py
import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from ...core.constants import PHONE_NUMBER_PATTERN, DurationUnit


# --- Pydantic models (Customer) ---
class Customer(BaseModel):
    id: uuid.UUID
    name: str
    phone_number: str
    service_type: str
    service_date: date
    service_duration: int
    service_duration_unit: DurationUnit
    next_service_date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None
    model_config = ConfigDict(from_attributes=True)


class CustomerListItem(Customer):
    days_left: int
    status_label: str


class CustomerCreate(BaseModel):
    # next_service_date is derived server-side; extra keys are ignored
    name: str = Field(min_length=1)
    phone_number: str = Field(pattern=PHONE_NUMBER_PATTERN)
    service_type: str = Field(min_length=1)
    service_date: date
    service_duration: int = Field(ge=1)
    service_duration_unit: DurationUnit = DurationUnit.MONTHS


class CustomerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    phone_number: str | None = Field(default=None, pattern=PHONE_NUMBER_PATTERN)
    service_type: str | None = Field(default=None, min_length=1)
    service_date: date | None = None
    service_duration: int | None = Field(default=None, ge=1)
    service_duration_unit: DurationUnit | None = None


class ServiceCompletion(BaseModel):
    completed_on: date | None = None
    notify: bool = True


class CompletionResult(BaseModel):
    customer: Customer
    notification_sent: bool
