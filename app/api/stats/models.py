# app/api/stats/models.py
import uuid
from datetime import date

from pydantic import BaseModel


class ServiceTypeSlice(BaseModel):
    name: str
    value: int


class DashboardStats(BaseModel):
    total_customers: int
    upcoming_services: int
    overdue_services: int
    sms_alerts: int
    service_type_distribution: list[ServiceTypeSlice]


class ExpiryRow(BaseModel):
    id: uuid.UUID
    name: str
    phone_number: str
    phone_display: str
    service_type: str
    service_date: date
    next_service_date: date
    days_left: int
    label: str
    severity: str
