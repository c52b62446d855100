"""
Per-customer reminder state for the current due cycle.
"""
import uuid
from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class NotificationStatus(SQLModel, table=True):
    """
    One row per customer, overwritten on every successful reminder.

    Fields:
    - customer_id: Customer this state belongs to
    - last_sent: Timestamp of the last successful reminder
    - is_sent: Whether the reminder for cycle_date was dispatched
    - cycle_date: next_service_date the reminder was sent for. A status whose
      cycle_date differs from the customer's current next_service_date is stale.
    """

    __tablename__ = "notification_status"

    customer_id: uuid.UUID = Field(primary_key=True)
    last_sent: Optional[datetime] = Field(default=None)
    is_sent: bool = Field(default=False, nullable=False)
    cycle_date: Optional[date] = Field(default=None)
