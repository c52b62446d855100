"""
Customer model for service-reminder tracking.
"""
import uuid
from datetime import date, datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Customer(SQLModel, table=True):
    """
    Customer model representing a recurring service contract.

    Fields:
    - id: UUID primary key
    - name: Customer name (required)
    - phone_number: 10-digit contact number, no separators
    - service_type: Free-form label matching a ServiceType name by value
    - service_date: Date of the most recent completed service
    - service_duration: Recurrence interval length (>= 1)
    - service_duration_unit: 'days', 'months' or 'years'
    - next_service_date: Derived from the three fields above, never edited directly
    - created_at / updated_at: Mutation timestamps
    """

    __tablename__ = "customers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(nullable=False, index=True)
    phone_number: str = Field(nullable=False)
    service_type: str = Field(nullable=False)
    service_date: date = Field(nullable=False)
    service_duration: int = Field(nullable=False)
    service_duration_unit: str = Field(default="months", nullable=False)
    next_service_date: date = Field(nullable=False, index=True)
    created_at: Optional[datetime] = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = Field(default_factory=datetime.now)
