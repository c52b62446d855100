# app/services/customer_service.py
"""
Customer service layer using SQLModel ORM.
Owns the next_service_date invariant: it is derived here on every write
(create, update, upsert), never taken from input.
"""
import logging
import re
import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from ..core.constants import PHONE_NUMBER_PATTERN, DurationUnit
from ..models.customer import Customer
from .notification_state import NotificationStateService
from .recurrence import next_service_date, parse_date

logger = logging.getLogger(__name__)

RECURRENCE_FIELDS = ("service_date", "service_duration", "service_duration_unit")
READ_ONLY_FIELDS = ("id", "next_service_date", "created_at", "updated_at")

_phone_re = re.compile(PHONE_NUMBER_PATTERN)


class CustomerService:
    """
    Service layer for Customer records.
    """

    def __init__(self, session: Session):
        """
        Initialize with a SQLModel session.

        Args:
            session: SQLModel Session instance
        """
        self.session = session

    # --- Queries ---
    def list_customers(self) -> List[Customer]:
        """All customers in store iteration order (creation order)."""
        statement = select(Customer).order_by(Customer.created_at, Customer.id)
        return list(self.session.exec(statement).all())

    def search_customers(
        self, search: Optional[str] = None, service_type: Optional[str] = None
    ) -> List[Customer]:
        """
        Table view filter: case-insensitive name substring or phone substring,
        optionally restricted to a service type label.
        """
        customers = self.list_customers()
        if service_type:
            customers = [c for c in customers if c.service_type == service_type]
        if search and search.strip():
            term = search.strip().lower()
            customers = [
                c for c in customers if term in c.name.lower() or term in c.phone_number
            ]
        return customers

    def get_customer_by_id(self, customer_id: uuid.UUID) -> Customer:
        customer = self.session.get(Customer, customer_id)
        if not customer:
            raise FileNotFoundError(f"Customer {customer_id} not found.")
        return customer

    # --- Mutations ---
    def create_customer(self, customer_data: Dict[str, Any]) -> Customer:
        """Create a customer, deriving next_service_date."""
        data = {k: v for k, v in customer_data.items() if k not in READ_ONLY_FIELDS}
        self._validate(data, partial=False)

        service_date = self._as_date(data["service_date"])
        data["service_date"] = service_date
        data["service_duration_unit"] = DurationUnit(data["service_duration_unit"]).value
        data["next_service_date"] = next_service_date(
            service_date, data["service_duration"], data["service_duration_unit"]
        )

        now = datetime.now()
        new_customer = Customer(**data, created_at=now, updated_at=now)
        return self.upsert_customer(new_customer)

    def update_customer(self, customer_id: uuid.UUID, customer_update: Dict[str, Any]) -> Customer:
        """
        Partial update. next_service_date is recomputed only when one of
        service_date, service_duration or service_duration_unit changes.
        """
        update = {k: v for k, v in customer_update.items() if k not in READ_ONLY_FIELDS}
        if not update:
            raise ValueError("No fields to update provided.")

        customer = self.get_customer_by_id(customer_id)
        self._validate(update, partial=True)

        if "service_date" in update:
            update["service_date"] = self._as_date(update["service_date"])
        if "service_duration_unit" in update:
            update["service_duration_unit"] = DurationUnit(update["service_duration_unit"]).value

        recurrence_changed = any(
            field in update and update[field] != getattr(customer, field)
            for field in RECURRENCE_FIELDS
        )

        for key, value in update.items():
            if hasattr(customer, key):
                setattr(customer, key, value)

        if recurrence_changed:
            customer.next_service_date = next_service_date(
                customer.service_date,
                customer.service_duration,
                customer.service_duration_unit,
            )
            logger.info(
                f"Next service date for {customer.id} recomputed: {customer.next_service_date}"
            )

        customer.updated_at = datetime.now()
        return self.upsert_customer(customer)

    def complete_service(self, customer_id: uuid.UUID, completed_on: Optional[date] = None) -> Customer:
        """Record a completed service: the completion date becomes the new base date."""
        return self.update_customer(
            customer_id, {"service_date": completed_on or date.today()}
        )

    def upsert_customer(self, customer: Customer) -> Customer:
        """Insert or replace a customer record, re-deriving next_service_date."""
        customer.next_service_date = next_service_date(
            self._as_date(customer.service_date),
            customer.service_duration,
            customer.service_duration_unit,
        )
        try:
            merged = self.session.merge(customer)
            self.session.commit()
            self.session.refresh(merged)
            return merged
        except Exception as e:
            self.session.rollback()
            raise ValueError(f"Database error: {e}")

    def delete_customer(self, customer_id: uuid.UUID):
        """Delete a customer and its notification state."""
        customer = self.session.get(Customer, customer_id)
        if not customer:
            raise FileNotFoundError("Customer not found to delete.")

        self.session.delete(customer)
        self.session.commit()
        NotificationStateService(self.session).delete(customer_id)

    # --- Helpers ---
    @staticmethod
    def _as_date(value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return parse_date(str(value))
        except ValueError:
            raise ValueError(f"Invalid service_date: {value!r} (expected YYYY-MM-DD)")

    @staticmethod
    def _validate(data: Dict[str, Any], partial: bool) -> None:
        """Reject records that must never reach the scheduler."""
        required = ("name", "phone_number", "service_type", *RECURRENCE_FIELDS)
        if not partial:
            missing = [f for f in required if data.get(f) in (None, "")]
            if missing:
                raise ValueError(f"Missing required fields: {', '.join(missing)}")

        if "name" in data and not str(data["name"] or "").strip():
            raise ValueError("name cannot be empty.")

        if "phone_number" in data and not _phone_re.match(str(data["phone_number"] or "")):
            raise ValueError("phone_number must be exactly 10 digits.")

        if "service_duration" in data:
            duration = data["service_duration"]
            if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
                raise ValueError("service_duration must be a positive integer.")

        if "service_duration_unit" in data:
            try:
                DurationUnit(data["service_duration_unit"])
            except ValueError:
                raise ValueError(
                    f"service_duration_unit must be one of: {', '.join(u.value for u in DurationUnit)}"
                )
