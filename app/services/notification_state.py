# app/services/notification_state.py
"""
Notification state tracker: one NotificationStatus row per customer.
"""
import logging
import uuid
from datetime import date
from typing import List

from sqlmodel import Session, select

from ..models.notification_status import NotificationStatus

logger = logging.getLogger(__name__)


class NotificationStateService:
    """
    get/set access to per-customer reminder state.

    The scheduler is the only writer and processes one customer at a time,
    so calls for the same customer id are simply last-write-wins.
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, customer_id: uuid.UUID) -> NotificationStatus:
        """Return the stored status, or the default (None, False) if absent."""
        status = self.session.get(NotificationStatus, customer_id)
        if status is None:
            return NotificationStatus(customer_id=customer_id, last_sent=None, is_sent=False)
        return status

    def set(self, customer_id: uuid.UUID, status: NotificationStatus) -> NotificationStatus:
        """Full overwrite with upsert semantics."""
        existing = self.session.get(NotificationStatus, customer_id)
        if existing is None:
            existing = NotificationStatus(customer_id=customer_id)

        existing.last_sent = status.last_sent
        existing.is_sent = status.is_sent
        existing.cycle_date = status.cycle_date

        self.session.add(existing)
        self.session.commit()
        self.session.refresh(existing)
        return existing

    def is_sent_for(self, customer_id: uuid.UUID, cycle_date: date) -> bool:
        """
        True only when the reminder was sent for this exact next_service_date.
        A status recorded for an older cycle is stale and reads as not sent.
        """
        status = self.get(customer_id)
        if not status.is_sent:
            return False
        return status.cycle_date is None or status.cycle_date == cycle_date

    def delete(self, customer_id: uuid.UUID) -> None:
        status = self.session.get(NotificationStatus, customer_id)
        if status is not None:
            self.session.delete(status)
            self.session.commit()

    def get_all(self) -> List[NotificationStatus]:
        return list(self.session.exec(select(NotificationStatus)).all())
