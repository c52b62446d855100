# app/services/reminder_service.py
"""
Reminder dispatch: decides, once per check cycle, which customers are due for
a pre-service SMS and records the outcome in the notification state.
"""

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

from sqlmodel import Session

from ..core.constants import NOTIFICATION_LEAD_DAYS
from ..models.customer import Customer
from ..models.notification_status import NotificationStatus
from ..utils.sms import SmsSender, TwilioSmsSender
from .customer_service import CustomerService
from .messages import completion_message, reminder_message
from .notification_state import NotificationStateService
from .settings_service import SettingsService

logger = logging.getLogger(__name__)


def notification_date(customer: Customer, lead_days: int = NOTIFICATION_LEAD_DAYS) -> date:
    """Calendar day on which the customer's reminder is due."""
    return customer.next_service_date - timedelta(days=lead_days)


class ReminderService:
    """
    Service for reminder and completion SMS dispatch.

    Every cycle re-derives each customer's state from data:
    - today < notification date: not yet in window
    - today == notification date and not sent: due, dispatch
    - already sent for this next_service_date: skip
    - today > notification date: missed window, no catch-up

    A failed dispatch leaves the customer unsent, so the next cycle on the same
    day selects it again.
    """

    def __init__(
        self,
        session: Session,
        sender: Optional[SmsSender] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize with a SQLModel session.

        Args:
            session: SQLModel Session instance
            sender: SMS transport; defaults to Twilio with per-send credentials
            clock: Source of "now" (local, naive)
        """
        self.session = session
        self.customer_service = CustomerService(session)
        self.state_service = NotificationStateService(session)
        self.settings_service = SettingsService(session)
        self.sender = sender or TwilioSmsSender(self.settings_service.get_sms_config)
        self.clock = clock

    # --- Selection ---
    def is_due(self, customer: Customer, today: date) -> bool:
        if today != notification_date(customer):
            return False
        return not self.state_service.is_sent_for(customer.id, customer.next_service_date)

    def find_due_customers(self, today: Optional[date] = None) -> List[Customer]:
        today = today or self.clock().date()
        return [c for c in self.customer_service.list_customers() if self.is_due(c, today)]

    # --- Cycle ---
    def run_cycle(self, today: Optional[date] = None) -> Dict[str, int]:
        """
        Evaluate every customer once and dispatch due reminders sequentially.
        Store errors propagate and abandon the cycle.
        """
        today = today or self.clock().date()
        logger.info(f"Starting reminder check for {today.isoformat()}...")

        customers = self.customer_service.list_customers()
        stats = {"evaluated": 0, "due": 0, "sent": 0, "failed": 0}

        for customer in customers:
            stats["evaluated"] += 1
            if not self.is_due(customer, today):
                continue

            stats["due"] += 1
            if self.send_reminder(customer):
                stats["sent"] += 1
            else:
                stats["failed"] += 1

        return stats

    def send_reminder(self, customer: Customer) -> bool:
        """Dispatch one reminder and mark it sent on success."""
        message = reminder_message(customer.service_type, customer.next_service_date)

        try:
            delivered = self.sender.send(customer.phone_number, message)
        except Exception as e:
            logger.error(f"❌ Error sending reminder to {customer.name} ({customer.id}): {e}")
            delivered = False

        if not delivered:
            logger.warning(f"Reminder to {customer.name} failed, will retry next cycle.")
            return False

        self.state_service.set(
            customer.id,
            NotificationStatus(
                customer_id=customer.id,
                last_sent=self.clock(),
                is_sent=True,
                cycle_date=customer.next_service_date,
            ),
        )
        logger.info(f"✅ Reminder sent to {customer.name} for {customer.next_service_date}")
        return True

    # --- Manual completion path ---
    def send_completion_notice(self, customer_id: uuid.UUID) -> bool:
        """
        Send the "service completed" SMS unconditionally.
        Never reads nor writes the notification state.
        """
        customer = self.customer_service.get_customer_by_id(customer_id)
        message = completion_message(
            self.settings_service.get_brand_name(),
            customer.service_type,
            customer.next_service_date,
        )

        try:
            delivered = self.sender.send(customer.phone_number, message)
        except Exception as e:
            logger.error(f"❌ Error sending completion notice to {customer.name}: {e}")
            return False

        if delivered:
            logger.info(f"Completion notice sent to {customer.name}")
        else:
            logger.warning(f"Completion notice to {customer.name} failed")
        return delivered
