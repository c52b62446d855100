# app/services/stats_service.py
"""
Read-only aggregates for the dashboard and the expiry checker.
"""
import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from ..core.constants import NOTIFICATION_LEAD_DAYS, UPCOMING_WINDOW_DAYS, ExpirySeverity
from .customer_service import CustomerService


def format_phone_display(phone_number: str) -> str:
    """5551234567 -> (555) 123-4567; anything else is returned unchanged."""
    return re.sub(r"^(\d{3})(\d{3})(\d{4})$", r"(\1) \2-\3", phone_number)


def days_left_label(days_left: int) -> str:
    if days_left <= 0:
        return f"Overdue by {abs(days_left)} days"
    return f"{days_left} days"


def table_status_label(days_left: int) -> str:
    """Short status shown next to the next service date in the customer table."""
    if days_left <= 0:
        return "Overdue!"
    if days_left == 1:
        return "Tomorrow"
    if days_left <= NOTIFICATION_LEAD_DAYS:
        return f"{days_left} days left (SMS alert)"
    return f"{days_left} days left"


def expiry_severity(days_left: int) -> ExpirySeverity:
    if days_left <= 0:
        return ExpirySeverity.OVERDUE
    if days_left <= NOTIFICATION_LEAD_DAYS:
        return ExpirySeverity.ALERT
    if days_left <= UPCOMING_WINDOW_DAYS:
        return ExpirySeverity.SOON
    return ExpirySeverity.OK


class StatsService:
    def __init__(self, session: Session):
        self.session = session
        self.customer_service = CustomerService(session)

    def get_dashboard(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        upcoming_limit = today + timedelta(days=UPCOMING_WINDOW_DAYS)
        alert_limit = today + timedelta(days=NOTIFICATION_LEAD_DAYS)

        customers = self.customer_service.list_customers()

        distribution: Dict[str, int] = {}
        for customer in customers:
            distribution[customer.service_type] = distribution.get(customer.service_type, 0) + 1

        return {
            "total_customers": len(customers),
            "upcoming_services": sum(
                1 for c in customers if today <= c.next_service_date <= upcoming_limit
            ),
            "overdue_services": sum(1 for c in customers if c.next_service_date < today),
            "sms_alerts": sum(1 for c in customers if today <= c.next_service_date <= alert_limit),
            "service_type_distribution": [
                {"name": name, "value": count} for name, count in distribution.items()
            ],
        }

    def get_expiry_list(
        self, search: Optional[str] = None, today: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """Customers sorted by days remaining until next service, soonest first."""
        today = today or date.today()
        rows = []
        for customer in self.customer_service.search_customers(search=search):
            days_left = (customer.next_service_date - today).days
            rows.append(
                {
                    "id": customer.id,
                    "name": customer.name,
                    "phone_number": customer.phone_number,
                    "phone_display": format_phone_display(customer.phone_number),
                    "service_type": customer.service_type,
                    "service_date": customer.service_date,
                    "next_service_date": customer.next_service_date,
                    "days_left": days_left,
                    "label": days_left_label(days_left),
                    "severity": expiry_severity(days_left).value,
                }
            )
        rows.sort(key=lambda row: row["days_left"])
        return rows
