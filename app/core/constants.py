"""
Centralized constants for the reminder tracker.
Replaces magic strings with typed values shared by models, services and API.
"""

from enum import Enum, unique

# Days before next_service_date on which the reminder SMS is due.
NOTIFICATION_LEAD_DAYS = 5

# Dashboard "upcoming services" horizon.
UPCOMING_WINDOW_DAYS = 30

DEFAULT_CHECK_INTERVAL_SECONDS = 3600

PHONE_NUMBER_PATTERN = r"^\d{10}$"

DEFAULT_SERVICE_TYPES = ("Solar", "Water Filter", "UPS")


@unique
class DurationUnit(str, Enum):
    """Units accepted for the recurrence interval."""

    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"


@unique
class ExpirySeverity(str, Enum):
    """Buckets used by the expiry checker."""

    OVERDUE = "overdue"
    ALERT = "alert"
    SOON = "soon"
    OK = "ok"


@unique
class SettingKeys(str, Enum):
    """Keys stored in the settings table."""

    COMPANY_NAME = "company_name"
    CHECK_INTERVAL = "reminder_check_interval"
    LEAD_DAYS = "notification_lead_days"
    TWILIO_ACCOUNT_SID = "twilio_account_sid"
    TWILIO_AUTH_TOKEN = "twilio_auth_token"
    TWILIO_PHONE_NUMBER = "twilio_phone_number"
    DEFAULT_COUNTRY_CODE = "default_country_code"
