# app/services/messages.py
"""SMS bodies. The wording is fixed; external consumers match on it."""
from datetime import date

# Fixed English names; strftime("%B") would follow the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

REMINDER_TEMPLATE = "Hey, Your {service_type} service is scheduled on {next_service_date}"

COMPLETION_TEMPLATE = (
    "Hey, Thank you for choosing {brand}! Service for {service_type} is done "
    "and the next Service date is {next_service_date}. Have a great day!"
)


def format_display_date(value: date) -> str:
    """'Month DD, YYYY', e.g. 'March 05, 2025'."""
    return f"{MONTH_NAMES[value.month - 1]} {value.day:02d}, {value.year}"


def reminder_message(service_type: str, next_service_date: date) -> str:
    return REMINDER_TEMPLATE.format(
        service_type=service_type,
        next_service_date=format_display_date(next_service_date),
    )


def completion_message(brand: str, service_type: str, next_service_date: date) -> str:
    return COMPLETION_TEMPLATE.format(
        brand=brand,
        service_type=service_type,
        next_service_date=format_display_date(next_service_date),
    )
