# app/services/recurrence.py
"""
Next-service-date arithmetic.

Months and years use calendar arithmetic (relativedelta): the day of month is
kept and clamped to the last day of a shorter target month, so Jan 31 + 1 month
is Feb 28/29 and Feb 29 + 1 year is Feb 28 in a non-leap year.
"""
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ..core.constants import DurationUnit

DATE_FORMAT = "%Y-%m-%d"


def next_service_date(base_date: date, duration: int, unit: DurationUnit | str) -> date:
    """
    Return base_date + duration expressed in unit.

    Raises:
        ValueError: duration < 1, unknown unit, or a result past year 9999.
    """
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
        raise ValueError(f"service_duration must be a positive integer, got {duration!r}")

    try:
        unit = DurationUnit(unit)
    except ValueError:
        raise ValueError(f"Unknown service_duration_unit: {unit!r}")

    try:
        if unit is DurationUnit.DAYS:
            return base_date + timedelta(days=duration)
        if unit is DurationUnit.MONTHS:
            return base_date + relativedelta(months=duration)
        return base_date + relativedelta(years=duration)
    except OverflowError:
        raise ValueError(
            f"service_duration {duration} {unit.value} is out of the supported date range"
        )


def format_date(value: date) -> str:
    """Storage/interchange format: YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    return date.fromisoformat(value)
