from datetime import date

import pytest

from app.core.constants import DurationUnit
from app.services.recurrence import format_date, next_service_date


def test_days_are_added_as_calendar_days() -> None:
    assert next_service_date(date(2024, 2, 25), 5, "days") == date(2024, 3, 1)
    assert next_service_date(date(2023, 12, 30), 3, DurationUnit.DAYS) == date(2024, 1, 2)


def test_month_end_clamps_to_shorter_month() -> None:
    assert next_service_date(date(2024, 1, 31), 1, "months") == date(2024, 2, 29)
    assert next_service_date(date(2023, 1, 31), 1, "months") == date(2023, 2, 28)
    assert next_service_date(date(2024, 3, 31), 1, "months") == date(2024, 4, 30)


def test_months_roll_over_year() -> None:
    assert next_service_date(date(2024, 11, 15), 3, "months") == date(2025, 2, 15)


def test_leap_day_plus_year_clamps_to_feb_28() -> None:
    assert next_service_date(date(2024, 2, 29), 1, "years") == date(2025, 2, 28)
    assert next_service_date(date(2024, 2, 29), 4, "years") == date(2028, 2, 29)


def test_is_deterministic() -> None:
    first = next_service_date(date(2024, 5, 31), 1, "months")
    second = next_service_date(date(2024, 5, 31), 1, "months")
    assert first == second == date(2024, 6, 30)


@pytest.mark.parametrize("duration", [0, -1, 1.5, True])
def test_rejects_non_positive_or_non_integer_duration(duration) -> None:
    with pytest.raises(ValueError):
        next_service_date(date(2024, 1, 1), duration, "days")


def test_rejects_unknown_unit() -> None:
    with pytest.raises(ValueError):
        next_service_date(date(2024, 1, 1), 1, "weeks")


def test_storage_format() -> None:
    assert format_date(date(2025, 3, 5)) == "2025-03-05"


@pytest.mark.parametrize(
    "duration, unit",
    [(10**7, "days"), (10**10, "days"), (10**6, "months"), (10**5, "years")],
)
def test_out_of_range_result_is_a_value_error(duration, unit) -> None:
    with pytest.raises(ValueError):
        next_service_date(date(2024, 1, 1), duration, unit)
