"""Unit tests for schedule projection"""

import pytest
from datetime import date, datetime
from aqsati.domain.schedule import NOT_AVAILABLE, build_schedule, monthly_installment, project_end_date


def test_end_date_simple():
    assert project_end_date("2024-01-01", 12) == "2025-01-01"


def test_end_date_clamps_to_leap_day():
    """Jan 31 + 1 month lands on Feb 29 in 2024"""
    assert project_end_date("2024-01-31", 1) == "2024-02-29"


def test_end_date_clamps_non_leap_year():
    assert project_end_date("2023-01-31", 1) == "2023-02-28"


def test_end_date_accepts_date_objects():
    assert project_end_date(date(2024, 3, 31), 1) == "2024-04-30"
    assert project_end_date(datetime(2024, 3, 15, 22, 45), 2) == "2024-05-15"


@pytest.mark.parametrize(
    "start_date, months",
    [
        ("", 5),
        (None, 5),
        ("   ", 5),
        ("2024-13-45", 5),
        ("garbage", 5),
        ("2024-01-01", float("nan")),
        ("2024-01-01", float("inf")),
        ("2024-01-01", None),
        ("2024-01-01", "abc"),
    ],
)
def test_end_date_not_available(start_date, months):
    assert project_end_date(start_date, months) == NOT_AVAILABLE


def test_end_date_fractional_months_truncate():
    assert project_end_date("2024-01-15", 2.9) == "2024-03-15"


def test_end_date_numeric_string_months():
    assert project_end_date("2024-01-15", "3") == "2024-04-15"


def test_end_date_out_of_range_is_not_available():
    assert project_end_date("9999-06-01", 12) == NOT_AVAILABLE


def test_monthly_installment():
    assert monthly_installment(1200, 12) == 100
    assert monthly_installment(1200, 0) is None


def test_build_schedule_equal_split():
    schedule = build_schedule(1200, 12, "2024-01-01")

    assert len(schedule) == 12
    assert all(item.amount == 100 for item in schedule)
    assert schedule[0].due_date == date(2024, 1, 1)
    assert schedule[-1].due_date == date(2024, 12, 1)


def test_build_schedule_rounding():
    """Last installment absorbs the remainder"""
    schedule = build_schedule(1000, 3, "2024-01-01")

    assert [item.amount for item in schedule] == [333.33, 333.33, 333.34]
    assert round(sum(item.amount for item in schedule), 2) == 1000


def test_build_schedule_month_end_does_not_drift():
    """Each due date is offset from the start, so Jan 31 stays on month ends"""
    schedule = build_schedule(300, 3, "2024-01-31")
    assert [item.due_date for item in schedule] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]


def test_build_schedule_invalid_input():
    assert build_schedule(0, 12, "2024-01-01") == []
    assert build_schedule(1200, 0, "2024-01-01") == []
    assert build_schedule(1200, 12, "bad") == []
