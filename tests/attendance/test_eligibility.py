from datetime import date, datetime
from decimal import Decimal

import pytest

from src.toil_system.toil_system.attendance.eligibility import EligibilityClassifier
from src.toil_system.toil_system.attendance.model import AttendanceInterval
from src.toil_system.toil_system.core.enums import ToilSource
from src.toil_system.toil_system.core.exceptions import InvalidInterval
from src.toil_system.toil_system.core.policy import ToilPolicy
from src.toil_system.toil_system.holidays.calendar import HolidayCalendar

MONDAY = date(2026, 2, 2)
SATURDAY = date(2026, 2, 7)


def _interval(day: date, start_hour: int, hours: float) -> AttendanceInterval:
    check_in = datetime(day.year, day.month, day.day, start_hour, 0)
    minutes = int(hours * 60)
    check_out = datetime(day.year, day.month, day.day, start_hour + minutes // 60, minutes % 60)
    return AttendanceInterval(
        interval_id=1,
        employee_id=7,
        work_date=day,
        check_in_time=check_in,
        check_out_time=check_out,
    )


def test_short_weekday_shift_is_not_eligible():
    result = EligibilityClassifier().classify(_interval(MONDAY, 9, 7.5), HolidayCalendar())

    assert result.eligible is False
    assert result.hours_earned == 0
    assert result.overtime_hours == 0
    assert result.working_hours == Decimal("7.50")
    assert result.source is None


def test_weekday_overtime_counts_only_the_extra_hours():
    result = EligibilityClassifier().classify(_interval(MONDAY, 8, 8.5), HolidayCalendar())

    assert result.eligible is True
    assert result.hours_earned == Decimal("0.50")
    assert result.overtime_hours == Decimal("0.50")
    assert result.source is ToilSource.OVERTIME
    assert result.note() == "TOIL earned for 0.50 hours overtime"


def test_exactly_standard_hours_is_not_eligible():
    result = EligibilityClassifier().classify(_interval(MONDAY, 8, 8), HolidayCalendar())
    assert result.eligible is False


def test_weekend_shift_counts_in_full():
    result = EligibilityClassifier().classify(_interval(SATURDAY, 9, 6), HolidayCalendar())

    assert result.eligible is True
    assert result.weekend_work is True
    assert result.hours_earned == Decimal("6.00")
    assert result.overtime_hours == 0
    assert result.note() == "TOIL earned for weekend work"


def test_long_weekend_shift_counts_full_shift_not_just_overtime():
    result = EligibilityClassifier().classify(_interval(SATURDAY, 8, 10), HolidayCalendar())

    assert result.hours_earned == Decimal("10.00")
    assert result.overtime_hours == Decimal("2.00")


def test_holiday_shift_counts_in_full():
    cal = HolidayCalendar.from_dates([MONDAY])
    result = EligibilityClassifier().classify(_interval(MONDAY, 9, 4), cal)

    assert result.holiday_work is True
    assert result.weekend_work is False
    assert result.hours_earned == Decimal("4.00")
    assert result.note() == "TOIL earned for holiday work"


def test_policy_changes_standard_day_and_weekend():
    policy = ToilPolicy(standard_hours=Decimal("7"), weekend_days=(4, 5))
    classifier = EligibilityClassifier(policy)

    monday = classifier.classify(_interval(MONDAY, 9, 7.5), HolidayCalendar())
    assert monday.hours_earned == Decimal("0.50")

    # Saturday is still a weekend day, Sunday no longer is.
    sunday = classifier.classify(_interval(date(2026, 2, 8), 9, 6), HolidayCalendar())
    assert sunday.weekend_work is False
    assert sunday.eligible is False


def test_open_interval_is_rejected():
    interval = AttendanceInterval(
        interval_id=1,
        employee_id=7,
        work_date=MONDAY,
        check_in_time=datetime(2026, 2, 2, 9, 0),
    )
    with pytest.raises(InvalidInterval):
        EligibilityClassifier().classify(interval, HolidayCalendar())
