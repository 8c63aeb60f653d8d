"""
Tests for the calendar arithmetic engine: age breakdown, anniversaries,
milestone dates, date formatting and countdown strings.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.domains.calendar.date_engine import (
    AgeBreakdown,
    InvalidRangeError,
    compute_age_breakdown,
    days_in_month,
    format_date,
    get_days_until,
    get_formatted_duration_until,
    get_last_birthday,
    get_milestone_birthday,
    get_next_birthday,
    shift_year,
    start_of_day,
)

BIRTH = datetime(1998, 10, 25, 5, 30)
LEAP_BIRTH = datetime(2000, 2, 29, 12, 0)


def test_age_breakdown_concrete_case() -> None:
    """2000-01-01 to 2024-03-15T10:30:45 has no borrows."""
    age = compute_age_breakdown(datetime(2000, 1, 1), datetime(2024, 3, 15, 10, 30, 45))
    assert age == AgeBreakdown(years=24, months=2, days=14, hours=10, minutes=30, seconds=45)


def test_age_breakdown_cascading_borrow() -> None:
    """Minutes, hours, days and months all borrow; day borrow uses February 2024 (29 days)."""
    age = compute_age_breakdown(BIRTH, datetime(2024, 3, 10, 2, 15, 10))
    assert age == AgeBreakdown(years=25, months=4, days=13, hours=20, minutes=45, seconds=10)


def test_age_breakdown_seconds_borrow() -> None:
    age = compute_age_breakdown(datetime(2020, 5, 5, 10, 10, 50), datetime(2020, 5, 5, 10, 11, 5))
    assert age == AgeBreakdown(0, 0, 0, 0, 0, 15)


def test_age_breakdown_january_borrows_from_december() -> None:
    age = compute_age_breakdown(datetime(2019, 12, 20), datetime(2021, 1, 5))
    assert age == AgeBreakdown(years=1, months=0, days=16, hours=0, minutes=0, seconds=0)


def test_age_breakdown_same_instant_is_zero() -> None:
    assert compute_age_breakdown(BIRTH, BIRTH) == AgeBreakdown(0, 0, 0, 0, 0, 0)


def test_age_breakdown_ranges() -> None:
    """Sub-year fields stay in their natural ranges over a spread of reference instants."""
    ref = datetime(2024, 1, 1, 0, 0, 0)
    for step in range(0, 400, 7):
        r = ref + timedelta(days=step, hours=step % 24, minutes=step % 60, seconds=(step * 7) % 60)
        age = compute_age_breakdown(BIRTH, r)
        assert age.years >= 0
        assert 0 <= age.months <= 11
        assert 0 <= age.days <= 30
        assert 0 <= age.hours <= 23
        assert 0 <= age.minutes <= 59
        assert 0 <= age.seconds <= 59


def test_age_breakdown_month_end_birth_keeps_single_borrow() -> None:
    """The day borrow uses the month before the reference month once, so days can go negative."""
    age = compute_age_breakdown(datetime(1998, 1, 31), datetime(2024, 3, 1))
    assert age == AgeBreakdown(years=26, months=1, days=-1, hours=0, minutes=0, seconds=0)


def _add_breakdown(birth: datetime, age: AgeBreakdown) -> datetime | None:
    """birth + years + months on the calendar, then the rest as elapsed time.

    None when the birth day does not exist in the landing month.
    """
    total_months = birth.month - 1 + age.years * 12 + age.months
    year, month = birth.year + total_months // 12, total_months % 12 + 1
    if birth.day > days_in_month(year, month):
        return None
    landed = birth.replace(year=year, month=month)
    return landed + timedelta(days=age.days, hours=age.hours, minutes=age.minutes, seconds=age.seconds)


def test_age_breakdown_adds_back_to_reference() -> None:
    """Birth plus the breakdown gives the reference whenever the landing day exists."""
    births = [
        datetime(1998, month, day, 5, 30, 20)
        for month in (1, 3, 5, 8, 12)
        for day in (1, 15, 28, 29, 30, 31)
    ]
    start = datetime(2024, 1, 1)
    refs = [
        start + timedelta(days=step, hours=step % 24, minutes=(step * 7) % 60, seconds=(step * 13) % 60)
        for step in range(0, 800, 3)
    ]
    month_end_checked = 0
    for birth in births:
        for ref in refs:
            age = compute_age_breakdown(birth, ref)
            rebuilt = _add_breakdown(birth, age)
            if rebuilt is None:
                continue
            assert age.days >= 0
            assert rebuilt == ref, (birth, ref, age)
            if birth.day >= 29:
                month_end_checked += 1
    assert month_end_checked > 0


def test_age_breakdown_rejects_reference_before_birth() -> None:
    with pytest.raises(InvalidRangeError, match="earlier than birth"):
        compute_age_breakdown(BIRTH, BIRTH - timedelta(seconds=1))
    assert issubclass(InvalidRangeError, ValueError)


def test_age_breakdown_accepts_aware_datetimes() -> None:
    """Aware instants are compared in local wall time."""
    birth = datetime(2000, 1, 1, tzinfo=timezone.utc)
    age = compute_age_breakdown(birth, birth + timedelta(hours=5))
    assert age == AgeBreakdown(0, 0, 0, 5, 0, 0)


def test_age_breakdown_to_dict() -> None:
    age = compute_age_breakdown(datetime(2000, 1, 1), datetime(2024, 3, 15, 10, 30, 45))
    assert age.to_dict() == {"years": 24, "months": 2, "days": 14, "hours": 10, "minutes": 30, "seconds": 45}


def test_next_birthday_today_before_birth_time() -> None:
    """At 00:00 on the birthday the 05:30 anniversary has not passed yet."""
    now = datetime(2024, 10, 25, 0, 0, 0)
    assert get_next_birthday(BIRTH, now=now) == datetime(2024, 10, 25)
    assert get_last_birthday(BIRTH, now=now) == datetime(2023, 10, 25)


def test_next_birthday_today_after_birth_time() -> None:
    now = datetime(2024, 10, 25, 6, 0, 0)
    assert get_next_birthday(BIRTH, now=now) == datetime(2025, 10, 25)
    assert get_last_birthday(BIRTH, now=now) == datetime(2024, 10, 25)


def test_birthdays_mid_year() -> None:
    now = datetime(2024, 3, 1, 12, 0)
    nxt = get_next_birthday(BIRTH, now=now)
    last = get_last_birthday(BIRTH, now=now)
    assert nxt == datetime(2024, 10, 25)
    assert last == datetime(2023, 10, 25)
    assert last <= start_of_day(now) <= nxt
    assert (nxt.month, nxt.day) == (BIRTH.month, BIRTH.day)
    assert nxt.hour == nxt.minute == nxt.second == 0


def test_leap_day_birthdays_roll_to_march_first() -> None:
    now = datetime(2023, 6, 1)
    assert get_next_birthday(LEAP_BIRTH, now=now) == datetime(2024, 2, 29)
    assert get_last_birthday(LEAP_BIRTH, now=now) == datetime(2023, 3, 1)

    before = datetime(2023, 2, 28, 10, 0)
    assert get_next_birthday(LEAP_BIRTH, now=before) == datetime(2023, 3, 1)
    assert get_last_birthday(LEAP_BIRTH, now=before) == datetime(2022, 3, 1)


def test_milestone_birthday() -> None:
    assert get_milestone_birthday(BIRTH, 30) == datetime(2028, 10, 25)
    assert get_milestone_birthday(BIRTH, 0) == datetime(1998, 10, 25)
    assert get_milestone_birthday(BIRTH, -2) == datetime(1996, 10, 25)
    assert get_milestone_birthday(BIRTH, 30).year == BIRTH.year + 30


def test_milestone_birthday_leap_day_rolls_forward() -> None:
    """Feb 29 + 5 years lands on Mar 1 2005; + 4 years stays on Feb 29."""
    assert get_milestone_birthday(datetime(2000, 2, 29), 5) == datetime(2005, 3, 1)
    assert get_milestone_birthday(datetime(2000, 2, 29), 4) == datetime(2004, 2, 29)


def test_shift_year_keeps_time() -> None:
    assert shift_year(BIRTH, 2030) == datetime(2030, 10, 25, 5, 30)
    assert shift_year(LEAP_BIRTH, 2001) == datetime(2001, 3, 1, 12, 0)


def test_days_in_month() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 12) == 31


def test_format_date() -> None:
    assert format_date(datetime(2025, 1, 7)) == "Tuesday, January 7, 2025"
    assert format_date(BIRTH) == "Sunday, October 25, 1998"


def test_format_date_is_deterministic() -> None:
    d = datetime(2024, 2, 29, 23, 59, 59)
    assert format_date(d) == format_date(d) == "Thursday, February 29, 2024"


def test_duration_passed_and_today() -> None:
    now = datetime(2024, 10, 25, 15, 0)
    assert get_formatted_duration_until(datetime(2024, 10, 24, 23, 59), now=now) == "Passed"
    assert get_formatted_duration_until(datetime(2000, 1, 1), now=now) == "Passed"
    assert get_formatted_duration_until(datetime(2024, 10, 25, 1, 0), now=now) == "Today"


def test_duration_round_trip_next_birthday_is_today() -> None:
    now = datetime(2024, 10, 25, 0, 0, 0)
    target = get_next_birthday(datetime(1998, 10, 25), now=now)
    assert get_formatted_duration_until(target, now=now) == "Today"


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (datetime(2024, 3, 16), "1 Day"),
        (datetime(2024, 3, 25), "10 Days"),
        (datetime(2025, 3, 15), "1 Year"),
        (datetime(2026, 3, 20), "2 Years, 5 Days"),
        (datetime(2025, 3, 16), "1 Year, 1 Day"),
        (datetime(2025, 3, 14), "364 Days"),
    ],
)
def test_duration_years_and_days(target: datetime, expected: str) -> None:
    now = datetime(2024, 3, 15, 10, 0)
    assert get_formatted_duration_until(target, now=now) == expected


def test_duration_ignores_time_of_day() -> None:
    now = datetime(2024, 3, 15, 23, 59)
    assert get_formatted_duration_until(datetime(2024, 3, 16, 0, 1), now=now) == "1 Day"


def test_duration_from_leap_day() -> None:
    now = datetime(2024, 2, 29, 9, 0)
    assert get_formatted_duration_until(datetime(2025, 2, 28), now=now) == "365 Days"
    assert get_formatted_duration_until(datetime(2025, 3, 1), now=now) == "1 Year"


def test_days_until() -> None:
    now = datetime(2024, 3, 15, 12, 0)
    assert get_days_until(datetime(2024, 3, 16), now=now) == 1
    assert get_days_until(datetime(2024, 3, 18, 12, 0), now=now) == 3
    assert get_days_until(now, now=now) == 0
    assert get_days_until(datetime(2024, 3, 1), now=now) == 0


def test_start_of_day() -> None:
    assert start_of_day(datetime(2024, 3, 15, 10, 30, 45, 123)) == datetime(2024, 3, 15)
