"""
Calendar arithmetic for age breakdowns and birthday countdowns.

All functions are pure: they read the birth instant and a reference instant
("now", injectable for tests) and return fresh values. Instants are naive
datetimes in the host's local calendar; aware datetimes are converted to local
wall time first.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

_SECONDS_PER_DAY = 24 * 60 * 60

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class InvalidRangeError(ValueError):
    """Raised when the reference instant precedes the birth instant."""


@dataclass(frozen=True)
class AgeBreakdown:
    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def to_local(instant: datetime) -> datetime:
    """Local wall time as a naive datetime."""
    if instant.tzinfo is not None:
        return instant.astimezone().replace(tzinfo=None)
    return instant


def resolve_now(now: datetime | None) -> datetime:
    return to_local(now) if now is not None else datetime.now()


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given calendar month."""
    return calendar.monthrange(year, month)[1]


def start_of_day(instant: datetime) -> datetime:
    """Truncate time-of-day to 00:00:00, keeping the calendar date."""
    return to_local(instant).replace(hour=0, minute=0, second=0, microsecond=0)


def shift_year(instant: datetime, year: int) -> datetime:
    """
    Move an instant to another year, keeping month, day and time.

    Feb 29 in a non-leap target year overflows to Mar 1.
    """
    if instant.month == 2 and instant.day == 29 and not calendar.isleap(year):
        return instant.replace(year=year, month=3, day=1)
    return instant.replace(year=year)


def compute_age_breakdown(birth: datetime, reference: datetime | None = None) -> AgeBreakdown:
    """
    Elapsed calendar time from birth to reference.

    Fields are subtracted independently and negative fields borrow from the
    next larger unit once, seconds first and years last. A day borrow adds the
    length of the month before the reference month.

    Raises:
        InvalidRangeError: If reference is earlier than birth.
    """
    birth = to_local(birth)
    ref = resolve_now(reference)
    if ref < birth:
        raise InvalidRangeError(
            f"Reference {ref.isoformat()} is earlier than birth {birth.isoformat()}"
        )

    years = ref.year - birth.year
    months = ref.month - birth.month
    days = ref.day - birth.day
    hours = ref.hour - birth.hour
    minutes = ref.minute - birth.minute
    seconds = ref.second - birth.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        prev_year, prev_month = (ref.year - 1, 12) if ref.month == 1 else (ref.year, ref.month - 1)
        days += days_in_month(prev_year, prev_month)
        months -= 1
    if months < 0:
        months += 12
        years -= 1

    return AgeBreakdown(years, months, days, hours, minutes, seconds)


def get_next_birthday(birth: datetime, now: datetime | None = None) -> datetime:
    """Next occurrence of the birth month/day (today counts if not yet passed)."""
    current = resolve_now(now)
    anniversary = shift_year(to_local(birth), current.year)
    if anniversary < current:
        anniversary = shift_year(to_local(birth), current.year + 1)
    return start_of_day(anniversary)


def get_last_birthday(birth: datetime, now: datetime | None = None) -> datetime:
    """Most recent occurrence of the birth month/day."""
    current = resolve_now(now)
    anniversary = shift_year(to_local(birth), current.year)
    if anniversary > current:
        anniversary = shift_year(to_local(birth), current.year - 1)
    return start_of_day(anniversary)


def get_milestone_birthday(birth: datetime, age_in_years: int) -> datetime:
    """Birthday on which the person turns age_in_years. No bounds checking."""
    birth = to_local(birth)
    return start_of_day(shift_year(birth, birth.year + age_in_years))


def format_date(instant: datetime) -> str:
    """Long date, e.g. 'Tuesday, January 7, 2025'."""
    d = to_local(instant)
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}, {d.year}"


def get_days_until(target: datetime, now: datetime | None = None) -> int:
    """Whole days until target, rounded up. 0 once the target has passed."""
    diff = (to_local(target) - resolve_now(now)).total_seconds()
    if diff < 0:
        return 0
    return math.ceil(diff / _SECONDS_PER_DAY)


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def get_formatted_duration_until(target: datetime, now: datetime | None = None) -> str:
    """
    Whole years and residual days from today until target's date.

    Returns "Passed" for a date before today and "Today" when nothing remains.
    """
    start = start_of_day(resolve_now(now))
    end = start_of_day(target)

    if end < start:
        return "Passed"

    years = end.year - start.year
    anniversary = shift_year(start, start.year + years)
    if anniversary > end:
        years -= 1
        anniversary = shift_year(start, start.year + years)

    days = round((end - anniversary).total_seconds() / _SECONDS_PER_DAY)

    parts: list[str] = []
    if years > 0:
        parts.append(_plural(years, "Year"))
    if days > 0:
        parts.append(_plural(days, "Day"))

    if not parts:
        return "Today"
    return ", ".join(parts)
