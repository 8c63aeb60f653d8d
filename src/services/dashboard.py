"""
Per-tick view model for the tracker: the age breakdown plus the last/next
birthday and milestone cards, computed from a profile and a reference instant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from src.domains.calendar import (
    AgeBreakdown,
    birthday_year_progress,
    compute_age_breakdown,
    days_in_month,
    format_date,
    get_formatted_duration_until,
    get_last_birthday,
    get_milestone_birthday,
    get_next_birthday,
    milestone_progress,
    milestone_title,
)
from src.domains.calendar.date_engine import resolve_now
from src.infrastructure.storage.profile_store import Profile
from src.utils.logger import get_logger

logger = get_logger()

_DATE_FORMAT = "%Y-%m-%d"
_TIME_FORMATS = ("%H:%M", "%H:%M:%S")


class InvalidBirthInputError(ValueError):
    """Raised when onboarding input does not describe a usable birth instant."""


@dataclass(frozen=True)
class BirthdayCardModel:
    title: str
    date: datetime
    date_label: str
    age: int
    progress: float
    countdown: str | None = None
    theme: str = "teal"


@dataclass(frozen=True)
class DashboardSnapshot:
    profile: Profile
    now: datetime
    age: AgeBreakdown
    days_in_current_month: int
    last_birthday: BirthdayCardModel
    next_birthday: BirthdayCardModel
    milestones: list[BirthdayCardModel] = field(default_factory=list)


def parse_birth_input(date_text: str, time_text: str = "00:00", now: datetime | None = None) -> datetime:
    """
    Combine onboarding form fields into a birth instant.

    Raises:
        InvalidBirthInputError: If either field is malformed or the instant is in the future.
    """
    date_raw = (date_text or "").strip()
    time_raw = (time_text or "").strip() or "00:00"
    try:
        day = datetime.strptime(date_raw, _DATE_FORMAT)
    except ValueError:
        raise InvalidBirthInputError(f"Please enter a valid date (YYYY-MM-DD), got {date_raw!r}") from None
    clock = None
    for fmt in _TIME_FORMATS:
        try:
            clock = datetime.strptime(time_raw, fmt).time()
            break
        except ValueError:
            continue
    if clock is None:
        raise InvalidBirthInputError(f"Please enter a valid time (HH:MM), got {time_raw!r}")
    birth = datetime.combine(day.date(), clock)
    if birth > resolve_now(now):
        raise InvalidBirthInputError("Birth date and time cannot be in the future")
    return birth


def build_milestone_card(profile: Profile, age: int, now: datetime) -> BirthdayCardModel:
    when = get_milestone_birthday(profile.birth, age)
    return BirthdayCardModel(
        title=milestone_title(age),
        date=when,
        date_label=format_date(when),
        age=age,
        progress=milestone_progress(profile.birth, when, now=now),
        countdown=get_formatted_duration_until(when, now=now),
        theme="indigo",
    )


def build_dashboard(profile: Profile, milestones: list[int], now: datetime | None = None) -> DashboardSnapshot:
    """
    Evaluate everything shown for one tick.

    Raises:
        InvalidRangeError: If now is earlier than the profile's birth instant.
    """
    current = resolve_now(now)
    birth = profile.birth
    age = compute_age_breakdown(birth, current)

    last = get_last_birthday(birth, now=current)
    nxt = get_next_birthday(birth, now=current)

    last_card = BirthdayCardModel(
        title="Last Birthday",
        date=last,
        date_label=format_date(last),
        age=last.year - birth.year,
        progress=100.0,
        theme="blue",
    )
    next_card = BirthdayCardModel(
        title="Next Birthday",
        date=nxt,
        date_label=format_date(nxt),
        age=nxt.year - birth.year,
        progress=birthday_year_progress(birth, now=current),
        countdown=get_formatted_duration_until(nxt, now=current),
        theme="orange",
    )
    cards = [build_milestone_card(profile, m, current) for m in sorted(milestones)]
    logger.debug("Dashboard built for %s with %d milestones", profile.name, len(cards))
    return DashboardSnapshot(
        profile=profile,
        now=current,
        age=age,
        days_in_current_month=days_in_month(current.year, current.month),
        last_birthday=last_card,
        next_birthday=next_card,
        milestones=cards,
    )
