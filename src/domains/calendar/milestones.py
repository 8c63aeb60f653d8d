"""
Milestone ages: defaults for a new profile, list edits, and progress figures
shown on the birthday cards.
"""

from __future__ import annotations

from datetime import datetime

from src.domains.calendar.date_engine import (
    to_local,
    resolve_now,
    get_last_birthday,
    get_next_birthday,
)

# Milestones are suggested on multiples of this step.
_MILESTONE_STEP = 5
_HALF_CENTURY = 50


class InvalidMilestoneError(ValueError):
    """Raised for non-positive, non-numeric or duplicate milestone ages."""


def default_milestones(birth: datetime, now: datetime | None = None) -> list[int]:
    """
    Suggested milestones for a fresh profile.

    The age at the next birthday rounded up to a multiple of 5, the one ten
    years after it, and 50 while it is still ahead.
    """
    next_age = get_next_birthday(birth, now=now).year - to_local(birth).year
    first = max(next_age, 1)
    while first % _MILESTONE_STEP != 0:
        first += 1
    out = [first, first + 10]
    if next_age <= _HALF_CENTURY and _HALF_CENTURY not in out:
        out.append(_HALF_CENTURY)
    return sorted(out)


def parse_milestone_input(text: str) -> int:
    raw = (text or "").strip()
    try:
        age = int(raw)
    except ValueError:
        raise InvalidMilestoneError(f"Milestone age must be a whole number, got {raw!r}") from None
    return age


def add_milestone(milestones: list[int], age: int) -> list[int]:
    """Return a new sorted list with age added."""
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidMilestoneError(f"Milestone age must be an integer, got {age!r}")
    if age <= 0:
        raise InvalidMilestoneError(f"Milestone age must be positive, got {age}")
    if age in milestones:
        raise InvalidMilestoneError(f"Milestone {age} already exists")
    return sorted([*milestones, age])


def remove_milestone(milestones: list[int], age: int) -> list[int]:
    return [m for m in milestones if m != age]


def birthday_year_progress(birth: datetime, now: datetime | None = None) -> float:
    """Percent of the current birthday year that has elapsed, clamped to [0, 100]."""
    current = resolve_now(now)
    last = get_last_birthday(birth, now=current)
    nxt = get_next_birthday(birth, now=current)
    total = (nxt - last).total_seconds()
    if total <= 0:
        return 0.0
    return min(100.0, max(0.0, (current - last).total_seconds() / total * 100))


def milestone_progress(birth: datetime, milestone_date: datetime, now: datetime | None = None) -> float:
    """Percent of life elapsed toward a milestone, clamped to [0, 100]."""
    birth = to_local(birth)
    total = (to_local(milestone_date) - birth).total_seconds()
    if total <= 0:
        return 100.0
    elapsed = (resolve_now(now) - birth).total_seconds()
    return min(100.0, max(0.0, elapsed / total * 100))


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def milestone_title(age: int) -> str:
    return f"{ordinal(age)} Birthday"
