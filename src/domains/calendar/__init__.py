"""Calendar arithmetic: age breakdowns, anniversaries, countdowns, milestones."""

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
    to_local,
)
from src.domains.calendar.milestones import (
    InvalidMilestoneError,
    add_milestone,
    birthday_year_progress,
    default_milestones,
    milestone_progress,
    milestone_title,
    parse_milestone_input,
    remove_milestone,
)

__all__ = [
    "AgeBreakdown",
    "InvalidRangeError",
    "InvalidMilestoneError",
    "compute_age_breakdown",
    "days_in_month",
    "format_date",
    "get_days_until",
    "get_formatted_duration_until",
    "get_last_birthday",
    "get_milestone_birthday",
    "get_next_birthday",
    "shift_year",
    "start_of_day",
    "to_local",
    "add_milestone",
    "birthday_year_progress",
    "default_milestones",
    "milestone_progress",
    "milestone_title",
    "parse_milestone_input",
    "remove_milestone",
]
