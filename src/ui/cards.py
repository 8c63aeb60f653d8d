"""Streamlit UI helpers for the age timer and birthday cards."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

import streamlit as st

from src.domains.calendar import AgeBreakdown, format_date
from src.services.dashboard import BirthdayCardModel

# Hex accents for the seven card themes.
THEME_COLORS: dict[str, str] = {
    "teal": "#14b8a6",
    "orange": "#f97316",
    "purple": "#a855f7",
    "blue": "#3b82f6",
    "rose": "#f43f5e",
    "indigo": "#6366f1",
    "lime": "#65a30d",
}

_RING_RADIUS = 45
_TRACK_COLOR = "#f1f5f9"


def theme_color(theme: str) -> str:
    """Accent color for a theme name; unknown names fall back to teal."""
    return THEME_COLORS.get((theme or "").lower(), THEME_COLORS["teal"])


def pad_unit(value: int) -> str:
    return str(value).rjust(2, "0")


def ring_fraction(value: float, max_value: float) -> float:
    """Filled share of a progress ring, in [0, 1]."""
    if max_value <= 0:
        return 0.0
    return min(max(value / max_value, 0.0), 1.0)


def ring_svg(value: int, max_value: int, label: str, theme: str, stroke_width: int = 8) -> str:
    """Circular progress indicator with the zero-padded value in the middle."""
    circumference = 2 * math.pi * _RING_RADIUS
    offset = circumference - ring_fraction(value, max_value) * circumference
    color = theme_color(theme)
    return (
        f'<div style="position:relative;width:100%;max-width:120px;margin:auto;">'
        f'<svg viewBox="0 0 100 100" style="transform:rotate(-90deg);width:100%;">'
        f'<circle cx="50" cy="50" r="{_RING_RADIUS}" stroke="{_TRACK_COLOR}" '
        f'stroke-width="{stroke_width}" fill="transparent"/>'
        f'<circle cx="50" cy="50" r="{_RING_RADIUS}" stroke="{color}" stroke-width="{stroke_width}" '
        f'fill="transparent" stroke-dasharray="{circumference:.2f}" '
        f'stroke-dashoffset="{offset:.2f}" stroke-linecap="round"/>'
        f"</svg>"
        f'<div style="position:absolute;inset:0;display:flex;flex-direction:column;'
        f'align-items:center;justify-content:center;">'
        f'<span style="font-family:monospace;font-weight:700;font-size:1.1rem;">{pad_unit(value)}</span>'
        f'<span style="font-size:0.6rem;font-weight:700;letter-spacing:0.1em;'
        f'text-transform:uppercase;color:{color};">{label}</span>'
        f"</div></div>"
    )


def age_units(age: AgeBreakdown, days_in_current_month: int) -> list[tuple[int, int, str, str]]:
    """(value, ring max, label, theme) for each sub-year unit of the live counter."""
    return [
        (age.months, 12, "Months", "blue"),
        (age.days, days_in_current_month, "Days", "purple"),
        (age.hours, 24, "Hours", "rose"),
        (age.minutes, 60, "Mins", "orange"),
        (age.seconds, 60, "Secs", "lime"),
    ]


def render_age_timer(
    age: AgeBreakdown,
    days_in_current_month: int,
    now: datetime | None = None,
    st_ref: Any = st,
) -> None:
    """Present date, years as a headline metric, then one ring per smaller unit."""
    if now is not None:
        st_ref.caption(f"Present Date: {format_date(now)}")
    st_ref.metric("Years", age.years)
    cols = st_ref.columns(5)
    for col, (value, max_value, label, theme) in zip(cols, age_units(age, days_in_current_month)):
        with col:
            st_ref.markdown(ring_svg(value, max_value, label, theme, stroke_width=10), unsafe_allow_html=True)


def render_birthday_card(
    card: BirthdayCardModel,
    st_ref: Any = st,
    remove_key: str | None = None,
) -> bool:
    """
    Render one birthday/milestone card.

    Returns True when the card's remove button was clicked (only shown when
    remove_key is given).
    """
    removed = False
    with st_ref.container(border=True):
        head, side = st_ref.columns([4, 1])
        with head:
            st_ref.markdown(
                f'<span style="color:{theme_color(card.theme)};font-weight:700;">{card.title}</span>',
                unsafe_allow_html=True,
            )
            st_ref.markdown(f"**{card.date_label}**")
            st_ref.caption(f"🎂 Turning {card.age}")
        with side:
            if remove_key is not None:
                removed = bool(st_ref.button("🗑️", key=remove_key, help="Remove milestone"))
        st_ref.progress(ring_fraction(card.progress, 100))
        if card.countdown is not None:
            st_ref.caption(f"⏳ {card.countdown}")
    return removed


def render_insight(text: str, st_ref: Any = st) -> None:
    st_ref.info(f"✨ {text}")


def render_profile_header(name: str, birth_label: str, st_ref: Any = st) -> None:
    st_ref.title(f"{name}'s Life Tracker")
    st_ref.caption(f"📅 Born {birth_label}")
