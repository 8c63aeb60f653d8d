"""
Life Tracker: Streamlit UI entry point.
"""

from datetime import date, datetime, time

import streamlit as st

# Load .env first so settings below see it
from src.utils.config import load_config, insight_enabled, log_level, profile_persist
load_config()

from src.domains.calendar import (
    InvalidMilestoneError,
    InvalidRangeError,
    add_milestone,
    compute_age_breakdown,
    default_milestones,
    format_date,
    parse_milestone_input,
    remove_milestone,
)
from src.infrastructure.storage.profile_store import (
    Profile,
    load_profile_or_default,
    make_profile_store,
)
from src.orchestration.insight_client import make_insight_provider
from src.services.dashboard import InvalidBirthInputError, build_dashboard, parse_birth_input
from src.services.refresh import age_timer_schedule, countdown_schedule
from src.ui.cards import (
    render_age_timer,
    render_birthday_card,
    render_insight,
    render_profile_header,
)
from src.utils.logger import get_logger, setup_logger

setup_logger("life_tracker", level=log_level())
log = get_logger()

st.set_page_config(page_title="Life Tracker", layout="wide")


@st.cache_resource
def _json_profile_store():
    return make_profile_store(persist=True)


def get_profile_store():
    if profile_persist():
        return _json_profile_store()
    # Per browser session; cache_resource would share it between users.
    if "profile_store" not in st.session_state:
        st.session_state.profile_store = make_profile_store(persist=False)
    return st.session_state.profile_store


@st.cache_resource
def get_insight_provider():
    return make_insight_provider(insight_enabled())


store = get_profile_store()

if "profile" not in st.session_state:
    st.session_state.profile = load_profile_or_default(store)
if "milestones" not in st.session_state:
    st.session_state.milestones = store.load_milestones()
if "insight" not in st.session_state:
    st.session_state.insight = None


def _set_milestones(milestones: list[int]) -> None:
    st.session_state.milestones = milestones
    store.save_milestones(milestones)


def _render_onboarding() -> None:
    st.title("Life Tracker")
    st.caption("Enter your details to start tracking every second of your life.")
    with st.form("onboarding"):
        name = st.text_input("Your name", placeholder="Sumon Hossain")
        birth_day = st.date_input("Date of birth", value=None, min_value=date(1970, 1, 1), max_value=date.today())
        birth_time = st.time_input("Time of birth", value=time(0, 0))
        submitted = st.form_submit_button("Get Started", type="primary", use_container_width=True)
    if not submitted:
        return
    if not name.strip() or birth_day is None:
        st.warning("Please enter your name and date of birth.")
        return
    try:
        birth = parse_birth_input(birth_day.isoformat(), birth_time.strftime("%H:%M"))
    except InvalidBirthInputError as e:
        st.error(str(e))
        return
    profile = Profile(name=name.strip(), birth=birth)
    store.clear()
    store.save(profile)
    st.session_state.profile = profile
    st.session_state.milestones = []
    st.session_state.insight = None
    log.info("Onboarded profile for %s", profile.name)
    st.rerun()


profile = st.session_state.profile
if profile is None:
    _render_onboarding()
    st.stop()

if not st.session_state.milestones:
    _set_milestones(default_milestones(profile.birth))

with st.sidebar:
    st.header("Settings")
    st.caption(f"Profile: **{profile.name}**")
    if st.button("✨ Get age insight", use_container_width=True):
        try:
            age_now = compute_age_breakdown(profile.birth)
        except InvalidRangeError as e:
            st.error(str(e))
        else:
            with st.spinner("Thinking…"):
                st.session_state.insight = get_insight_provider().fetch_insight(age_now.years, age_now.months)
    st.divider()
    if st.button("Reset profile", key="reset_profile", use_container_width=True):
        store.clear()
        st.session_state.profile = None
        st.session_state.milestones = []
        st.session_state.insight = None
        log.info("Profile reset")
        st.rerun()

render_profile_header(profile.name, format_date(profile.birth))


@st.fragment(run_every=age_timer_schedule().interval_seconds)
def live_age() -> None:
    try:
        snap = build_dashboard(profile, [])
    except InvalidRangeError as e:
        st.error(f"Birth date is in the future: {e}")
        return
    st.subheader("⏱️ Your Age")
    render_age_timer(snap.age, snap.days_in_current_month, now=snap.now)


@st.fragment(run_every=countdown_schedule().interval_seconds)
def birthday_cards() -> None:
    try:
        snap = build_dashboard(profile, st.session_state.milestones)
    except InvalidRangeError:
        return
    st.subheader("🎂 Birthdays")
    left, right = st.columns(2)
    with left:
        render_birthday_card(snap.last_birthday)
    with right:
        render_birthday_card(snap.next_birthday)

    st.subheader("🏁 Milestones")
    for card in snap.milestones:
        if render_birthday_card(card, remove_key=f"remove_milestone_{card.age}"):
            _set_milestones(remove_milestone(st.session_state.milestones, card.age))
            st.rerun()


col_age, col_cards = st.columns([1, 1])
with col_age:
    live_age()
    if st.session_state.insight:
        render_insight(st.session_state.insight)
with col_cards:
    birthday_cards()
    with st.form("add_milestone", clear_on_submit=True):
        raw_age = st.text_input("Add milestone age", placeholder="e.g. 40")
        if st.form_submit_button("Add Milestone", use_container_width=True):
            try:
                _set_milestones(add_milestone(st.session_state.milestones, parse_milestone_input(raw_age)))
                st.rerun()
            except InvalidMilestoneError as e:
                st.warning(str(e))

log.debug("Rendered dashboard at %s", datetime.now().isoformat(timespec="seconds"))
