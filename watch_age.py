#!/usr/bin/env python3
"""
Console host for the life tracker.

Prints the live age breakdown and birthday countdowns for the saved profile
(or the default one) on a fixed schedule until interrupted.

Usage:
    python watch_age.py            # tick every second until Ctrl+C
    python watch_age.py --once     # print a single snapshot
    python watch_age.py --interval 5 --ticks 3
"""

import argparse
import sys
from datetime import datetime

from src.domains.calendar import InvalidRangeError
from src.infrastructure.storage.profile_store import JsonProfileStore, load_profile_or_default
from src.services.dashboard import DashboardSnapshot, build_dashboard
from src.services.refresh import RefreshSchedule, Ticker, age_timer_schedule
from src.utils.config import load_config, log_level
from src.utils.logger import get_logger, setup_logger


def format_snapshot(snap: DashboardSnapshot) -> str:
    """Plain-text rendering of one tick."""
    a = snap.age
    lines = [
        f"{snap.profile.name}: {a.years}y {a.months}m {a.days}d "
        f"{a.hours:02d}:{a.minutes:02d}:{a.seconds:02d}",
        f"  Last birthday: {snap.last_birthday.date_label} (turned {snap.last_birthday.age})",
        f"  Next birthday: {snap.next_birthday.date_label} "
        f"(turning {snap.next_birthday.age}, {snap.next_birthday.countdown}, "
        f"{snap.next_birthday.progress:.1f}% of the year)",
    ]
    for card in snap.milestones:
        lines.append(f"  {card.title}: {card.date_label} ({card.countdown}, {card.progress:.1f}%)")
    return "\n".join(lines)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print a live age breakdown.")
    p.add_argument("--once", action="store_true", help="Print one snapshot and exit.")
    p.add_argument("--interval", type=float, default=None, help="Seconds between ticks.")
    p.add_argument("--ticks", type=int, default=None, help="Stop after this many ticks.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_config()
    setup_logger("life_tracker", level=log_level())
    log = get_logger()
    args = parse_args(argv)

    store = JsonProfileStore()
    profile = load_profile_or_default(store)
    milestones = store.load_milestones()

    def tick(now: datetime) -> None:
        print(format_snapshot(build_dashboard(profile, milestones, now=now)), flush=True)

    if args.once:
        try:
            tick(datetime.now())
        except InvalidRangeError as e:
            print(f"[X] {e}", file=sys.stderr)
            return 1
        return 0

    schedule = RefreshSchedule(args.interval) if args.interval else age_timer_schedule()
    handle = Ticker(schedule).start(tick, max_ticks=args.ticks)
    try:
        while not handle.wait(timeout=0.5):
            pass
    except KeyboardInterrupt:
        log.info("Interrupted, stopping ticker")
    finally:
        handle.cancel()
    return 0


if __name__ == "__main__":
    sys.exit(main())
