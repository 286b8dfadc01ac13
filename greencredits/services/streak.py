"""Daily activity streak rules."""

from __future__ import annotations

from datetime import datetime, timedelta

from greencredits.catalog import MONTHLY_STREAK_DAYS, WEEKLY_STREAK_DAYS, ActionKind
from greencredits.utils.time import parse_timestamp


def next_streak(streak: int, last_activity_at: str | datetime | None, now: datetime) -> int:
    """Return the streak after activity at ``now``.

    Consecutive UTC calendar days extend the streak, repeat activity on the
    same day keeps it, and any gap starts over at one.
    """
    last = parse_timestamp(last_activity_at)
    if last is None or streak <= 0:
        return 1

    gap_days = (now.date() - last.date()).days
    if gap_days <= 0:
        return streak
    if gap_days == 1:
        return streak + 1
    return 1


def streak_milestones(previous: int, current: int) -> list[ActionKind]:
    """Return streak awards earned by moving from ``previous`` to ``current``."""
    if current <= previous:
        return []

    milestones: list[ActionKind] = []
    if current % WEEKLY_STREAK_DAYS == 0:
        milestones.append(ActionKind.WEEKLY_STREAK)
    if current % MONTHLY_STREAK_DAYS == 0:
        milestones.append(ActionKind.MONTHLY_STREAK)
    return milestones


def is_streak_expired(
    last_activity_at: str | datetime | None,
    now: datetime,
    reset_after_hours: int,
) -> bool:
    """Return True when the last activity is older than the reset window."""
    last = parse_timestamp(last_activity_at)
    if last is None:
        return True
    return now - last > timedelta(hours=reset_after_hours)
