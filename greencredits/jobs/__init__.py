"""Background job modules for periodic GreenCredits tasks."""

from greencredits.jobs.streak_expiry import expire_streaks, streak_expiry

__all__ = [
    "expire_streaks",
    "streak_expiry",
]
