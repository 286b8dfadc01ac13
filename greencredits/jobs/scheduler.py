"""APScheduler setup and job registration."""

from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from greencredits.config import settings
from greencredits.jobs.streak_expiry import streak_expiry

scheduler = AsyncIOScheduler(timezone=settings.timezone)


def register_jobs() -> None:
    """Register all periodic jobs if not already present."""
    if scheduler.get_job("streak_expiry") is None:
        scheduler.add_job(
            streak_expiry,
            CronTrigger(minute=5, timezone=settings.timezone),
            id="streak_expiry",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
