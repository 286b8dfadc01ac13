"""Hourly streak expiry scheduled job."""

from __future__ import annotations

import logging

from greencredits.config import settings
from greencredits.dependencies import get_store
from greencredits.services.common import Store
from greencredits.services.ledger_service import LedgerService
from greencredits.services.streak import is_streak_expired
from greencredits.utils.time import now_utc

logger = logging.getLogger(__name__)


def expire_streaks(store: Store) -> int:
    """Zero every streak whose last activity fell outside the reset window."""
    ledger = LedgerService(store)
    now = now_utc()

    expired = 0
    for account in ledger.list_accounts():
        if account.streak <= 0:
            continue
        if is_streak_expired(account.last_activity_at, now, settings.streak_reset_hours):
            ledger.update_stats(account.id, streak=0)
            expired += 1
    return expired


async def streak_expiry() -> None:
    """Reset streaks of users inactive for longer than ``STREAK_RESET_HOURS``."""
    expired = expire_streaks(get_store())
    logger.info("streak_expiry completed, %s streaks reset", expired)
