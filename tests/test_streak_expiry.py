"""Streak expiry job tests."""

from __future__ import annotations

from datetime import timedelta

from greencredits.jobs.streak_expiry import expire_streaks
from greencredits.services.common import MemoryStore
from greencredits.services.ledger_service import LedgerService
from greencredits.utils.time import now_utc


def test_expire_streaks_resets_only_stale_accounts(store: MemoryStore) -> None:
    """Accounts idle past the reset window lose their streak."""
    ledger = LedgerService(store)
    now = now_utc()
    ledger.update_stats("stale", streak=12, last_activity_at=now - timedelta(hours=72))
    ledger.update_stats("fresh", streak=4, last_activity_at=now - timedelta(hours=20))
    ledger.update_stats("idle", streak=0, last_activity_at=now - timedelta(days=9))

    assert expire_streaks(store) == 1

    assert ledger.get_account("stale").streak == 0
    assert ledger.get_account("fresh").streak == 4
    assert ledger.get_account("idle").streak == 0
