"""Credits leaderboard projection."""

from __future__ import annotations

from typing import Any

from greencredits.config import settings
from greencredits.schemas.badge import Badge
from greencredits.services.badge_service import BADGES_TABLE
from greencredits.services.common import Store, group_by
from greencredits.services.ledger_service import LedgerService
from greencredits.services.user_service import UserService
from greencredits.utils.time import humanize_relative_time


class LeaderboardService:
    """Rank users by lifetime credits; recomputed on every read."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self.ledger = LedgerService(store)
        self.users = UserService(store)

    def rank(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Return the top accounts by total credits with their badges."""
        size = limit if limit is not None else settings.leaderboard_size
        accounts = self.ledger.list_accounts()
        users = self.users.get_users_map(account.id for account in accounts)
        badges_by_user = group_by(self.store.scan(BADGES_TABLE, order_by="earned_at"), "user_id")

        entries: list[dict[str, Any]] = []
        for account in accounts:
            user = users.get(account.id)
            badges = [Badge.model_validate(row) for row in badges_by_user.get(account.id, [])]
            entries.append(
                {
                    "user": user,
                    "total_credits": account.total_credits,
                    "report_count": account.report_count,
                    "badge_count": len(badges),
                    "badges": badges,
                    "last_active": humanize_relative_time(account.last_activity_at),
                    "rank": 0,
                }
            )

        entries.sort(
            key=lambda row: (
                -int(row["total_credits"]),
                -int(row["report_count"]),
                row["user"].name if row.get("user") else "",
            )
        )
        entries = entries[: max(0, size)]
        for index, entry in enumerate(entries, start=1):
            entry["rank"] = index
        return entries
