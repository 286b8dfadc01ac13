"""Badge unlock evaluation and progress projection."""

from __future__ import annotations

import logging

from greencredits.catalog import (
    BADGE_CATALOG,
    CREDIT_ACTIONS,
    ActionKind,
    BadgeDefinition,
    BadgeKey,
)
from greencredits.schemas.badge import Badge, BadgeProgress
from greencredits.schemas.ledger import Transaction
from greencredits.services.common import Store
from greencredits.services.ledger_service import LedgerService, scale_credits
from greencredits.utils.time import now_utc

logger = logging.getLogger(__name__)

BADGES_TABLE = "user_badges"

_CATALOG_ORDER = {definition.key: index for index, definition in enumerate(BADGE_CATALOG)}


class BadgeService:
    """Grant catalog badges once their thresholds are crossed."""

    def __init__(self, store: Store, ledger: LedgerService | None = None) -> None:
        self.store = store
        self.ledger = ledger or LedgerService(store)

    def list_badges(self, user_id: str) -> list[Badge]:
        """Return the user's badges in the order they were earned."""
        rows = self.store.scan(BADGES_TABLE, filters={"user_id": user_id}, order_by="earned_at")
        return [Badge.model_validate(row) for row in rows]

    def owned_keys(self, user_id: str) -> set[BadgeKey]:
        return {badge.key for badge in self.list_badges(user_id)}

    def _grant(self, user_id: str, definition: BadgeDefinition) -> Badge:
        badge = Badge(
            id=f"{user_id}:{definition.key.value}",
            user_id=user_id,
            key=definition.key,
            name=definition.name,
            icon=definition.icon,
            description=definition.description,
            earned_at=now_utc(),
        )
        self.store.put(BADGES_TABLE, badge.model_dump(mode="json"))
        logger.info("User %s unlocked badge %s", user_id, definition.key.value)
        return badge

    def _award_bonus(self, user_id: str, definition: BadgeDefinition) -> Transaction | None:
        account = self.ledger.get_account(user_id)
        base = CREDIT_ACTIONS[ActionKind.BADGE_BONUS].credits or 0
        return self.ledger.credit(
            user_id,
            scale_credits(base, account.multiplier),
            ActionKind.BADGE_BONUS,
            f"Badge unlocked: {definition.name}",
        )

    def evaluate_with_bonuses(self, user_id: str) -> tuple[list[Badge], list[Transaction]]:
        """Unlock every badge the account now qualifies for.

        Badge bonuses can push the account over further thresholds, so the
        catalog is re-scanned until a pass unlocks nothing. Each pass unlocks
        at least one new badge, which bounds the loop by the catalog size.
        Ownership is checked before the threshold so a badge is never granted
        twice.
        """
        owned = self.owned_keys(user_id)
        unlocked: list[Badge] = []
        bonuses: list[Transaction] = []

        for _ in range(len(BADGE_CATALOG) + 1):
            unlocked_in_pass = False
            for definition in BADGE_CATALOG:
                if definition.key in owned:
                    continue
                if not definition.is_unlocked_by(self.ledger.get_account(user_id)):
                    continue

                unlocked.append(self._grant(user_id, definition))
                owned.add(definition.key)
                unlocked_in_pass = True

                bonus = self._award_bonus(user_id, definition)
                if bonus is not None:
                    bonuses.append(bonus)

            if not unlocked_in_pass:
                break

        unlocked.sort(key=lambda badge: _CATALOG_ORDER[badge.key])
        return unlocked, bonuses

    def evaluate(self, user_id: str) -> list[Badge]:
        """Return only the badges unlocked by this call, in catalog order."""
        badges, _ = self.evaluate_with_bonuses(user_id)
        return badges

    def next_available(self, user_id: str, limit: int = 3) -> list[BadgeProgress]:
        """Return the unearned badges closest to completion."""
        account = self.ledger.get_account(user_id)
        owned = self.owned_keys(user_id)

        candidates: list[BadgeProgress] = []
        for definition in BADGE_CATALOG:
            if definition.key in owned:
                continue
            progress = definition.progress(account)
            if progress >= definition.threshold:
                continue
            candidates.append(
                BadgeProgress(
                    key=definition.key,
                    name=definition.name,
                    icon=definition.icon,
                    description=definition.description,
                    metric=definition.metric,
                    progress=progress,
                    target=definition.threshold,
                    percentage=min(100.0, progress / definition.threshold * 100),
                )
            )

        candidates.sort(key=lambda item: item.percentage, reverse=True)
        return candidates[:limit]
