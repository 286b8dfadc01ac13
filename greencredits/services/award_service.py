"""Credit award engine: turns report events into ledger transactions."""

from __future__ import annotations

import logging

from greencredits.catalog import (
    CREDIT_ACTIONS,
    DISPOSAL_CREDITS,
    ActionKind,
    ReportStatus,
)
from greencredits.config import settings
from greencredits.schemas.badge import Badge
from greencredits.schemas.ledger import AwardResult, CreditBreakdownItem, Transaction
from greencredits.schemas.report import Report
from greencredits.services.badge_service import BadgeService
from greencredits.services.common import Store
from greencredits.services.ledger_service import LedgerService, scale_credits
from greencredits.services.quality import score_report
from greencredits.services.streak import next_streak, streak_milestones
from greencredits.utils.time import now_utc

logger = logging.getLogger(__name__)


class AwardService:
    """Apply the credit rules for report submissions and status changes."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self.ledger = LedgerService(store)
        self.badges = BadgeService(store, ledger=self.ledger)

    def award(
        self,
        user_id: str,
        action: ActionKind | str,
        report_id: int | None = None,
        custom_amount: int | None = None,
        description: str | None = None,
    ) -> Transaction | None:
        """Credit one action, scaled by the account multiplier.

        Unknown action kinds are skipped even when a ``custom_amount`` is
        given, because every transaction is recorded under a catalog action.
        Catalog actions without a fixed amount are skipped when no
        ``custom_amount`` is given.
        """
        try:
            action = ActionKind(action)
        except ValueError:
            logger.warning("Skipping award for unknown action %r", action)
            return None

        catalog_entry = CREDIT_ACTIONS[action]
        base = custom_amount if custom_amount is not None else catalog_entry.credits
        if base is None:
            logger.warning("Skipping award for %s: no credit amount configured", action.value)
            return None

        account = self.ledger.ensure_account(user_id)
        return self.ledger.credit(
            user_id,
            scale_credits(base, account.multiplier),
            action,
            description or catalog_entry.description,
            report_id=report_id,
        )

    def grant(
        self,
        user_id: str,
        action: ActionKind | str,
        report_id: int | None = None,
        custom_amount: int | None = None,
        description: str | None = None,
    ) -> AwardResult:
        """Award one action and re-check badges straight away."""
        issued: list[Transaction] = []
        transaction = self.award(
            user_id,
            action,
            report_id=report_id,
            custom_amount=custom_amount,
            description=description,
        )
        new_badges: list[Badge] = []
        if transaction is not None:
            issued.append(transaction)
            new_badges, bonuses = self.badges.evaluate_with_bonuses(user_id)
            issued.extend(bonuses)
        return self._result(user_id, issued, new_badges)

    def _result(
        self,
        user_id: str,
        transactions: list[Transaction],
        new_badges: list[Badge],
        quality_score: int | None = None,
    ) -> AwardResult:
        account = self.ledger.get_account(user_id)
        return AwardResult(
            earned=sum(transaction.credits for transaction in transactions),
            total=account.total_credits,
            available=account.available_credits,
            new_badges=new_badges,
            breakdown=[
                CreditBreakdownItem(
                    action=transaction.action,
                    credits=transaction.credits,
                    description=transaction.description,
                )
                for transaction in transactions
            ],
            quality_score=quality_score,
        )

    def on_report_submitted(self, report: Report) -> AwardResult:
        """Award submission bonuses, update streak and counters, then check badges."""
        user_id = report.user_id
        account = self.ledger.ensure_account(user_id)
        issued: list[Transaction] = []

        def _issue(action: ActionKind) -> None:
            transaction = self.award(user_id, action, report_id=report.id)
            if transaction is not None:
                issued.append(transaction)

        _issue(ActionKind.REPORT_SUBMITTED)
        if report.has_location:
            _issue(ActionKind.REPORT_WITH_GPS)
        if account.report_count == 0:
            _issue(ActionKind.FIRST_REPORT)

        quality_score = score_report(report)
        if quality_score >= settings.quality_bonus_threshold:
            _issue(ActionKind.QUALITY_REPORT)

        now = now_utc()
        streak = next_streak(account.streak, account.last_activity_at, now)
        for milestone in streak_milestones(account.streak, streak):
            _issue(milestone)

        self.ledger.update_stats(
            user_id,
            report_count=account.report_count + 1,
            gps_report_count=account.gps_report_count + (1 if report.has_location else 0),
            streak=streak,
            last_activity_at=now,
        )

        new_badges, bonuses = self.badges.evaluate_with_bonuses(user_id)
        issued.extend(bonuses)

        result = self._result(user_id, issued, new_badges, quality_score=quality_score)
        logger.info(
            "Report %s earned %s credits for user %s (quality=%s, badges=%s)",
            report.id,
            result.earned,
            user_id,
            quality_score,
            [badge.key.value for badge in new_badges],
        )
        return result

    def on_status_transition(
        self,
        report: Report,
        old_status: ReportStatus,
        new_status: ReportStatus,
    ) -> AwardResult:
        """Award verification and resolution bonuses for one real transition.

        Callers must invoke this once per persisted change; re-applying the
        same transition would award again.
        """
        user_id = report.user_id
        if old_status == new_status:
            return self._result(user_id, [], [])

        if old_status == ReportStatus.PENDING and new_status.is_in_progress:
            return self.grant(user_id, ActionKind.REPORT_VERIFIED, report_id=report.id)

        if new_status.is_terminal and not old_status.is_terminal:
            method = report.disposal_method
            if method is None:
                return self.grant(user_id, ActionKind.REPORT_RESOLVED, report_id=report.id)
            return self.grant(
                user_id,
                ActionKind.REPORT_RESOLVED,
                report_id=report.id,
                custom_amount=DISPOSAL_CREDITS[method],
                description=(
                    f"{CREDIT_ACTIONS[ActionKind.REPORT_RESOLVED].description} ({method.value})"
                ),
            )

        return self._result(user_id, [], [])
