"""Credit ledger: balances plus the append-only transaction log."""

from __future__ import annotations

import logging
import math
from typing import Any

from greencredits.catalog import ActionKind
from greencredits.schemas.ledger import LedgerAccount, Transaction
from greencredits.services.common import Store
from greencredits.utils.errors import InsufficientBalanceError, InvalidAmountError, InvalidInputError
from greencredits.utils.time import now_utc

logger = logging.getLogger(__name__)

ACCOUNTS_TABLE = "credit_accounts"
TRANSACTIONS_TABLE = "credit_transactions"

STAT_FIELDS = frozenset({"report_count", "gps_report_count", "streak", "last_activity_at"})


def scale_credits(base: int, multiplier: float) -> int:
    """Apply an account multiplier to a base award, rounding down."""
    return math.floor(base * multiplier)


def _validate_amount(amount: Any, allow_zero: bool) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(amount)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise InvalidAmountError(amount)
    return amount


class LedgerService:
    """Create and query credit accounts and their transactions.

    Every mutation builds the new account row and the transaction row before
    writing either, so a rejected call leaves the ledger untouched. The account
    and transaction are separate store writes with no rollback between them;
    the account is written first so a failed balance write logs nothing.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    def _load(self, user_id: str) -> LedgerAccount | None:
        row = self.store.get(ACCOUNTS_TABLE, user_id)
        return LedgerAccount.model_validate(row) if row else None

    def _save(self, account: LedgerAccount) -> LedgerAccount:
        row = self.store.put(ACCOUNTS_TABLE, account.model_dump(mode="json"))
        return LedgerAccount.model_validate(row)

    def _build_transaction(
        self,
        user_id: str,
        action: ActionKind,
        credits: int,
        description: str,
        report_id: int | None = None,
        reward_id: str | None = None,
    ) -> Transaction:
        return Transaction(
            id=self.store.next_id(TRANSACTIONS_TABLE),
            user_id=user_id,
            action=action,
            credits=credits,
            description=description,
            report_id=report_id,
            reward_id=reward_id,
            timestamp=now_utc(),
        )

    def _commit(self, account: LedgerAccount, transaction: Transaction) -> None:
        # Account before transaction.
        self._save(account)
        self.store.put(TRANSACTIONS_TABLE, transaction.model_dump(mode="json"))

    def ensure_account(self, user_id: str) -> LedgerAccount:
        """Create a zeroed account if absent, otherwise return the existing one."""
        account = self._load(user_id)
        if account is not None:
            return account
        return self._save(LedgerAccount(id=str(user_id)))

    def get_account(self, user_id: str) -> LedgerAccount:
        """Return the account, or an unsaved zero account when the user has none."""
        return self._load(user_id) or LedgerAccount(id=str(user_id))

    def list_accounts(self) -> list[LedgerAccount]:
        """Return every account row for projections and scheduled jobs."""
        return [LedgerAccount.model_validate(row) for row in self.store.scan(ACCOUNTS_TABLE)]

    def credit(
        self,
        user_id: str,
        amount: int,
        action: ActionKind,
        description: str,
        report_id: int | None = None,
    ) -> Transaction | None:
        """Add ``amount`` to total and available credits and log it.

        A zero amount is a no-op and returns ``None``.
        """
        amount = _validate_amount(amount, allow_zero=True)
        if amount == 0:
            return None

        account = self.ensure_account(user_id)
        updated = account.model_copy(
            update={
                "total_credits": account.total_credits + amount,
                "available_credits": account.available_credits + amount,
            }
        )
        transaction = self._build_transaction(
            user_id, action, amount, description, report_id=report_id
        )
        self._commit(updated, transaction)
        logger.info(
            "Credited %s to user %s for %s (total=%s)",
            amount,
            user_id,
            action.value,
            updated.total_credits,
        )
        return transaction

    def debit(self, user_id: str, amount: int, reward_id: str) -> Transaction:
        """Redeem ``amount`` credits against a reward.

        Raises:
            InvalidAmountError: when ``amount`` is not a positive integer.
            InsufficientBalanceError: when ``amount`` exceeds available credits.
        """
        amount = _validate_amount(amount, allow_zero=False)
        account = self.ensure_account(user_id)
        if amount > account.available_credits:
            raise InsufficientBalanceError(required=amount, available=account.available_credits)

        updated = account.model_copy(
            update={
                "available_credits": account.available_credits - amount,
                "redeemed": account.redeemed + amount,
            }
        )
        transaction = self._build_transaction(
            user_id,
            ActionKind.REDEMPTION,
            -amount,
            f"Redeemed for reward: {reward_id}",
            reward_id=reward_id,
        )
        self._commit(updated, transaction)
        logger.info("User %s redeemed %s credits for %s", user_id, amount, reward_id)
        return transaction

    def update_stats(self, user_id: str, **fields: Any) -> LedgerAccount:
        """Update activity counters; balance fields can only move via credit/debit."""
        unknown = set(fields) - STAT_FIELDS
        if unknown:
            raise ValueError(f"Not an account stat field: {', '.join(sorted(unknown))}")

        account = self.ensure_account(user_id)
        return self._save(account.model_copy(update=fields))

    def set_multiplier(self, user_id: str, multiplier: float) -> LedgerAccount:
        """Change the factor every future award for this user is scaled by."""
        if not math.isfinite(multiplier) or multiplier < 0:
            raise InvalidInputError("Multiplier must be a finite number, zero or greater")
        account = self.ensure_account(user_id)
        return self._save(account.model_copy(update={"multiplier": float(multiplier)}))

    def list_transactions(
        self,
        user_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Transaction], int]:
        """Return transactions newest first with total count for pagination."""
        rows = self.store.scan(
            TRANSACTIONS_TABLE,
            filters={"user_id": user_id},
            order_by="id",
            descending=True,
            limit=limit,
            offset=offset,
        )
        total = self.store.count(TRANSACTIONS_TABLE, {"user_id": user_id})
        return [Transaction.model_validate(row) for row in rows], total
