"""Ledger service tests."""

from __future__ import annotations

import pytest

from greencredits.catalog import ActionKind
from greencredits.schemas.ledger import LedgerAccount
from greencredits.services.common import MemoryStore
from greencredits.services.ledger_service import ACCOUNTS_TABLE, LedgerService, scale_credits
from greencredits.utils.errors import InsufficientBalanceError, InvalidAmountError, InvalidInputError


def _assert_balanced(account: LedgerAccount) -> None:
    assert account.available_credits == account.total_credits - account.redeemed
    assert 0 <= account.redeemed <= account.total_credits


def test_ensure_account_is_idempotent(store: MemoryStore) -> None:
    """A second call returns the existing account instead of resetting it."""
    ledger = LedgerService(store)
    created = ledger.ensure_account("u1")
    assert created.total_credits == 0
    assert created.multiplier == 1.0

    ledger.credit("u1", 40, ActionKind.REPORT_SUBMITTED, "Report submitted")
    again = ledger.ensure_account("u1")
    assert again.total_credits == 40


def test_credit_updates_balances_and_logs_transaction(store: MemoryStore) -> None:
    """Credits raise total and available together and append one transaction."""
    ledger = LedgerService(store)
    transaction = ledger.credit("u1", 25, ActionKind.FIRST_REPORT, "First report", report_id=7)

    assert transaction is not None
    assert transaction.credits == 25
    assert transaction.report_id == 7
    account = ledger.get_account("u1")
    assert account.total_credits == 25
    assert account.available_credits == 25
    _assert_balanced(account)

    transactions, total = ledger.list_transactions("u1")
    assert total == 1
    assert transactions[0].id == transaction.id


def test_credit_zero_is_noop(store: MemoryStore) -> None:
    """Zero-credit awards change nothing and write no transaction."""
    ledger = LedgerService(store)
    assert ledger.credit("u1", 0, ActionKind.REPORT_SUBMITTED, "nothing") is None
    assert ledger.list_transactions("u1") == ([], 0)


@pytest.mark.parametrize("amount", [-5, 2.5, True, "10"])
def test_credit_rejects_invalid_amounts(store: MemoryStore, amount: object) -> None:
    """Negative and non-integer amounts are programmer errors."""
    ledger = LedgerService(store)
    with pytest.raises(InvalidAmountError):
        ledger.credit("u1", amount, ActionKind.REPORT_SUBMITTED, "bad")  # type: ignore[arg-type]
    assert ledger.get_account("u1").total_credits == 0
    assert ledger.list_transactions("u1")[1] == 0


def test_debit_records_negative_redemption(store: MemoryStore) -> None:
    """Redemptions move credits from available to redeemed."""
    ledger = LedgerService(store)
    ledger.credit("u1", 100, ActionKind.REPORT_RESOLVED, "Resolved")

    transaction = ledger.debit("u1", 60, reward_id="bus-pass")

    assert transaction.action == ActionKind.REDEMPTION
    assert transaction.credits == -60
    assert transaction.reward_id == "bus-pass"
    assert transaction.description == "Redeemed for reward: bus-pass"
    account = ledger.get_account("u1")
    assert account.total_credits == 100
    assert account.available_credits == 40
    assert account.redeemed == 60
    _assert_balanced(account)


def test_debit_beyond_available_leaves_ledger_unchanged(store: MemoryStore) -> None:
    """Overdrawing fails and does not touch balances or history."""
    ledger = LedgerService(store)
    ledger.credit("u1", 30, ActionKind.REPORT_SUBMITTED, "Report")
    before = ledger.get_account("u1")

    with pytest.raises(InsufficientBalanceError) as exc_info:
        ledger.debit("u1", 31, reward_id="tote-bag")

    assert exc_info.value.code == "INSUFFICIENT_BALANCE"
    assert exc_info.value.available == 30
    assert ledger.get_account("u1") == before
    assert ledger.list_transactions("u1")[1] == 1


@pytest.mark.parametrize("amount", [0, -1])
def test_debit_requires_positive_amount(store: MemoryStore, amount: int) -> None:
    """Zero and negative redemptions are rejected."""
    ledger = LedgerService(store)
    ledger.credit("u1", 10, ActionKind.REPORT_SUBMITTED, "Report")
    with pytest.raises(InvalidAmountError):
        ledger.debit("u1", amount, reward_id="x")
    assert ledger.get_account("u1").available_credits == 10


def test_balance_invariant_over_mixed_sequence(store: MemoryStore) -> None:
    """available == total - redeemed after every operation."""
    ledger = LedgerService(store)
    operations = [("credit", 10), ("credit", 25), ("debit", 20), ("credit", 5), ("debit", 20)]
    for kind, amount in operations:
        if kind == "credit":
            ledger.credit("u1", amount, ActionKind.REPORT_SUBMITTED, "Report")
        else:
            ledger.debit("u1", amount, reward_id="r")
        _assert_balanced(ledger.get_account("u1"))

    account = ledger.get_account("u1")
    assert (account.total_credits, account.available_credits, account.redeemed) == (40, 0, 40)


def test_update_stats_rejects_balance_fields(store: MemoryStore) -> None:
    """Balances only move through credit and debit."""
    ledger = LedgerService(store)
    with pytest.raises(ValueError):
        ledger.update_stats("u1", total_credits=1000)

    updated = ledger.update_stats("u1", report_count=3, streak=2)
    assert updated.report_count == 3
    assert updated.streak == 2


def test_set_multiplier(store: MemoryStore) -> None:
    """Multipliers must not be negative."""
    ledger = LedgerService(store)
    assert ledger.set_multiplier("u1", 1.5).multiplier == 1.5
    with pytest.raises(InvalidInputError):
        ledger.set_multiplier("u1", -0.5)


@pytest.mark.parametrize("multiplier", [float("inf"), float("nan")])
def test_set_multiplier_rejects_non_finite(store: MemoryStore, multiplier: float) -> None:
    """Infinite or NaN multipliers would break every later award."""
    ledger = LedgerService(store)
    with pytest.raises(InvalidInputError):
        ledger.set_multiplier("u1", multiplier)
    assert ledger.get_account("u1").multiplier == 1.0


def test_transactions_are_listed_newest_first(store: MemoryStore) -> None:
    """History pages newest first with a stable total."""
    ledger = LedgerService(store)
    for amount in (1, 2, 3):
        ledger.credit("u1", amount, ActionKind.REPORT_SUBMITTED, "Report")
    ledger.credit("u2", 9, ActionKind.REPORT_SUBMITTED, "Report")

    page, total = ledger.list_transactions("u1", limit=2)
    assert total == 3
    assert [transaction.credits for transaction in page] == [3, 2]


def test_scale_credits_rounds_down() -> None:
    """Multiplied awards are floored."""
    assert scale_credits(25, 1.5) == 37
    assert scale_credits(10, 1.0) == 10
    assert scale_credits(50, 0) == 0


class _AccountWriteFailingStore(MemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.fail_accounts = False

    def put(self, table: str, row: dict) -> dict:
        if self.fail_accounts and table == ACCOUNTS_TABLE:
            raise InvalidInputError("account write failed")
        return super().put(table, row)


def test_failed_account_write_logs_no_transaction() -> None:
    """A credit whose balance write fails leaves no transaction behind."""
    store = _AccountWriteFailingStore()
    ledger = LedgerService(store)
    ledger.ensure_account("u1")

    store.fail_accounts = True
    with pytest.raises(InvalidInputError):
        ledger.credit("u1", 10, ActionKind.REPORT_SUBMITTED, "Report submitted")

    assert ledger.list_transactions("u1") == ([], 0)
    assert ledger.get_account("u1").total_credits == 0
