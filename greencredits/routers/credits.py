"""Credit balance, history and redemption endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from greencredits.dependencies import Identity, get_current_user, get_store
from greencredits.schemas.ledger import RedeemRequest
from greencredits.services.badge_service import BadgeService
from greencredits.services.common import Store
from greencredits.services.ledger_service import LedgerService

router = APIRouter()


@router.get("")
def get_credits(
    user: Identity = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> dict:
    """Return the caller's balances, badges and closest next badges."""
    ledger = LedgerService(store)
    badges = BadgeService(store, ledger=ledger)
    account = ledger.ensure_account(user.id)
    return {
        "credits": account.model_dump(exclude={"id"}),
        "badges": badges.list_badges(user.id),
        "next_badges": badges.next_available(user.id),
    }


@router.get("/history")
def get_history(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    user: Identity = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> dict:
    """Return the caller's transactions newest first."""
    transactions, total = LedgerService(store).list_transactions(
        user_id=user.id, limit=limit, offset=offset
    )
    return {"transactions": transactions, "total": total}


@router.post("/redeem")
def redeem_credits(
    payload: RedeemRequest,
    user: Identity = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> dict:
    """Spend available credits on a reward."""
    ledger = LedgerService(store)
    transaction = ledger.debit(user.id, payload.credits, reward_id=payload.reward_id)
    remaining = ledger.get_account(user.id).available_credits
    return {"redeemed": True, "remaining": remaining, "transaction": transaction}
