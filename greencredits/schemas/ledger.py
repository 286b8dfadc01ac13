"""Ledger schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from greencredits.catalog import ActionKind
from greencredits.schemas.badge import Badge


class LedgerAccount(BaseModel):
    """Per-user credit balances and activity counters."""

    id: str
    total_credits: int = 0
    available_credits: int = 0
    redeemed: int = 0
    report_count: int = 0
    gps_report_count: int = 0
    streak: int = 0
    last_activity_at: datetime | None = None
    multiplier: float = 1.0

    @property
    def user_id(self) -> str:
        return self.id


class Transaction(BaseModel):
    """A single immutable ledger entry."""

    id: int
    user_id: str
    action: ActionKind
    credits: int
    description: str
    report_id: int | None = None
    reward_id: str | None = None
    timestamp: datetime


class CreditBreakdownItem(BaseModel):
    """One line of the per-event award breakdown."""

    action: ActionKind
    credits: int
    description: str


class AwardResult(BaseModel):
    """Outcome of feeding one domain event through the award engine."""

    earned: int = 0
    total: int = 0
    available: int = 0
    new_badges: list[Badge] = Field(default_factory=list)
    breakdown: list[CreditBreakdownItem] = Field(default_factory=list)
    quality_score: int | None = None


class RedeemRequest(BaseModel):
    """Request body for redeeming credits against a reward."""

    reward_id: str = Field(..., min_length=1)
    credits: int = Field(..., gt=0)


class MultiplierRequest(BaseModel):
    """Request body for changing a user's award multiplier."""

    multiplier: float = Field(..., ge=0, allow_inf_nan=False)
