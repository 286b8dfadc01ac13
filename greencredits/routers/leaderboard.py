"""Leaderboard endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from greencredits.dependencies import get_store
from greencredits.schemas.leaderboard import LeaderboardResponse
from greencredits.services.common import Store
from greencredits.services.leaderboard_service import LeaderboardService

router = APIRouter()


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(store: Store = Depends(get_store)) -> dict:
    """Return the top contributors by lifetime credits."""
    return {"leaderboard": LeaderboardService(store).rank()}
