"""Leaderboard schemas."""

from pydantic import BaseModel, Field

from greencredits.schemas.badge import Badge
from greencredits.schemas.user import UserResponse


class LeaderboardEntry(BaseModel):
    """Single entry in the credits leaderboard."""

    rank: int
    user: UserResponse | None = None
    total_credits: int
    report_count: int
    badge_count: int
    badges: list[Badge] = Field(default_factory=list)
    last_active: str


class LeaderboardResponse(BaseModel):
    """Top contributors ordered by lifetime credits."""

    leaderboard: list[LeaderboardEntry]
