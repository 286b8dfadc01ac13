"""API router package."""

from greencredits.routers import admin, badges, credits, leaderboard, reports

__all__ = [
    "admin",
    "badges",
    "credits",
    "leaderboard",
    "reports",
]
