"""Service package exports with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "AwardService": "greencredits.services.award_service",
    "BadgeService": "greencredits.services.badge_service",
    "LeaderboardService": "greencredits.services.leaderboard_service",
    "LedgerService": "greencredits.services.ledger_service",
    "MemoryStore": "greencredits.services.common",
    "ReportService": "greencredits.services.report_service",
    "Store": "greencredits.services.common",
    "SupabaseStore": "greencredits.services.common",
    "UserService": "greencredits.services.user_service",
    "score_report": "greencredits.services.quality",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
