"""Static credit-action and badge catalogs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActionKind(str, Enum):
    """Every reason a transaction can be written to the ledger."""

    REPORT_SUBMITTED = "REPORT_SUBMITTED"
    REPORT_WITH_GPS = "REPORT_WITH_GPS"
    FIRST_REPORT = "FIRST_REPORT"
    REPORT_VERIFIED = "REPORT_VERIFIED"
    REPORT_RESOLVED = "REPORT_RESOLVED"
    QUALITY_REPORT = "QUALITY_REPORT"
    WEEKLY_STREAK = "WEEKLY_STREAK"
    MONTHLY_STREAK = "MONTHLY_STREAK"
    BADGE_BONUS = "BADGE_BONUS"
    REDEMPTION = "REDEMPTION"


@dataclass(frozen=True)
class CreditAction:
    credits: int | None
    description: str


CREDIT_ACTIONS: dict[ActionKind, CreditAction] = {
    ActionKind.REPORT_SUBMITTED: CreditAction(10, "Report submitted with photo"),
    ActionKind.REPORT_WITH_GPS: CreditAction(5, "GPS location provided"),
    ActionKind.FIRST_REPORT: CreditAction(25, "First environmental report"),
    ActionKind.REPORT_VERIFIED: CreditAction(15, "Report verified by municipality"),
    ActionKind.REPORT_RESOLVED: CreditAction(20, "Reported issue resolved"),
    ActionKind.QUALITY_REPORT: CreditAction(25, "High-quality detailed report"),
    ActionKind.WEEKLY_STREAK: CreditAction(30, "Active for 7 consecutive days"),
    ActionKind.MONTHLY_STREAK: CreditAction(100, "Active for 30 consecutive days"),
    ActionKind.BADGE_BONUS: CreditAction(50, "Badge unlocked"),
    # Redemptions go through LedgerService.debit and carry their own amount.
    ActionKind.REDEMPTION: CreditAction(None, "Credits redeemed"),
}

WEEKLY_STREAK_DAYS = 7
MONTHLY_STREAK_DAYS = 30


class ReportStatus(str, Enum):
    """Lifecycle of a waste report."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COLLECTED = "Collected"
    SORTED = "Sorted"
    PROCESSED = "Processed"
    RESOLVED = "Resolved"
    DISPOSED = "Disposed"

    @property
    def is_in_progress(self) -> bool:
        return self in IN_PROGRESS_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


IN_PROGRESS_STATUSES = frozenset(
    {
        ReportStatus.IN_PROGRESS,
        ReportStatus.COLLECTED,
        ReportStatus.SORTED,
        ReportStatus.PROCESSED,
    }
)
TERMINAL_STATUSES = frozenset({ReportStatus.RESOLVED, ReportStatus.DISPOSED})


class DisposalMethod(str, Enum):
    """How collected waste was finally handled."""

    RECYCLED = "recycled"
    COMPOSTED = "composted"
    INCINERATED = "incinerated"
    LANDFILLED = "landfilled"


DISPOSAL_CREDITS: dict[DisposalMethod, int] = {
    DisposalMethod.RECYCLED: 25,
    DisposalMethod.COMPOSTED: 20,
    DisposalMethod.INCINERATED: 10,
    DisposalMethod.LANDFILLED: 5,
}


class BadgeMetric(str, Enum):
    """Ledger account counter a badge threshold is measured against."""

    CREDITS = "total_credits"
    REPORTS = "report_count"
    GPS_REPORTS = "gps_report_count"
    STREAK = "streak"


class BadgeKey(str, Enum):
    ECO_WARRIOR = "ECO_WARRIOR"
    WASTE_HUNTER = "WASTE_HUNTER"
    GPS_MASTER = "GPS_MASTER"
    CITY_GUARDIAN = "CITY_GUARDIAN"
    GREEN_CHAMPION = "GREEN_CHAMPION"
    STREAK_MASTER = "STREAK_MASTER"


@dataclass(frozen=True)
class BadgeDefinition:
    """A catalog badge and the single threshold that unlocks it."""

    key: BadgeKey
    metric: BadgeMetric
    threshold: int
    name: str
    icon: str
    description: str

    def progress(self, account: object) -> int:
        """Return the account's current value for this badge's metric."""
        return int(getattr(account, self.metric.value))

    def is_unlocked_by(self, account: object) -> bool:
        return self.progress(account) >= self.threshold


# Evaluation and display order.
BADGE_CATALOG: tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        BadgeKey.ECO_WARRIOR,
        BadgeMetric.CREDITS,
        100,
        "Eco Warrior",
        "🌱",
        "Earned 100 Green Credits",
    ),
    BadgeDefinition(
        BadgeKey.WASTE_HUNTER,
        BadgeMetric.REPORTS,
        5,
        "Waste Hunter",
        "🔍",
        "Submitted 5 waste reports",
    ),
    BadgeDefinition(
        BadgeKey.GPS_MASTER,
        BadgeMetric.GPS_REPORTS,
        10,
        "GPS Master",
        "📍",
        "10 reports with GPS location",
    ),
    BadgeDefinition(
        BadgeKey.CITY_GUARDIAN,
        BadgeMetric.CREDITS,
        500,
        "City Guardian",
        "🏆",
        "Earned 500 Green Credits",
    ),
    BadgeDefinition(
        BadgeKey.GREEN_CHAMPION,
        BadgeMetric.CREDITS,
        1000,
        "Green Champion",
        "👑",
        "Earned 1000 Green Credits",
    ),
    BadgeDefinition(
        BadgeKey.STREAK_MASTER,
        BadgeMetric.STREAK,
        30,
        "Streak Master",
        "⚡",
        "30-day activity streak",
    ),
)

BADGES_BY_KEY: dict[BadgeKey, BadgeDefinition] = {badge.key: badge for badge in BADGE_CATALOG}
