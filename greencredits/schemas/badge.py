"""Badge schemas."""

from datetime import datetime

from pydantic import BaseModel

from greencredits.catalog import BadgeKey, BadgeMetric


class Badge(BaseModel):
    """A badge owned by one user."""

    id: str
    user_id: str
    key: BadgeKey
    name: str
    icon: str
    description: str
    earned_at: datetime


class BadgeProgress(BaseModel):
    """Progress toward a badge the user has not earned yet."""

    key: BadgeKey
    name: str
    icon: str
    description: str
    metric: BadgeMetric
    progress: int
    target: int
    percentage: float


class BadgeCatalogEntry(BaseModel):
    """Public description of a catalog badge."""

    key: BadgeKey
    name: str
    icon: str
    description: str
    metric: BadgeMetric
    threshold: int
