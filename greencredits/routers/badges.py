"""Badge catalog endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from greencredits.catalog import BADGE_CATALOG
from greencredits.schemas.badge import BadgeCatalogEntry

router = APIRouter()


@router.get("/catalog")
def get_badge_catalog() -> dict:
    """Return every badge with the threshold that unlocks it."""
    catalog = [
        BadgeCatalogEntry(
            key=badge.key,
            name=badge.name,
            icon=badge.icon,
            description=badge.description,
            metric=badge.metric,
            threshold=badge.threshold,
        )
        for badge in BADGE_CATALOG
    ]
    return {"badges": catalog}
