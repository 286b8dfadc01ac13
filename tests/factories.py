"""Shared builders for test data."""

from __future__ import annotations

from datetime import datetime

from greencredits.catalog import ReportStatus
from greencredits.schemas.report import Report
from greencredits.utils.time import now_utc


def auth_headers(
    user_id: str = "user-1",
    name: str = "Asha",
    email: str | None = "asha@example.com",
    role: str | None = None,
) -> dict[str, str]:
    """Build the identity headers the auth gateway forwards."""
    headers = {"X-User-Id": user_id, "X-User-Name": name}
    if email:
        headers["X-User-Email"] = email
    if role:
        headers["X-User-Role"] = role
    return headers


def make_report(
    report_id: int = 1,
    user_id: str = "user-1",
    description: str = "Overflowing garbage bins near the park",
    address: str | None = "12 Market Street",
    lat: float | None = 12.97,
    lng: float | None = 77.59,
    photo_url: str | None = "/uploads/bins.jpg",
    status: ReportStatus = ReportStatus.PENDING,
    created_at: datetime | None = None,
) -> Report:
    """Return an unsaved report with sensible defaults."""
    created = created_at or now_utc()
    return Report(
        id=report_id,
        user_id=user_id,
        description=description,
        address=address,
        lat=lat,
        lng=lng,
        photo_url=photo_url,
        status=status,
        created_at=created,
        updated_at=created,
    )
