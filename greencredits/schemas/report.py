"""Waste report schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from greencredits.catalog import DisposalMethod, ReportStatus


class Report(BaseModel):
    """A citizen waste report."""

    id: int
    user_id: str
    description: str = ""
    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    photo_url: str | None = None
    status: ReportStatus = ReportStatus.PENDING
    disposal_method: DisposalMethod | None = None
    quality_score: int = 0
    created_at: datetime
    updated_at: datetime

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None


class ReportCreateRequest(BaseModel):
    """Request body for submitting a report.

    The photo itself is stored by the upload collaborator; only its URL
    reaches this API.
    """

    description: str = ""
    address: str | None = None
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)
    photo_url: str | None = None


class StatusUpdateRequest(BaseModel):
    """Request body for an admin status change."""

    status: ReportStatus
    disposal_method: DisposalMethod | None = None
