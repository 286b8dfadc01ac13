"""Waste report storage and status changes."""

from __future__ import annotations

import logging

from greencredits.catalog import DisposalMethod, ReportStatus
from greencredits.schemas.report import Report, ReportCreateRequest
from greencredits.services.common import Store
from greencredits.services.quality import score_report
from greencredits.utils.errors import InvalidInputError, NotFoundError
from greencredits.utils.time import now_utc

logger = logging.getLogger(__name__)

REPORTS_TABLE = "reports"


class ReportService:
    """Create, list and triage citizen reports."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def _save(self, report: Report) -> Report:
        return Report.model_validate(self.store.put(REPORTS_TABLE, report.model_dump(mode="json")))

    def create(self, user_id: str, payload: ReportCreateRequest) -> Report:
        """Store a new Pending report with its quality score."""
        now = now_utc()
        report = Report(
            id=self.store.next_id(REPORTS_TABLE),
            user_id=user_id,
            description=(payload.description or "").strip(),
            address=payload.address.strip() if payload.address else None,
            lat=payload.lat,
            lng=payload.lng,
            photo_url=payload.photo_url,
            created_at=now,
            updated_at=now,
        )
        report.quality_score = score_report(report)
        return self._save(report)

    def get(self, report_id: int) -> Report:
        """Return one report or raise NotFoundError."""
        row = self.store.get(REPORTS_TABLE, report_id)
        if row is None:
            raise NotFoundError("Report")
        return Report.model_validate(row)

    def list_for_user(self, user_id: str) -> list[Report]:
        """Return the user's reports newest first."""
        rows = self.store.scan(
            REPORTS_TABLE,
            filters={"user_id": user_id},
            order_by="id",
            descending=True,
        )
        return [Report.model_validate(row) for row in rows]

    def list_all(self, status: ReportStatus | None = None) -> list[Report]:
        """Return every report newest first, optionally for one status."""
        filters = {"status": status.value} if status else None
        rows = self.store.scan(REPORTS_TABLE, filters=filters, order_by="id", descending=True)
        return [Report.model_validate(row) for row in rows]

    def update_status(
        self,
        report_id: int,
        status: ReportStatus,
        disposal_method: DisposalMethod | None = None,
    ) -> tuple[Report, ReportStatus]:
        """Persist a status change and return the report with its previous status."""
        if disposal_method is not None and not status.is_terminal:
            raise InvalidInputError("A disposal method can only be set on a resolved report")

        report = self.get(report_id)
        old_status = report.status
        updated = report.model_copy(
            update={
                "status": status,
                "disposal_method": (
                    disposal_method or report.disposal_method if status.is_terminal else None
                ),
                "updated_at": now_utc(),
            }
        )
        saved = self._save(updated)
        logger.info(
            "Report %s status %s -> %s",
            report_id,
            old_status.value,
            status.value,
        )
        return saved, old_status

    def status_counts(self) -> dict[str, int]:
        """Return how many reports sit in each status."""
        return {
            status.value: self.store.count(REPORTS_TABLE, {"status": status.value})
            for status in ReportStatus
        }
