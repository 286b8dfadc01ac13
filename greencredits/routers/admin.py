"""Municipal admin endpoints for report triage."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from greencredits.catalog import ReportStatus
from greencredits.dependencies import Identity, get_current_admin, get_store
from greencredits.schemas.ledger import MultiplierRequest
from greencredits.schemas.report import StatusUpdateRequest
from greencredits.services.award_service import AwardService
from greencredits.services.common import Store
from greencredits.services.ledger_service import LedgerService
from greencredits.services.report_service import ReportService
from greencredits.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/reports")
def list_reports(
    status: ReportStatus | None = Query(default=None),
    admin: Identity = Depends(get_current_admin),
    store: Store = Depends(get_store),
) -> dict:
    """Return every report newest first, optionally for one status."""
    return {"reports": ReportService(store).list_all(status=status)}


@router.post("/reports/{report_id}/status")
def update_report_status(
    report_id: int,
    payload: StatusUpdateRequest,
    admin: Identity = Depends(get_current_admin),
    store: Store = Depends(get_store),
) -> dict:
    """Change a report's status and award the reporter for real transitions."""
    report, old_status = ReportService(store).update_status(
        report_id,
        payload.status,
        disposal_method=payload.disposal_method,
    )
    credits = AwardService(store).on_status_transition(report, old_status, report.status)
    logger.info("Admin %s moved report %s to %s", admin.id, report_id, report.status.value)
    return {"report": report, "credits": credits}


@router.get("/stats")
def get_report_stats(
    admin: Identity = Depends(get_current_admin),
    store: Store = Depends(get_store),
) -> dict:
    """Return report counts per status."""
    counts = ReportService(store).status_counts()
    return {"stats": {"total": sum(counts.values()), "by_status": counts}}


@router.put("/users/{user_id}/multiplier")
def set_user_multiplier(
    user_id: str,
    payload: MultiplierRequest,
    admin: Identity = Depends(get_current_admin),
    store: Store = Depends(get_store),
) -> dict:
    """Set the factor applied to every future award for a user."""
    UserService(store).get_user(user_id)
    account = LedgerService(store).set_multiplier(user_id, payload.multiplier)
    logger.info("Admin %s set multiplier %s for user %s", admin.id, payload.multiplier, user_id)
    return {"credits": account.model_dump(exclude={"id"})}
