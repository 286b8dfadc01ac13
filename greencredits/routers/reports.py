"""Citizen report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from greencredits.dependencies import Identity, get_current_user, get_store
from greencredits.schemas.report import ReportCreateRequest
from greencredits.services.award_service import AwardService
from greencredits.services.common import Store
from greencredits.services.report_service import ReportService

router = APIRouter()


@router.post("")
def submit_report(
    payload: ReportCreateRequest,
    user: Identity = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> dict:
    """Store a report and award the submission credits."""
    report = ReportService(store).create(user_id=user.id, payload=payload)
    credits = AwardService(store).on_report_submitted(report)
    return {"report": report, "credits": credits}


@router.get("/mine")
def list_my_reports(
    user: Identity = Depends(get_current_user),
    store: Store = Depends(get_store),
) -> dict:
    """Return the caller's reports, newest first."""
    return {"reports": ReportService(store).list_for_user(user.id)}
