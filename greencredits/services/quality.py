"""Heuristic completeness score for submitted reports."""

from __future__ import annotations

from greencredits.schemas.report import Report

ENVIRONMENT_KEYWORDS = (
    "waste",
    "garbage",
    "litter",
    "pollution",
    "dirty",
    "cleanup",
    "environment",
)

PHOTO_POINTS = 30
LOCATION_POINTS = 25
DESCRIPTION_POINTS = 20
ADDRESS_POINTS = 15
KEYWORD_POINTS = 10


def score_report(report: Report) -> int:
    """Return a 0-100 score rewarding photo, location, text detail and topical keywords."""
    score = 0
    if report.photo_url:
        score += PHOTO_POINTS
    if report.has_location:
        score += LOCATION_POINTS

    description = report.description or ""
    if len(description) > 10:
        score += DESCRIPTION_POINTS
    if report.address and len(report.address) > 5:
        score += ADDRESS_POINTS

    lowered = description.lower()
    if any(keyword in lowered for keyword in ENVIRONMENT_KEYWORDS):
        score += KEYWORD_POINTS

    return score
