"""Report quality scorer tests."""

from __future__ import annotations

import pytest
from factories import make_report

from greencredits.services.quality import score_report


def test_complete_report_scores_full_marks() -> None:
    """Photo, GPS, detailed text, address and a keyword add up to 100."""
    report = make_report(description="Garbage pile 15c", address="10 charsss")
    assert score_report(report) == 100


def test_empty_report_scores_zero() -> None:
    """A bare report earns nothing."""
    report = make_report(description="", address=None, lat=None, lng=None, photo_url=None)
    assert score_report(report) == 0


def test_location_needs_both_coordinates() -> None:
    """A single coordinate does not count as a location."""
    with_lat_only = make_report(lat=12.9, lng=None)
    with_both = make_report()
    assert score_report(with_both) - score_report(with_lat_only) == 25


def test_zero_coordinates_still_count_as_location() -> None:
    """Equator/meridian coordinates are valid locations."""
    report = make_report(description="", address=None, photo_url=None, lat=0.0, lng=0.0)
    assert score_report(report) == 25


def test_keyword_match_is_case_insensitive_substring() -> None:
    """Keywords match anywhere in the description regardless of case."""
    report = make_report(description="LITTERING", address=None, lat=None, lng=None, photo_url=None)
    assert score_report(report) == 10


@pytest.mark.parametrize(
    ("description", "address", "expected"),
    [
        ("short", "short", 0),
        ("exactly 10", "12345", 0),
        ("eleven char", "123456", 35),
    ],
)
def test_length_thresholds_are_strict(description: str, address: str, expected: int) -> None:
    """Description must exceed 10 characters and address 5."""
    report = make_report(
        description=description, address=address, lat=None, lng=None, photo_url=None
    )
    assert score_report(report) == expected


def test_score_is_deterministic() -> None:
    """Repeated scoring of the same report is stable."""
    report = make_report()
    assert {score_report(report) for _ in range(5)} == {score_report(report)}
