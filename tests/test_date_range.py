"""Tests for director_os.services.date_range."""

from datetime import date

import pytest

from director_os.services.date_range import filter_metrics, resolve_date_range

TODAY = date(2024, 5, 16)  # a Thursday in Q2


@pytest.mark.parametrize("option,start,end", [
    ("WEEK", "2024-05-13", "2024-05-16"),
    ("MONTH", "2024-05-01", "2024-05-16"),
    ("QUARTER", "2024-04-01", "2024-05-16"),
    ("YEAR", "2024-01-01", "2024-12-31"),
    ("ALL", "2000-01-01", "2024-05-16"),
])
def test_resolved_bounds(option, start, end):
    rng = resolve_date_range(option, today=TODAY)
    assert (rng.start_date, rng.end_date) == (start, end)


def test_year_label():
    assert resolve_date_range("YEAR", today=TODAY).label == "2024 full year"


def test_option_is_case_insensitive():
    assert resolve_date_range("month", today=TODAY).option == "MONTH"


def test_monday_week_starts_today():
    rng = resolve_date_range("WEEK", today=date(2024, 5, 13))
    assert rng.start_date == rng.end_date == "2024-05-13"


def test_custom_range_and_swap():
    rng = resolve_date_range("CUSTOM", custom_start="2023-11-30", custom_end="2023-10-01")
    assert (rng.start_date, rng.end_date) == ("2023-10-01", "2023-11-30")


@pytest.mark.parametrize("kwargs", [
    {"option": "DECADE"},
    {"option": "CUSTOM", "custom_start": "2023-10-01"},
    {"option": "CUSTOM", "custom_start": "bad", "custom_end": "2023-10-01"},
])
def test_invalid_ranges(kwargs):
    with pytest.raises(ValueError):
        resolve_date_range(**kwargs)


def test_filter_is_inclusive():
    metrics = [{"reportWeek": w} for w in ("2023-09-30", "2023-10-01", "2023-10-31", "2023-11-01")]
    rng = resolve_date_range("CUSTOM", custom_start="2023-10-01", custom_end="2023-10-31")
    assert [m["reportWeek"] for m in filter_metrics(metrics, rng)] == ["2023-10-01", "2023-10-31"]


def test_to_dict():
    data = resolve_date_range("ALL", today=TODAY).to_dict()
    assert data == {"option": "ALL", "startDate": "2000-01-01", "endDate": "2024-05-16", "label": "All time"}
