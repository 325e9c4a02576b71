"""
Global date filter for dashboard views.

The dashboard narrows every metric view to one DateRange. Ranges are resolved
relative to "today" (injectable for tests) and compared as ISO strings, which
order the same way as the dates they encode.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from director_os.utils.helpers import iso_week

DATE_RANGE_OPTIONS = ("WEEK", "MONTH", "QUARTER", "YEAR", "ALL", "CUSTOM")

_LABELS = {
    "WEEK": "This week",
    "MONTH": "This month",
    "QUARTER": "This quarter",
    "ALL": "All time",
    "CUSTOM": "Custom range",
}

ALL_TIME_START = "2000-01-01"


@dataclass(frozen=True)
class DateRange:
    option: str
    start_date: str
    end_date: str
    label: str

    def contains(self, report_week: str) -> bool:
        return self.start_date <= report_week <= self.end_date

    def to_dict(self) -> dict:
        return {
            "option": self.option,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "label": self.label,
        }


def resolve_date_range(option, today=None, custom_start=None, custom_end=None) -> DateRange:
    """Resolve a filter option to concrete inclusive start/end dates.

    WEEK starts on the Monday of the current week, MONTH and QUARTER on their
    first day; all three end today. YEAR spans the whole calendar year. ALL
    starts at 2000-01-01. CUSTOM uses the given bounds.

    Raises:
        ValueError: unknown option, or CUSTOM without valid bounds.
    """
    option = (option or "").upper()
    if option not in DATE_RANGE_OPTIONS:
        raise ValueError(f"Unknown date range option: {option!r}")

    today = today or date.today()
    end = today.isoformat()

    if option == "WEEK":
        start = (today - timedelta(days=today.weekday())).isoformat()
    elif option == "MONTH":
        start = today.replace(day=1).isoformat()
    elif option == "QUARTER":
        first_month = (today.month - 1) // 3 * 3 + 1
        start = date(today.year, first_month, 1).isoformat()
    elif option == "YEAR":
        start = date(today.year, 1, 1).isoformat()
        end = date(today.year, 12, 31).isoformat()
        return DateRange(option, start, end, f"{today.year} full year")
    elif option == "ALL":
        start = ALL_TIME_START
    else:
        start, end = iso_week(custom_start), iso_week(custom_end)
        if not start or not end:
            raise ValueError("CUSTOM date range needs valid start and end dates")
        if start > end:
            start, end = end, start

    return DateRange(option, start, end, _LABELS[option])


def filter_metrics(metrics: list[dict], date_range: DateRange) -> list[dict]:
    """Keep metrics whose reportWeek falls inside the range (inclusive)."""
    return [m for m in metrics if date_range.contains(m["reportWeek"])]
