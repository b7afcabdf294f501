"""
Activity calendar: trailing window of days laid out as month blocks of Sunday-first week rows.

Rows never span two months. The first row of each month is left-padded with
placeholders (None) up to the first day's weekday; the last row of each month,
and of the window, is right-padded to 7 cells.
"""

import calendar
from collections.abc import Mapping
from datetime import date, timedelta

from activity_tracker.models.activity import Activity
from activity_tracker.schemas.analytics import HeatmapDay, HeatmapEntry, MonthBlock
from activity_tracker.services.time_conversion import wake_category

DEFAULT_WINDOW_DAYS = 365
DAYS_PER_WEEK = 7


def day_of_week(d: date) -> int:
    """Sunday=0 .. Saturday=6."""
    return (d.weekday() + 1) % 7


def window_bounds(today: date, days: int = DEFAULT_WINDOW_DAYS) -> tuple[date, date]:
    """First and last day of the trailing window ending today (inclusive)."""
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    return today - timedelta(days=days - 1), today


def heatmap_entry(record: Activity) -> HeatmapEntry:
    return HeatmapEntry(
        date=record.date,
        wake_time=record.wake_time,
        wake_category=wake_category(record.wake_time),
        study_minutes=record.total_study_minutes or 0,
    )


def _pad(week: list[HeatmapDay | None]) -> list[HeatmapDay | None]:
    return week + [None] * (DAYS_PER_WEEK - len(week))


def build_heatmap_grid(
    today: date,
    entries: Mapping[date, HeatmapEntry],
    days: int = DEFAULT_WINDOW_DAYS,
) -> list[MonthBlock]:
    """Build chronological month blocks for the window ending `today`. Missing dates get activity=None."""
    first, _ = window_bounds(today, days)
    months: list[MonthBlock] = []
    block: MonthBlock | None = None
    week: list[HeatmapDay | None] = []

    for i in range(days):
        d = first + timedelta(days=i)
        key = f"{d.year:04d}-{d.month:02d}"
        dow = day_of_week(d)

        if block is None or block.month_key != key:
            if block is not None and week:
                block.weeks.append(_pad(week))
            block = MonthBlock(month_key=key, display_name=calendar.month_abbr[d.month], weeks=[])
            months.append(block)
            week = [None] * dow

        week.append(HeatmapDay(date=d, day_of_week=dow, activity=entries.get(d)))
        if len(week) == DAYS_PER_WEEK:
            block.weeks.append(week)
            week = []

    if block is not None and week:
        block.weeks.append(_pad(week))
    return months
