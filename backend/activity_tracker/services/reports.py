"""Report assembly: period stats + comparison, and the heatmap feed/calendar, read from the store."""

import logging
from datetime import date, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.schemas.analytics import (
    CalendarResponse,
    HeatmapEntry,
    PeriodReport,
    PeriodReportResponse,
)
from activity_tracker.services.activity_store import find_by_date_range
from activity_tracker.services.comparison import compare_periods
from activity_tracker.services.heatmap import (
    DEFAULT_WINDOW_DAYS,
    build_heatmap_grid,
    heatmap_entry,
    window_bounds,
)
from activity_tracker.services.periods import DateRange, PeriodKind, resolve_period
from activity_tracker.services.stats import compute_period_stats

logger = logging.getLogger(__name__)


async def _period_report(session: AsyncSession, period: DateRange) -> PeriodReport:
    records = await find_by_date_range(session, period.first_day, period.last_day)
    stats = compute_period_stats(records)
    return PeriodReport(**stats.model_dump(), start_date=period.start_date, end_date=period.end_date)


async def build_period_report(
    session: AsyncSession,
    kind: PeriodKind | str,
    now: datetime,
    offset: int = 0,
) -> PeriodReportResponse:
    """Stats for the period `offset` back from now, the one before it, and their comparison."""
    kind = PeriodKind(kind)
    current = await _period_report(session, resolve_period(kind, offset, now))
    previous = await _period_report(session, resolve_period(kind, offset + 1, now))
    logger.debug(
        "%s report offset=%d: %d days vs %d days", kind.value, offset, current.total_days, previous.total_days
    )
    return PeriodReportResponse(
        period=kind.value,
        current=current,
        previous=previous,
        comparison=compare_periods(current, previous),
    )


async def heatmap_feed(session: AsyncSession, today: date, days: int = DEFAULT_WINDOW_DAYS) -> list[HeatmapEntry]:
    """Flat per-day summaries for the trailing window, oldest first."""
    first, last = window_bounds(today, days)
    records = await find_by_date_range(session, first, last)
    return [heatmap_entry(r) for r in reversed(records)]


async def build_calendar(session: AsyncSession, today: date, days: int = DEFAULT_WINDOW_DAYS) -> CalendarResponse:
    first, last = window_bounds(today, days)
    entries = {e.date: e for e in await heatmap_feed(session, today, days)}
    return CalendarResponse(from_date=first, to_date=last, months=build_heatmap_grid(today, entries, days))
