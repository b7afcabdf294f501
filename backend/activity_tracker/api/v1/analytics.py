"""Analytics API: weekly/monthly reports with period-over-period comparison, heatmap feed and calendar grid."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.api.deps import get_now
from activity_tracker.config import settings
from activity_tracker.db.session import get_db
from activity_tracker.schemas.analytics import CalendarResponse, HeatmapEntry, PeriodReportResponse
from activity_tracker.services.periods import PeriodKind
from activity_tracker.services.reports import build_calendar, build_period_report, heatmap_feed

router = APIRouter(prefix="/analytics", tags=["analytics"])

MAX_OFFSET = 520


@router.get(
    "/weekly",
    response_model=PeriodReportResponse,
    summary="Weekly report (Sunday-Saturday) vs previous week",
)
async def get_weekly(
    session: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
    offset: int = Query(default=0, ge=0, le=MAX_OFFSET, description="Weeks back from the current one"),
) -> PeriodReportResponse:
    return await build_period_report(session, PeriodKind.week, now, offset)


@router.get(
    "/monthly",
    response_model=PeriodReportResponse,
    summary="Monthly report vs previous month",
)
async def get_monthly(
    session: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
    offset: int = Query(default=0, ge=0, le=MAX_OFFSET, description="Months back from the current one"),
) -> PeriodReportResponse:
    return await build_period_report(session, PeriodKind.month, now, offset)


@router.get(
    "/heatmap",
    response_model=list[HeatmapEntry],
    summary="Per-day wake category and study minutes for the trailing window",
)
async def get_heatmap(
    session: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
) -> list[HeatmapEntry]:
    """Only logged days are returned; the client fills the rest of the window as empty."""
    return await heatmap_feed(session, now.date(), settings.heatmap_days)


@router.get(
    "/calendar",
    response_model=CalendarResponse,
    summary="Trailing window as month blocks of 7-day week rows",
)
async def get_calendar(
    session: Annotated[AsyncSession, Depends(get_db)],
    now: Annotated[datetime, Depends(get_now)],
) -> CalendarResponse:
    return await build_calendar(session, now.date(), settings.heatmap_days)
