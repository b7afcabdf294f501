"""Pydantic schemas for analytics: period stats, comparisons, heatmap feed and calendar grid."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from activity_tracker.services.time_conversion import WakeCategory


class PeriodStats(BaseModel):
    """Aggregates over the days logged in one period. Zero values when nothing was logged."""

    avg_wake_time: str | None = None  # "HH:MM"
    total_study_hours: float = 0
    total_days: int = 0
    avg_study_hours_per_day: float = 0


class PeriodReport(PeriodStats):
    start_date: datetime
    end_date: datetime


class WakeTimeComparison(BaseModel):
    diff_minutes: int  # positive = current period wakes earlier
    improved: bool


class StudyHoursComparison(BaseModel):
    diff_hours: float
    improved: bool


class Comparison(BaseModel):
    wake_time: WakeTimeComparison | None = None
    study_hours: StudyHoursComparison | None = None


class PeriodReportResponse(BaseModel):
    """Weekly or monthly report: current vs previous period."""

    period: str  # week | month
    current: PeriodReport
    previous: PeriodReport
    comparison: Comparison


class HeatmapEntry(BaseModel):
    """Flat per-day summary used to color the calendar."""

    date: date
    wake_time: str
    wake_category: WakeCategory
    study_minutes: int


class HeatmapDay(BaseModel):
    """Real (non-placeholder) calendar cell."""

    date: date
    day_of_week: int = Field(ge=0, le=6)  # Sunday=0
    activity: HeatmapEntry | None = None


class MonthBlock(BaseModel):
    month_key: str  # "YYYY-MM"
    display_name: str  # short month name, e.g. "Mar"
    weeks: list[list[HeatmapDay | None]]  # each row has 7 cells; None = placeholder


class CalendarResponse(BaseModel):
    from_date: date
    to_date: date
    months: list[MonthBlock]
