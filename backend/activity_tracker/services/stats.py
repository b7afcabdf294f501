"""Period aggregates over daily activity records."""

from collections.abc import Iterable, Sequence

from activity_tracker.models.activity import Activity
from activity_tracker.models.study_session import StudySession
from activity_tracker.schemas.analytics import PeriodStats
from activity_tracker.services.time_conversion import minutes_to_wake_time, wake_time_to_minutes


def total_study_minutes(sessions: Iterable[StudySession]) -> int:
    """Derived total for a day: sum of its session durations."""
    return sum(s.duration for s in sessions)


def compute_period_stats(records: Sequence[Activity]) -> PeriodStats:
    """
    Aggregate records already restricted to one period.
    Average wake time is the mean in minutes, formatted only at the end.
    """
    if not records:
        return PeriodStats(avg_wake_time=None, total_study_hours=0, total_days=0, avg_study_hours_per_day=0)

    total_days = len(records)
    mean_wake = sum(wake_time_to_minutes(r.wake_time) for r in records) / total_days
    total_minutes = sum(r.total_study_minutes or 0 for r in records)
    total_hours = round(total_minutes / 60, 1)
    return PeriodStats(
        avg_wake_time=minutes_to_wake_time(mean_wake),
        total_study_hours=total_hours,
        total_days=total_days,
        avg_study_hours_per_day=round(total_hours / total_days, 1),
    )
