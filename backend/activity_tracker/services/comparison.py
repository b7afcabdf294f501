"""Current-vs-previous period deltas."""

from activity_tracker.schemas.analytics import (
    Comparison,
    PeriodStats,
    StudyHoursComparison,
    WakeTimeComparison,
)
from activity_tracker.services.time_conversion import wake_time_to_minutes


def compare_periods(current: PeriodStats, previous: PeriodStats) -> Comparison:
    """
    Wake time: only when both periods have an average; earlier is better.
    Study hours: only when the previous period has hours > 0, so a zero
    baseline never reports an improvement.
    """
    comparison = Comparison()

    if current.avg_wake_time and previous.avg_wake_time:
        current_min = wake_time_to_minutes(current.avg_wake_time)
        previous_min = wake_time_to_minutes(previous.avg_wake_time)
        comparison.wake_time = WakeTimeComparison(
            diff_minutes=previous_min - current_min,
            improved=current_min < previous_min,
        )

    if previous.total_study_hours > 0:
        diff = round(current.total_study_hours - previous.total_study_hours, 1)
        comparison.study_hours = StudyHoursComparison(diff_hours=diff, improved=diff > 0)

    return comparison
