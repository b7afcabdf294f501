from activity_tracker.models.activity import Activity
from activity_tracker.models.study_session import StudySession

__all__ = [
    "Activity",
    "StudySession",
]
