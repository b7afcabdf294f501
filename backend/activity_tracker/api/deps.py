"""FastAPI dependencies: reference clock."""

from datetime import datetime
from zoneinfo import ZoneInfo

from activity_tracker.config import settings


def get_now() -> datetime:
    """Current instant in the configured timezone. Overridden in tests to pin period boundaries."""
    return datetime.now(ZoneInfo(settings.timezone))
