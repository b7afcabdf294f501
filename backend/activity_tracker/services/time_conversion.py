"""Wake time helpers: "HH:MM" <-> minutes since midnight, and the wake category buckets."""

import enum
import math
import re

_WAKE_TIME_RE = re.compile(r"([0-9]{1,2}):([0-9]{2})")  # ASCII digits only, no surrounding whitespace

EARLY_BEFORE_MINUTES = 5 * 60  # before 05:00
GOOD_BEFORE_MINUTES = 7 * 60   # 05:00-06:59


class FormatError(ValueError):
    """Wake time is not "HH:MM" or has out-of-range components."""


class WakeCategory(str, enum.Enum):
    early = "early"
    good = "good"
    late = "late"


def wake_time_to_minutes(value: str) -> int:
    """Parse "HH:MM" (24-hour) into minutes since midnight. Raises FormatError."""
    if not isinstance(value, str):
        raise FormatError(f"Wake time must be a string in HH:MM format, got {type(value).__name__}")
    m = _WAKE_TIME_RE.fullmatch(value)
    if not m:
        raise FormatError(f"Wake time must be in HH:MM format, got {value!r}")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if not 0 <= hours <= 23:
        raise FormatError(f"Wake time hours must be 0-23, got {hours}")
    if not 0 <= minutes <= 59:
        raise FormatError(f"Wake time minutes must be 0-59, got {minutes}")
    return hours * 60 + minutes


def minutes_to_wake_time(total_minutes: float) -> str:
    """Format minutes since midnight as zero-padded "HH:MM".

    Accepts fractional minutes (e.g. a mean); rounds half-up to the nearest
    whole minute before splitting, so 419.6 becomes "07:00", not "06:60".
    """
    rounded = math.floor(total_minutes + 0.5)
    hours, minutes = divmod(rounded, 60)
    return f"{hours:02d}:{minutes:02d}"


def wake_category(wake_time: str) -> WakeCategory:
    """Bucket a wake time for heatmap coloring: early < 05:00 <= good < 07:00 <= late."""
    minutes = wake_time_to_minutes(wake_time)
    if minutes < EARLY_BEFORE_MINUTES:
        return WakeCategory.early
    if minutes < GOOD_BEFORE_MINUTES:
        return WakeCategory.good
    return WakeCategory.late
